#!/usr/bin/env python3
"""
Start a child process and wait until it reports readiness.

This example demonstrates:
- Building a Config in memory (or from YAML with Config("etc/procinfra.yaml"))
- Starting a child with its stdout/stderr captured in '<log_dir>/<exe>.log'
- Blocking until a readiness line shows up in that log file
- Killing the child when done (the with-block also reaps it)

Usage:
    python wait_for_server.py
    PROCINFRA_LOG_DIR=/tmp/elsewhere python wait_for_server.py
    python wait_for_server.py -l trace      # Show every poll
"""

import argparse
import pathlib
import sys
import tempfile

# Add the project root to the path
project_root = str(pathlib.Path(__file__).resolve().parents[2])
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from procinfra import Config, InfraError, ProcessHandle
from procinfra.log import create_lg

# Stand-in server: prints a few startup lines, then idles
SERVER = (
    "import time\n"
    "for step in ('loading config', 'opening store', 'listening on port 9000'):\n"
    "    time.sleep(0.5)\n"
    "    print(step, flush=True)\n"
    "time.sleep(60)\n"
)


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("-l", "--log-level", default="debug")
    args = parser.parse_args()

    lg = create_lg(args.log_level, name="/example")
    log_dir = tempfile.mkdtemp(prefix="procinfra-example-")
    config = Config(
        data={"log": {"dir": log_dir}, "readiness": {"timeout": 10, "interval": 0.25}}
    )

    try:
        with ProcessHandle.start(config, [sys.executable, "-c", SERVER], lg=lg) as proc:
            proc.wait_ready("listening on port")
            lg.info("server is ready", extra={"pid": proc.pid, "log_file": proc.log_file})
            proc.stop()
    except InfraError as e:
        lg.error(f"server failed: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
