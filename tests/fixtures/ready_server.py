"""
Child program for process tests.

Prints the requested lines to stdout/stderr (in argument order), flushing
after each one, then idles so the parent can observe and kill it.

Usage:
    ready_server.py [--delay SECS] [--line TEXT]... [--err TEXT]... [--linger SECS] [--exit-code N]
"""

import argparse
import sys
import time


def main() -> int:
    parser = argparse.ArgumentParser()
    parser.add_argument("--delay", type=float, default=0.0)
    parser.add_argument("--line", dest="out", action="append", default=[])
    parser.add_argument("--err", dest="out", action="append", type=lambda s: ("err", s))
    parser.add_argument("--linger", type=float, default=60.0)
    parser.add_argument("--exit-code", type=int, default=0)
    args = parser.parse_args()

    for item in args.out:
        if args.delay:
            time.sleep(args.delay)
        stream, text = item if isinstance(item, tuple) else ("out", item)
        target = sys.stderr if stream == "err" else sys.stdout
        print(text, file=target, flush=True)

    time.sleep(args.linger)
    return args.exit_code


if __name__ == "__main__":
    sys.exit(main())
