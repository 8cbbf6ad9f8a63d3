"""
Child process lifecycle: spawn with captured output, wait for readiness, kill.
"""

from .process import ProcessHandle
from .readiness import ReadinessWatcher, first_match

__all__ = ["ProcessHandle", "ReadinessWatcher", "first_match"]
