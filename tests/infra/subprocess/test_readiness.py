"""
Tests for readiness detection.

Tests key watcher features including:
- Substring matching semantics of first_match
- Deadline handling inside a single scan
- Polling loop timing (fixed interval, monotonic deadline)
- Rescanning a growing file
- I/O failures surfacing immediately
"""

from pathlib import Path
from unittest.mock import Mock, patch

import pytest

from procinfra.exceptions import ReadinessIOError, ReadinessTimeoutError
from procinfra.subprocess.readiness import ReadinessWatcher, first_match


class FakeClock:
    """Stand-in for the time module: sleep() advances monotonic()."""

    def __init__(self, on_sleep=None):
        self.now = 1000.0
        self.sleeps: list[float] = []
        self._on_sleep = on_sleep

    def monotonic(self) -> float:
        return self.now

    def sleep(self, secs: float) -> None:
        self.sleeps.append(secs)
        self.now += secs
        if self._on_sleep:
            self._on_sleep(len(self.sleeps))


@pytest.fixture
def log_file(tmp_path: Path) -> Path:
    path = tmp_path / "server.log"
    path.write_text("booting\nloading modules\n")
    return path


# =============================================================================
# Test first_match
# =============================================================================


@pytest.mark.unit
class TestFirstMatch:
    """Test the line matcher."""

    def test_returns_first_matching_line(self):
        lines = ["a\n", "listening on port 9000\n", "listening on port 9001\n"]
        assert first_match(lines, "listening") == "listening on port 9000"

    def test_matches_anywhere_in_line(self):
        assert first_match(["[info] server ready now\n"], "ready") == "[info] server ready now"

    def test_is_case_sensitive(self):
        assert first_match(["Server READY\n"], "ready") is None

    def test_is_not_a_regex(self):
        assert first_match(["port 9000\n"], "port \\d+") is None
        assert first_match(["value a.b\n"], "a.b") == "value a.b"
        assert first_match(["valueaxb\n"], "a.b") is None

    def test_no_match_returns_none(self):
        assert first_match(["one\n", "two\n"], "three") is None

    def test_empty_input(self):
        assert first_match([], "anything") is None

    def test_partial_last_line_without_newline(self):
        assert first_match(["first\n", "listening on"], "listening on") == "listening on"

    def test_deadline_abandons_scan(self):
        clock = Mock()
        clock.monotonic.side_effect = [0.0, 1.0, 10.0, 11.0]
        with patch("procinfra.subprocess.readiness.time", clock):
            result = first_match(["a\n", "b\n", "ready\n"], "ready", deadline=5.0)
        assert result is None

    def test_deadline_not_reached(self):
        clock = Mock()
        clock.monotonic.return_value = 0.0
        with patch("procinfra.subprocess.readiness.time", clock):
            result = first_match(["a\n", "ready\n"], "ready", deadline=5.0)
        assert result == "ready"


# =============================================================================
# Test ReadinessWatcher Initialization
# =============================================================================


@pytest.mark.unit
class TestReadinessWatcherInit:
    """Test ReadinessWatcher initialization."""

    def test_defaults(self, log_file):
        watcher = ReadinessWatcher(log_file)
        assert watcher.timeout == 30.0
        assert watcher.interval == 2.0
        assert watcher.log_file == log_file

    @pytest.mark.parametrize("timeout,interval", [(0, 1), (-1, 1), (1, 0), (1, -0.5)])
    def test_rejects_non_positive_settings(self, log_file, timeout, interval):
        with pytest.raises(ValueError):
            ReadinessWatcher(log_file, timeout=timeout, interval=interval)

    def test_rejects_empty_pattern(self, log_file):
        with pytest.raises(ValueError, match="must not be empty"):
            ReadinessWatcher(log_file).wait("")


# =============================================================================
# Test ReadinessWatcher.wait()
# =============================================================================


@pytest.mark.unit
class TestReadinessWatcherWait:
    """Test the polling loop."""

    def test_immediate_match_does_not_sleep(self, log_file):
        clock = FakeClock()
        with patch("procinfra.subprocess.readiness.time", clock):
            line = ReadinessWatcher(log_file).wait("loading")
        assert line == "loading modules"
        assert clock.sleeps == []

    def test_timeout_after_default_deadline(self, log_file):
        clock = FakeClock()
        start = clock.now
        with patch("procinfra.subprocess.readiness.time", clock):
            with pytest.raises(ReadinessTimeoutError) as exc_info:
                ReadinessWatcher(log_file).wait("never printed")

        elapsed = clock.now - start
        assert elapsed >= 30.0
        assert elapsed <= 30.0 + 2.0
        assert set(clock.sleeps) == {2.0}
        assert len(clock.sleeps) == 15
        assert exc_info.value.context["pattern"] == "never printed"
        assert exc_info.value.context["timeout"] == 30.0

    def test_overshoot_bounded_by_one_interval(self, log_file):
        clock = FakeClock()
        start = clock.now
        with patch("procinfra.subprocess.readiness.time", clock):
            with pytest.raises(ReadinessTimeoutError):
                ReadinessWatcher(log_file, timeout=5.0, interval=2.0).wait("never")

        elapsed = clock.now - start
        assert 5.0 <= elapsed <= 7.0

    def test_growing_file_is_rescanned(self, log_file):
        def append_lines(n_sleeps):
            if n_sleeps == 1:
                with open(log_file, "a") as f:
                    for i in range(11, 50):
                        f.write(f"line {i}\n")
                    f.write("line 50: listening on port 9000\n")

        with open(log_file, "w") as f:
            for i in range(1, 11):
                f.write(f"line {i}\n")

        clock = FakeClock(on_sleep=append_lines)
        with patch("procinfra.subprocess.readiness.time", clock):
            line = ReadinessWatcher(log_file, timeout=30.0, interval=2.0).wait(
                "listening on port"
            )

        assert line == "line 50: listening on port 9000"
        assert clock.sleeps == [2.0]

    def test_context_is_attached_to_timeout_error(self, log_file):
        clock = FakeClock()
        with patch("procinfra.subprocess.readiness.time", clock):
            with pytest.raises(ReadinessTimeoutError) as exc_info:
                ReadinessWatcher(
                    log_file, timeout=1.0, interval=0.5, context={"cmd": "etcd"}
                ).wait("ready")
        assert exc_info.value.context["cmd"] == "etcd"
        assert "cmd=etcd" in str(exc_info.value)

    def test_logs_match_through_given_logger(self, log_file):
        lg = Mock()
        ReadinessWatcher(log_file, lg=lg).wait("booting")
        messages = [c.args[0] for c in lg.debug.call_args_list]
        assert "found readiness pattern" in messages
        extra = lg.debug.call_args_list[-1].kwargs["extra"]
        assert extra["line"] == "booting"
        assert extra["attempt"] == 1


# =============================================================================
# Test I/O Failures
# =============================================================================


@pytest.mark.unit
class TestReadinessIOErrors:
    """Test that I/O failures abort the wait immediately."""

    def test_missing_file_is_not_retried(self, tmp_path):
        clock = FakeClock()
        missing = tmp_path / "not-created.log"
        with patch("procinfra.subprocess.readiness.time", clock):
            with pytest.raises(ReadinessIOError) as exc_info:
                ReadinessWatcher(missing).wait("ready")

        assert clock.sleeps == []
        assert exc_info.value.context["log_file"] == missing
        assert isinstance(exc_info.value.__cause__, FileNotFoundError)

    def test_file_removed_between_polls(self, log_file):
        clock = FakeClock(on_sleep=lambda n: log_file.unlink())
        with patch("procinfra.subprocess.readiness.time", clock):
            with pytest.raises(ReadinessIOError):
                ReadinessWatcher(log_file).wait("never")
        assert clock.sleeps == [2.0]

    def test_directory_instead_of_file(self, tmp_path):
        with pytest.raises(ReadinessIOError):
            ReadinessWatcher(tmp_path).scan("ready")

    def test_undecodable_bytes_are_tolerated(self, tmp_path):
        path = tmp_path / "binary.log"
        path.write_bytes(b"\xff\xfe garbage\nserver ready\n")
        assert ReadinessWatcher(path).scan("server ready") == "server ready"

    def test_bare_carriage_return_does_not_split_line(self, tmp_path):
        path = tmp_path / "progress.log"
        path.write_bytes(b"fetch 10%\rfetch 100%\rdone\nserver ready\r\n")
        watcher = ReadinessWatcher(path)

        assert watcher.scan("done") == "fetch 10%\rfetch 100%\rdone"
        assert watcher.scan("server ready") == "server ready"
