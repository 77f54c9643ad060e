import io
import re
import threading

import pytest

from pcrkit.logger import LogField, LogLevel
from pcrkit.stdio_logger import ColorMode, StdioLogger, StdioLoggerOptions

LINE = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z \[(.{5})\] (.*)$")


def _make(color=ColorMode.NEVER, min_level=None):
    out, err = io.StringIO(), io.StringIO()
    log = StdioLogger(StdioLoggerOptions(color=color, out=out, err=err, min_level=min_level))
    return log, out, err


def _records(out, err):
    return out.getvalue().splitlines() + err.getvalue().splitlines()


def test_accepts_log_calls_through_port():
    log, out, err = _make()
    log.log(LogLevel.TRACE, "ignored", [LogField("key", "value")])
    log.log(LogLevel.INFO, "through port", [])
    assert len(_records(out, err)) == 2


def test_writes_one_complete_record():
    log, out, err = _make()
    log.log(LogLevel.INFO, "complete record", [LogField("key", "value")])
    records = _records(out, err)
    assert len(records) == 1
    assert "complete record" in records[0]
    assert "key=value" in records[0]


def test_empty_fields_do_not_render_stray_separator():
    log, out, err = _make()
    log.log(LogLevel.INFO, "empty fields", [])
    records = _records(out, err)
    assert len(records) == 1
    assert "empty fields" in records[0]
    assert "=" not in records[0]
    assert not records[0].endswith(" ")


def test_concurrent_log_calls_are_safe():
    log, out, err = _make()
    start = threading.Event()

    def worker():
        start.wait()
        log.log(LogLevel.INFO, "concurrent record", [LogField("thread", "worker")])

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    start.set()
    for thread in threads:
        thread.join()

    records = _records(out, err)
    assert len(records) == 8
    assert all("concurrent record" in line for line in records)


def test_record_format_has_timestamp_label_and_fields():
    log, out, _ = _make()
    log.log(LogLevel.INFO, "hello", [("key", "value")])
    match = LINE.match(out.getvalue().rstrip("\n"))
    assert match is not None
    assert match.group(1) == "INFO "
    assert match.group(2) == "hello key=value"
    assert out.getvalue().endswith("\n")


@pytest.mark.parametrize(
    "level, label, to_err",
    [
        (LogLevel.TRACE, "TRACE", False),
        (LogLevel.DEBUG, "DEBUG", False),
        (LogLevel.INFO, "INFO ", False),
        (LogLevel.WARN, "WARN ", True),
        (LogLevel.ERROR, "ERROR", True),
    ],
)
def test_levels_route_to_streams_with_labels(level, label, to_err):
    log, out, err = _make()
    log.log(level, "m")
    target, other = (err, out) if to_err else (out, err)
    assert other.getvalue() == ""
    assert f"[{label}] m" in target.getvalue()


def test_min_level_filters_lower_levels():
    log, out, err = _make(min_level=LogLevel.WARN)
    log.log(LogLevel.INFO, "dropped")
    log.log(LogLevel.WARN, "kept")
    assert out.getvalue() == ""
    assert "kept" in err.getvalue()
    assert "dropped" not in err.getvalue()


@pytest.mark.parametrize(
    "level, sequence, label",
    [
        (LogLevel.TRACE, "\x1b[2m", "TRACE"),
        (LogLevel.DEBUG, "\x1b[36m", "DEBUG"),
        (LogLevel.INFO, "\x1b[32m", "INFO "),
        (LogLevel.WARN, "\x1b[33m", "WARN "),
        (LogLevel.ERROR, "\x1b[31m", "ERROR"),
    ],
)
def test_always_color_wraps_label(level, sequence, label):
    log, out, err = _make(color=ColorMode.ALWAYS)
    log.log(level, "m")
    assert f"{sequence}[{label}]\x1b[0m m" in out.getvalue() + err.getvalue()


def test_never_color_has_no_escape_sequences():
    log, out, _ = _make(color=ColorMode.NEVER)
    log.log(LogLevel.INFO, "m")
    assert "\x1b" not in out.getvalue()


def test_auto_color_respects_no_color(monkeypatch):
    monkeypatch.setenv("NO_COLOR", "1")
    monkeypatch.setenv("FORCE_COLOR", "1")
    log, out, _ = _make(color=ColorMode.AUTO)
    log.log(LogLevel.INFO, "m")
    assert "\x1b" not in out.getvalue()


def test_auto_color_respects_force_color(monkeypatch):
    monkeypatch.delenv("NO_COLOR", raising=False)
    monkeypatch.setenv("FORCE_COLOR", "1")
    log, out, _ = _make(color=ColorMode.AUTO)
    log.log(LogLevel.INFO, "m")
    assert "\x1b[32m[INFO ]\x1b[0m" in out.getvalue()


def test_auto_color_off_for_non_terminal_stream(monkeypatch):
    monkeypatch.delenv("NO_COLOR", raising=False)
    monkeypatch.delenv("FORCE_COLOR", raising=False)
    log, out, _ = _make(color=ColorMode.AUTO)
    log.log(LogLevel.INFO, "m")
    assert "\x1b" not in out.getvalue()


def test_field_values_are_escaped():
    log, out, _ = _make()
    log.log(LogLevel.INFO, "m", [("path", "a b")])
    assert out.getvalue().rstrip("\n").endswith(' m path="a b"')


def test_failing_stream_is_swallowed():
    class _Broken(io.StringIO):
        def write(self, text):
            raise OSError("broken")

    err = io.StringIO()
    log = StdioLogger(StdioLoggerOptions(color=ColorMode.NEVER, out=_Broken(), err=err))
    log.log(LogLevel.INFO, "lost")
    log.log(LogLevel.ERROR, "kept")
    assert "kept" in err.getvalue()