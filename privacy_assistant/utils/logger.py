"""
Structured console logger with timing support.

Writes colourised, ``key=value`` annotated lines to stderr for each
analysis stage.  When ``WRITE_TO_FILE`` is set, lines are mirrored
to a per-page log file and finished reports can be saved to disk.

Timers, the line buffer and the file handle live in
``contextvars.ContextVar`` slots so concurrent analyses (for example
action queues running under asyncio) keep separate state.
"""

from __future__ import annotations

import contextvars
import io
import pathlib
import re
import sys
import time
from datetime import UTC, datetime

from privacy_assistant import config

_ANSI_PATTERN = re.compile(r"\033\[[0-9;]*m")

# ============================================================================
# Per-context state
# ============================================================================

_timers_var: contextvars.ContextVar[dict[str, tuple[float, str]]] = contextvars.ContextVar("_timers_var")
_log_buffer_var: contextvars.ContextVar[list[str]] = contextvars.ContextVar("_log_buffer_var")
_log_file_stream_var: contextvars.ContextVar[io.TextIOWrapper | None] = contextvars.ContextVar(
    "_log_file_stream_var", default=None
)


def _get_timers() -> dict[str, tuple[float, str]]:
    """Return the timer table for the current context."""
    try:
        return _timers_var.get()
    except LookupError:
        timers: dict[str, tuple[float, str]] = {}
        _timers_var.set(timers)
        return timers


def _get_log_buffer() -> list[str]:
    """Return the line buffer for the current context."""
    try:
        return _log_buffer_var.get()
    except LookupError:
        buf: list[str] = []
        _log_buffer_var.set(buf)
        return buf


def get_log_buffer() -> list[str]:
    """Return a copy of the buffered log lines with ANSI codes removed."""
    return list(_get_log_buffer())


def clear_log_buffer() -> None:
    """Reset the line buffer and any running timers."""
    _get_log_buffer().clear()
    _get_timers().clear()


def _strip_ansi(line: str) -> str:
    return _ANSI_PATTERN.sub("", line)


# ============================================================================
# File output
# ============================================================================


def _file_output_enabled() -> bool:
    return config.get_settings().write_to_file


def _safe_file_stem(hostname: str) -> str:
    """Turn a hostname into a filesystem-safe stem with a timestamp."""
    stem = hostname.removeprefix("www.") or "analysis"
    stem = "".join(ch if ch.isalnum() or ch in ".-" else "_" for ch in stem)[:50]
    timestamp = datetime.now(UTC).strftime("%Y-%m-%d_%H-%M-%S")
    return f"{stem}_{timestamp}"


def start_log_file(hostname: str) -> str | None:
    """Open a log file for the analysis of *hostname*.

    Returns:
        The path of the opened file, or ``None`` when file output
        is disabled or the file could not be opened.
    """
    if not _file_output_enabled():
        return None

    end_log_file()

    logs_dir = pathlib.Path.cwd() / ".logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    path = logs_dir / f"{_safe_file_stem(hostname)}.log"

    try:
        stream = open(path, "a", encoding="utf-8")  # noqa: SIM115
    except OSError as exc:
        print(f"\033[31m✗ [Logger] Failed to open log file: {exc}\033[0m", file=sys.stderr)
        return None

    _log_file_stream_var.set(stream)
    stream.write(f"\n{'=' * 80}\n  Privacy Analysis - {hostname or 'unknown host'}\n{'=' * 80}\n")
    return str(path)


def end_log_file() -> None:
    """Flush and close the current log file, if any."""
    stream = _log_file_stream_var.get(None)
    if stream is None:
        return
    try:
        stream.flush()
        stream.close()
    except OSError:
        print("\033[33m⚠ [Logger] Failed to flush/close log file stream\033[0m", file=sys.stderr)
    _log_file_stream_var.set(None)


def save_report_file(hostname: str, report_json: str) -> str | None:
    """Save a rendered JSON report under ``.reports/``.

    Only writes when ``WRITE_TO_FILE`` is enabled.

    Args:
        hostname: The analysed host (used in the filename).
        report_json: Serialized report content.

    Returns:
        The file path written, or ``None`` if skipped or failed.
    """
    if not _file_output_enabled():
        return None

    reports_dir = pathlib.Path.cwd() / ".reports"
    reports_dir.mkdir(parents=True, exist_ok=True)
    path = reports_dir / f"{_safe_file_stem(hostname)}.json"

    try:
        path.write_text(report_json, encoding="utf-8")
    except OSError as err:
        print(f"\033[31m✗ [Logger] Failed to save report: {err}\033[0m", file=sys.stderr)
        return None
    return str(path)


def _write_to_log_file(line: str) -> None:
    stream = _log_file_stream_var.get(None)
    if stream is None:
        return
    stream.write(_strip_ansi(line) + "\n")
    stream.flush()


# ============================================================================
# Formatting
# ============================================================================

_colours = {
    "reset": "\033[0m",
    "bright": "\033[1m",
    "dim": "\033[2m",
    "cyan": "\033[36m",
    "green": "\033[32m",
    "yellow": "\033[33m",
    "red": "\033[31m",
    "magenta": "\033[35m",
    "blue": "\033[34m",
    "gray": "\033[90m",
}

_level_style = {
    "info": (_colours["cyan"], "ℹ"),
    "success": (_colours["green"], "✓"),
    "warn": (_colours["yellow"], "⚠"),
    "error": (_colours["red"], "✗"),
    "debug": (_colours["gray"], "•"),
    "timing": (_colours["magenta"], "⏱"),
}


def _get_timestamp() -> str:
    """Return the current UTC time as HH:MM:SS.mmm."""
    now = datetime.now(UTC)
    return now.strftime("%H:%M:%S.") + f"{now.microsecond // 1000:03d}"


def _format_duration(ms: float) -> str:
    """Format a duration in milliseconds for display."""
    if ms < 1000:
        return f"{int(ms)}ms"
    if ms < 60000:
        return f"{ms / 1000:.2f}s"
    minutes = int(ms // 60000)
    seconds = (ms % 60000) / 1000
    return f"{minutes}m {seconds:.1f}s"


def _format_value(value: object) -> str:
    """Return an ANSI-coloured representation of *value*."""
    c = _colours
    if value is None:
        return f"{c['dim']}None{c['reset']}"
    if isinstance(value, bool):
        return f"{c['green']}True{c['reset']}" if value else f"{c['red']}False{c['reset']}"
    if isinstance(value, (int, float)):
        return f"{c['yellow']}{value}{c['reset']}"
    if isinstance(value, str):
        display = value[:197] + "..." if len(value) > 200 else value
        return f'{c["green"]}"{display}"{c["reset"]}'
    if isinstance(value, (list, tuple)):
        return f"{c['cyan']}[{len(value)} items]{c['reset']}"
    if isinstance(value, dict):
        return f"{c['cyan']}{{{len(value)} keys}}{c['reset']}"
    return str(value)


# ============================================================================
# Logger
# ============================================================================


class Logger:
    """Structured logger with a context prefix and named timers."""

    def __init__(self, context: str = "Assistant") -> None:
        self._context = context

    def _emit(self, line: str) -> None:
        print(line, file=sys.stderr)
        _write_to_log_file(line)
        _get_log_buffer().append(_strip_ansi(line))

    def _log(self, level: str, message: str, data: dict[str, object] | None = None) -> None:
        colour, symbol = _level_style.get(level, _level_style["info"])
        c = _colours
        prefix = (
            f"{c['gray']}[{_get_timestamp()}]{c['reset']} {colour}{symbol}{c['reset']} "
            f"{c['bright']}[{self._context}]{c['reset']}"
        )
        line = f"{prefix} {message}"
        if data:
            line += " " + " ".join(f"{c['dim']}{k}={c['reset']}{_format_value(v)}" for k, v in data.items())
        self._emit(line)

    def info(self, message: str, data: dict[str, object] | None = None) -> None:
        """Log an informational message."""
        self._log("info", message, data)

    def success(self, message: str, data: dict[str, object] | None = None) -> None:
        """Log a success message."""
        self._log("success", message, data)

    def warn(self, message: str, data: dict[str, object] | None = None) -> None:
        """Log a warning message."""
        self._log("warn", message, data)

    def error(self, message: str, data: dict[str, object] | None = None) -> None:
        """Log an error message."""
        self._log("error", message, data)

    def debug(self, message: str, data: dict[str, object] | None = None) -> None:
        """Log a debug-level message."""
        self._log("debug", message, data)

    def start_timer(self, label: str) -> None:
        """Start a named timer."""
        _get_timers()[f"{self._context}:{label}"] = (time.monotonic() * 1000, _get_timestamp())
        self._log("timing", f"Starting: {label}")

    def end_timer(self, label: str, message: str | None = None) -> float:
        """Stop a named timer, log the elapsed time and return it in ms."""
        entry = _get_timers().pop(f"{self._context}:{label}", None)
        if entry is None:
            self.warn(f'Timer "{label}" was not started')
            return 0.0

        start_ms, start_ts = entry
        duration = time.monotonic() * 1000 - start_ms
        c = _colours
        self._log(
            "timing",
            f"{message or f'Completed: {label}'} {c['dim']}took{c['reset']} "
            f"{c['magenta']}{_format_duration(duration)}{c['reset']} {c['dim']}(started {start_ts}){c['reset']}",
        )
        return duration

    def section(self, title: str) -> None:
        """Print a prominent section divider with *title*."""
        c = _colours
        rule = "─" * 60
        for line in ("", f"{c['blue']}{rule}{c['reset']}", f"{c['blue']}{c['bright']}  {title}{c['reset']}", f"{c['blue']}{rule}{c['reset']}"):
            self._emit(line)


def create_logger(context: str) -> Logger:
    """Create a logger for a specific module."""
    return Logger(context)
