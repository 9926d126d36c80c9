"""
Console logger for analysis runs.

Every line carries a UTC timestamp, a level glyph and the module
context, followed by optional ``key=value`` data.  Lines go to stderr
so that report output on stdout stays clean (and machine-readable in
``--json`` mode).  A run can additionally mirror its log, without
colours, to a timestamped file under ``.logs/``.
"""

from __future__ import annotations

import pathlib
import re
import sys
import time
from datetime import UTC, datetime
from typing import TextIO

# ============================================================================
# ANSI Styling
# ============================================================================

RESET = "\033[0m"
BOLD = "\033[1m"
DIM = "\033[2m"
RED = "\033[31m"
GREEN = "\033[32m"
YELLOW = "\033[33m"
BLUE = "\033[34m"
MAGENTA = "\033[35m"
CYAN = "\033[36m"
GRAY = "\033[90m"

_ANSI_RE = re.compile(r"\033\[[0-9;]*m")

# level -> (colour, glyph)
_LEVELS: dict[str, tuple[str, str]] = {
    "info": (CYAN, "ℹ"),
    "success": (GREEN, "✓"),
    "warn": (YELLOW, "⚠"),
    "error": (RED, "✗"),
    "debug": (GRAY, "•"),
    "timing": (MAGENTA, "⏱"),
}


def _paint(text: str, *styles: str) -> str:
    return "".join(styles) + text + RESET


def strip_ansi(text: str) -> str:
    """Remove ANSI colour sequences from *text*."""
    return _ANSI_RE.sub("", text)


# ============================================================================
# Run Log File
# ============================================================================

_log_file: TextIO | None = None


def safe_name(name: str) -> str:
    """Reduce *name* to characters that are safe in a file name."""
    clean = name.removeprefix("www.")
    return "".join(c if c.isalnum() or c in ".-" else "_" for c in clean)[:50]


def start_log_file(name: str, logs_dir: pathlib.Path | None = None) -> pathlib.Path | None:
    """Mirror subsequent log lines into ``<logs_dir>/<name>_<timestamp>.log``.

    Args:
        name: The analysed page or file name (used in the file name).
        logs_dir: Directory for log files; defaults to ``.logs`` in the
            current working directory.

    Returns:
        The log file path, or ``None`` if the file could not be opened.
    """
    global _log_file

    end_log_file()
    directory = logs_dir or pathlib.Path.cwd() / ".logs"
    started = datetime.now(UTC)
    path = directory / f"{safe_name(name)}_{started:%Y-%m-%d_%H-%M-%S}.log"
    try:
        directory.mkdir(parents=True, exist_ok=True)
        _log_file = open(path, "a", encoding="utf-8")  # noqa: SIM115
    except OSError as exc:
        print(_paint(f"✗ [Logger] Failed to open log file: {exc}", RED), file=sys.stderr)
        return None

    banner = "=" * 80
    _log_file.write(f"\n{banner}\n  Analysis Log - {name}\n  Started: {started.isoformat()}\n{banner}\n")
    print(_paint(f"ℹ [Logger] Writing logs to: {path}", CYAN), file=sys.stderr)
    return path


def end_log_file() -> None:
    """Flush and close the run log file, if one is open."""
    global _log_file

    if _log_file is None:
        return
    try:
        _log_file.close()
    except OSError:
        print(_paint("⚠ [Logger] Failed to close log file", YELLOW), file=sys.stderr)
    _log_file = None


def _emit(line: str) -> None:
    print(line, file=sys.stderr)
    if _log_file is not None:
        _log_file.write(strip_ansi(line) + "\n")
        _log_file.flush()


# ============================================================================
# Formatting
# ============================================================================


def _timestamp() -> str:
    """Return the current UTC time as HH:MM:SS.mmm."""
    now = datetime.now(UTC)
    return f"{now:%H:%M:%S}.{now.microsecond // 1000:03d}"


def format_duration(ms: float) -> str:
    """Render *ms* milliseconds as ``850ms``, ``2.50s`` or ``1m 5.0s``."""
    if ms < 1000:
        return f"{int(ms)}ms"
    if ms < 60_000:
        return f"{ms / 1000:.2f}s"
    minutes, rest = divmod(ms, 60_000)
    return f"{int(minutes)}m {rest / 1000:.1f}s"


def _render_value(value: object) -> str:
    """Colour a data value by type; collections are summarised by size."""
    if value is None:
        return _paint("None", DIM)
    if isinstance(value, bool):
        return _paint(str(value), GREEN if value else RED)
    if isinstance(value, (int, float)):
        return _paint(str(value), YELLOW)
    if isinstance(value, str):
        shown = value if len(value) <= 200 else value[:197] + "..."
        return _paint(f'"{shown}"', GREEN)
    if isinstance(value, (list, tuple, set, frozenset)):
        return _paint(f"[{len(value)} items]", CYAN)
    if isinstance(value, dict):
        return _paint(f"({len(value)} keys)", CYAN)
    return str(value)


# ============================================================================
# Logger
# ============================================================================

_timers: dict[str, tuple[float, str]] = {}


class Logger:
    """Context-prefixed console logger with named timers."""

    def __init__(self, context: str = "Skimwatch") -> None:
        self._context = context

    def _log(self, level: str, message: str, data: dict[str, object] | None = None) -> None:
        colour, glyph = _LEVELS[level]
        parts = [
            _paint(f"[{_timestamp()}]", GRAY),
            _paint(glyph, colour),
            _paint(f"[{self._context}]", BOLD),
            message,
        ]
        if data:
            parts.extend(f"{_paint(f'{key}=', DIM)}{_render_value(value)}" for key, value in data.items())
        _emit(" ".join(parts))

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
        """Start the named timer *label*."""
        _timers[f"{self._context}:{label}"] = (time.monotonic(), _timestamp())
        self._log("timing", f"Starting: {label}")

    def end_timer(self, label: str, message: str | None = None) -> float:
        """Stop the named timer *label*, log and return the elapsed milliseconds."""
        started = _timers.pop(f"{self._context}:{label}", None)
        if started is None:
            self.warn(f'Timer "{label}" was not started')
            return 0.0

        began, began_at = started
        elapsed_ms = (time.monotonic() - began) * 1000
        self._log(
            "timing",
            f"{message or f'Completed: {label}'} {_paint('took', DIM)} "
            f"{_paint(format_duration(elapsed_ms), MAGENTA)} {_paint(f'(started {began_at})', DIM)}",
        )
        return elapsed_ms

    def section(self, title: str) -> None:
        """Print a prominent divider announcing *title*."""
        rule = _paint("─" * 60, BLUE)
        for line in ("", rule, _paint(f"  {title}", BLUE, BOLD), rule, ""):
            _emit(line)

    def subsection(self, title: str) -> None:
        """Print a smaller header for a step within a section."""
        _emit(_paint(f"\n  ▸ {title}", CYAN))


def create_logger(context: str) -> Logger:
    """Create a logger for a specific module."""
    return Logger(context)
