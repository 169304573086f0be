"""In-memory log panel with filtering and severity classification."""

from __future__ import annotations

import threading
from enum import Enum

MAX_LOG_LINES = 10000
TRIM_COUNT = 1000
MIN_HEIGHT = 100.0
DEFAULT_HEIGHT = 200.0


class LogLevel(Enum):
    """Severity of a log line, valued by its display colour (RGBA)."""

    ERROR = (1.0, 0.3, 0.3, 1.0)
    WARNING = (1.0, 0.8, 0.2, 1.0)
    EXEC = (0.3, 1.0, 0.3, 1.0)
    DEBUG = (0.5, 0.5, 1.0, 1.0)
    RESPONSE = (0.3, 0.8, 1.0, 1.0)
    NORMAL = (1.0, 1.0, 1.0, 1.0)

    @property
    def color(self) -> tuple[float, float, float, float]:
        return self.value


_MARKERS: tuple[tuple[LogLevel, tuple[str, ...]], ...] = (
    (LogLevel.ERROR, ("[ERROR]", "ERROR:")),
    (LogLevel.WARNING, ("[WARN]", "WARNING:")),
    (LogLevel.EXEC, ("[EXEC]",)),
    (LogLevel.DEBUG, ("DEBUG",)),
    (LogLevel.RESPONSE, ("Response:", "Status")),
)


def classify(line: str) -> LogLevel:
    """Return the severity of a log line from the markers it contains."""
    for level, markers in _MARKERS:
        if any(marker in line for marker in markers):
            return level
    return LogLevel.NORMAL


class Terminal:
    """Thread-safe list of log lines shown in a resizable panel."""

    def __init__(self) -> None:
        self._logs: list[str] = []
        self._lock = threading.Lock()
        self.visible = True
        self.height = DEFAULT_HEIGHT
        self.auto_scroll = True

    @property
    def lines(self) -> list[str]:
        """A copy of the stored log lines, oldest first."""
        with self._lock:
            return list(self._logs)

    def __len__(self) -> int:
        with self._lock:
            return len(self._logs)

    def log(self, message: str) -> None:
        """Store a line, echo it to stdout and drop old lines when full."""
        with self._lock:
            self._logs.append(message)
            print(message, flush=True)
            if len(self._logs) > MAX_LOG_LINES:
                del self._logs[:TRIM_COUNT]

    def clear(self) -> None:
        """Remove every stored line."""
        with self._lock:
            self._logs.clear()

    def toggle_visible(self) -> bool:
        """Flip visibility and return the new state."""
        self.visible = not self.visible
        return self.visible

    def clamp_height(self, available_height: float) -> float:
        """Keep the panel height within its bounds and return it."""
        if self.height < MIN_HEIGHT:
            self.height = MIN_HEIGHT
        if self.height > available_height - MIN_HEIGHT:
            self.height = available_height - MIN_HEIGHT
        return self.height

    def filtered(self, filter_text: str = "") -> list[str]:
        """Return the lines containing the filter text, ignoring case."""
        with self._lock:
            if not filter_text:
                return list(self._logs)
            needle = filter_text.lower()
            return [line for line in self._logs if needle in line.lower()]