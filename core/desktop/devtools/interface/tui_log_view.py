"""In-app log capture for the DebugLogs view.

`install_log_capture` hangs a `LogCaptureHandler` on the ``taskdeck`` logger;
every record lands in a bounded buffer that `LogState` pages through.
"""

import logging
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Deque, List, Optional

ROOT_LOGGER = "taskdeck"
MAX_RECORDS = 1000
PAGE_SIZE = 10

LEVELS = [logging.DEBUG, logging.INFO, logging.WARNING, logging.ERROR, logging.CRITICAL]


class LogEvent(Enum):
    SPACE_BAR = "space"
    UP = "up"
    DOWN = "down"
    PREV_PAGE = "prev_page"
    NEXT_PAGE = "next_page"
    LEFT = "left"
    RIGHT = "right"
    PLUS = "plus"
    MINUS = "minus"
    HIDE = "hide"


@dataclass(frozen=True)
class LogLine:
    created: float
    level: int
    target: str
    message: str

    @property
    def level_name(self) -> str:
        return logging.getLevelName(self.level)


class LogCaptureHandler(logging.Handler):
    def __init__(self, capacity: int = MAX_RECORDS, level: int = logging.NOTSET):
        super().__init__(level)
        self.records: Deque[LogLine] = deque(maxlen=capacity)

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = record.getMessage()
        except (TypeError, ValueError):
            self.handleError(record)
            return
        self.records.append(LogLine(record.created, record.levelno, record.name, message))


class LogState:
    """Scroll position, level thresholds and target selector of the log view."""

    def __init__(self, handler: Optional[LogCaptureHandler] = None):
        self.handler = handler or LogCaptureHandler()
        self.level_index = 0
        self.target_levels = {}
        self.selected_target = 0
        self.focus_targets = False
        self.hide_targets = False
        self.scroll = 0

    # ---------------------------------------------------------- queries

    def targets(self) -> List[str]:
        return sorted({line.target for line in self.handler.records})

    def current_target(self) -> Optional[str]:
        names = self.targets()
        if not names:
            return None
        return names[min(self.selected_target, len(names) - 1)]

    @property
    def display_level(self) -> int:
        return LEVELS[self.level_index]

    def threshold_for(self, target: str) -> int:
        return self.target_levels.get(target, self.display_level)

    def visible_lines(self) -> List[LogLine]:
        lines = [line for line in self.handler.records if line.level >= self.threshold_for(line.target)]
        end = len(lines) - self.scroll
        return lines[max(end - PAGE_SIZE * 3, 0):max(end, 0)]

    # --------------------------------------------------------- mutation

    def set_display_level(self, level: int) -> None:
        self.level_index = LEVELS.index(level) if level in LEVELS else 0

    def _scroll_by(self, delta: int) -> None:
        self.scroll = max(0, min(self.scroll + delta, max(len(self.handler.records) - 1, 0)))

    def _shift_target_level(self, step: int) -> None:
        target = self.current_target()
        if target is None:
            return
        idx = LEVELS.index(self.threshold_for(target)) if self.threshold_for(target) in LEVELS else 0
        self.target_levels[target] = LEVELS[max(0, min(idx + step, len(LEVELS) - 1))]

    def transition(self, event: LogEvent) -> None:
        if event is LogEvent.SPACE_BAR:
            self.focus_targets = not self.focus_targets and not self.hide_targets
        elif event is LogEvent.UP:
            if self.focus_targets:
                self.selected_target = max(self.selected_target - 1, 0)
            else:
                self._scroll_by(1)
        elif event is LogEvent.DOWN:
            if self.focus_targets:
                self.selected_target = min(self.selected_target + 1, max(len(self.targets()) - 1, 0))
            else:
                self._scroll_by(-1)
        elif event is LogEvent.PREV_PAGE:
            self._scroll_by(PAGE_SIZE)
        elif event is LogEvent.NEXT_PAGE:
            self._scroll_by(-PAGE_SIZE)
        elif event is LogEvent.LEFT:
            self._shift_target_level(1)
        elif event is LogEvent.RIGHT:
            self._shift_target_level(-1)
        elif event is LogEvent.PLUS:
            # more verbose
            self.level_index = max(self.level_index - 1, 0)
        elif event is LogEvent.MINUS:
            self.level_index = min(self.level_index + 1, len(LEVELS) - 1)
        elif event is LogEvent.HIDE:
            self.hide_targets = not self.hide_targets
            if self.hide_targets:
                self.focus_targets = False


def install_log_capture(level: int = logging.DEBUG, capacity: int = MAX_RECORDS) -> LogCaptureHandler:
    """Attach a capture handler to the ``taskdeck`` logger and return it."""
    logger = logging.getLogger(ROOT_LOGGER)
    for existing in list(logger.handlers):
        if isinstance(existing, LogCaptureHandler):
            logger.removeHandler(existing)
    handler = LogCaptureHandler(capacity=capacity)
    logger.addHandler(handler)
    logger.setLevel(level)
    return handler


__all__ = [
    "LogEvent",
    "LogLine",
    "LogState",
    "LogCaptureHandler",
    "install_log_capture",
    "LEVELS",
]
