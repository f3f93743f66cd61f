#!/usr/bin/env python3
"""TUI data models and constants."""

from dataclasses import dataclass
from enum import Enum


class View(Enum):
    MAIN = "main"
    TASK_DETAIL = "task_detail"
    CALENDAR = "calendar"
    SEARCH = "search"
    HELP = "help"
    DEBUG_LOGS = "debug_logs"


class InputMode(Enum):
    NORMAL = "normal"
    EDITING = "editing"
    SEARCH = "search"


class FocusPanel(Enum):
    SIDEBAR = "sidebar"
    TASK_LIST = "task_list"


class DialogAction(Enum):
    """Result of a dialog handling one key."""

    NONE = "none"
    SUBMIT = "submit"
    CANCEL = "cancel"


NAMED_KEYS = frozenset(
    {
        "enter", "esc", "tab", "backtab", "backspace", "delete",
        "left", "right", "up", "down", "home", "end", "pageup", "pagedown",
    }
    | {f"f{n}" for n in range(1, 13)}
)


@dataclass(frozen=True)
class KeyEvent:
    """Terminal-independent key press.

    `key` is either a single character ("a", "A", " ", "?") or one of
    NAMED_KEYS. Modifiers are plain flags.
    """

    key: str
    ctrl: bool = False
    alt: bool = False
    shift: bool = False

    @property
    def char(self) -> str:
        """The typed character, or "" for named keys."""
        return self.key if len(self.key) == 1 else ""

    @property
    def is_char(self) -> bool:
        return len(self.key) == 1

    @property
    def plain(self) -> bool:
        return not (self.ctrl or self.alt)

    def is_plain_char(self, *chars: str) -> bool:
        return self.is_char and self.plain and self.key in chars


__all__ = ["View", "InputMode", "FocusPanel", "DialogAction", "KeyEvent", "NAMED_KEYS"]
