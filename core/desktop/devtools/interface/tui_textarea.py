"""Multi-line description editor with URL detection."""

import re
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from core.desktop.devtools.interface.tui_models import KeyEvent

_URL_RE = re.compile(r"https?://[^\s)\]>\"']+")


class TextAreaAction(Enum):
    NONE = "none"
    OPEN_LINK = "open_link"
    NEXT_FIELD = "next_field"
    PREV_FIELD = "prev_field"


@dataclass(frozen=True)
class LinkSpan:
    url: str
    line: int
    start: int
    end: int


class DescriptionTextArea:
    def __init__(self, text: str = ""):
        self.lines: List[str] = [""]
        self.cursor_row = 0
        self.cursor_col = 0
        self.links: List[LinkSpan] = []
        self.set_text(text)

    def set_text(self, text: str) -> None:
        self.lines = text.split("\n") if text else [""]
        self.cursor_row = len(self.lines) - 1
        self.cursor_col = len(self.lines[-1])
        self._update_links()

    def text(self) -> str:
        return "\n".join(self.lines)

    def is_empty(self) -> bool:
        return not self.text().strip()

    def _update_links(self) -> None:
        self.links = [
            LinkSpan(m.group(0), row, m.start(), m.end())
            for row, line in enumerate(self.lines)
            for m in _URL_RE.finditer(line)
        ]

    def link_at_cursor(self) -> Optional[str]:
        for link in self.links:
            if link.line == self.cursor_row and link.start <= self.cursor_col < link.end:
                return link.url
        return None

    @property
    def _line(self) -> str:
        return self.lines[self.cursor_row]

    def insert_char(self, char: str) -> None:
        line = self._line
        self.lines[self.cursor_row] = line[: self.cursor_col] + char + line[self.cursor_col:]
        self.cursor_col += 1
        self._update_links()

    def insert_newline(self) -> None:
        line = self._line
        self.lines[self.cursor_row] = line[: self.cursor_col]
        self.lines.insert(self.cursor_row + 1, line[self.cursor_col:])
        self.cursor_row += 1
        self.cursor_col = 0
        self._update_links()

    def _join_with_previous(self) -> None:
        current = self.lines.pop(self.cursor_row)
        self.cursor_row -= 1
        self.cursor_col = len(self._line)
        self.lines[self.cursor_row] += current

    def delete_backward(self) -> None:
        if self.cursor_col > 0:
            line = self._line
            self.lines[self.cursor_row] = line[: self.cursor_col - 1] + line[self.cursor_col:]
            self.cursor_col -= 1
        elif self.cursor_row > 0:
            self._join_with_previous()
        self._update_links()

    def delete_forward(self) -> None:
        line = self._line
        if self.cursor_col < len(line):
            self.lines[self.cursor_row] = line[: self.cursor_col] + line[self.cursor_col + 1:]
        elif self.cursor_row < len(self.lines) - 1:
            self.lines[self.cursor_row] += self.lines.pop(self.cursor_row + 1)
        self._update_links()

    def move_left(self) -> None:
        if self.cursor_col > 0:
            self.cursor_col -= 1
        elif self.cursor_row > 0:
            self.cursor_row -= 1
            self.cursor_col = len(self._line)

    def move_right(self) -> None:
        if self.cursor_col < len(self._line):
            self.cursor_col += 1
        elif self.cursor_row < len(self.lines) - 1:
            self.cursor_row += 1
            self.cursor_col = 0

    def move_up(self) -> None:
        if self.cursor_row > 0:
            self.cursor_row -= 1
            self.cursor_col = min(self.cursor_col, len(self._line))

    def move_down(self) -> None:
        if self.cursor_row < len(self.lines) - 1:
            self.cursor_row += 1
            self.cursor_col = min(self.cursor_col, len(self._line))

    def _word_start(self) -> int:
        line, pos = self._line, self.cursor_col
        while pos > 0 and line[pos - 1].isspace():
            pos -= 1
        while pos > 0 and not line[pos - 1].isspace():
            pos -= 1
        return pos

    def move_word_left(self) -> None:
        if self.cursor_col == 0:
            if self.cursor_row > 0:
                self.cursor_row -= 1
                self.cursor_col = len(self._line)
            return
        self.cursor_col = self._word_start()

    def move_word_right(self) -> None:
        line, pos = self._line, self.cursor_col
        if pos >= len(line):
            if self.cursor_row < len(self.lines) - 1:
                self.cursor_row += 1
                self.cursor_col = 0
            return
        while pos < len(line) and not line[pos].isspace():
            pos += 1
        while pos < len(line) and line[pos].isspace():
            pos += 1
        self.cursor_col = pos

    def delete_word_backward(self) -> None:
        if self.cursor_col == 0:
            if self.cursor_row > 0:
                self._join_with_previous()
            self._update_links()
            return
        start = self._word_start()
        line = self._line
        self.lines[self.cursor_row] = line[:start] + line[self.cursor_col:]
        self.cursor_col = start
        self._update_links()

    def handle_key(self, key: KeyEvent) -> TextAreaAction:
        if key.ctrl:
            if key.key == "o" and self.link_at_cursor():
                return TextAreaAction.OPEN_LINK
            return TextAreaAction.NONE
        if key.alt:
            if key.key in ("b", "left"):
                self.move_word_left()
            elif key.key in ("f", "right"):
                self.move_word_right()
            elif key.key == "backspace":
                self.delete_word_backward()
            return TextAreaAction.NONE
        if key.key == "tab":
            return TextAreaAction.NEXT_FIELD
        if key.key == "backtab":
            return TextAreaAction.PREV_FIELD
        if key.key == "enter":
            self.insert_newline()
        elif key.char:
            self.insert_char(key.char)
        else:
            moves = {
                "backspace": self.delete_backward,
                "delete": self.delete_forward,
                "left": self.move_left,
                "right": self.move_right,
                "up": self.move_up,
                "down": self.move_down,
                "home": lambda: setattr(self, "cursor_col", 0),
                "end": lambda: setattr(self, "cursor_col", len(self._line)),
            }
            action = moves.get(key.key)
            if action is not None:
                action()
        return TextAreaAction.NONE


__all__ = ["DescriptionTextArea", "TextAreaAction", "LinkSpan"]
