"""Single-line text buffer with a character-offset cursor."""

from core.desktop.devtools.interface.tui_models import KeyEvent


class TextInput:
    def __init__(self, value: str = "", placeholder: str = ""):
        self.value = value
        self.cursor = len(value)
        self.placeholder = placeholder

    def set_value(self, value: str) -> None:
        self.value = value
        self.cursor = len(value)

    def clear(self) -> None:
        self.set_value("")

    def is_empty(self) -> bool:
        return not self.value

    def insert(self, char: str) -> None:
        self.value = self.value[: self.cursor] + char + self.value[self.cursor:]
        self.cursor += len(char)

    def delete_backward(self) -> None:
        if self.cursor > 0:
            self.value = self.value[: self.cursor - 1] + self.value[self.cursor:]
            self.cursor -= 1

    def delete_forward(self) -> None:
        if self.cursor < len(self.value):
            self.value = self.value[: self.cursor] + self.value[self.cursor + 1:]

    def move_left(self) -> None:
        self.cursor = max(0, self.cursor - 1)

    def move_right(self) -> None:
        self.cursor = min(len(self.value), self.cursor + 1)

    def move_home(self) -> None:
        self.cursor = 0

    def move_end(self) -> None:
        self.cursor = len(self.value)

    def _word_start_before(self, pos: int) -> int:
        text = self.value
        while pos > 0 and text[pos - 1].isspace():
            pos -= 1
        while pos > 0 and not text[pos - 1].isspace():
            pos -= 1
        return pos

    def move_word_left(self) -> None:
        self.cursor = self._word_start_before(self.cursor)

    def move_word_right(self) -> None:
        text = self.value
        pos = self.cursor
        while pos < len(text) and not text[pos].isspace():
            pos += 1
        while pos < len(text) and text[pos].isspace():
            pos += 1
        self.cursor = pos

    def delete_word_backward(self) -> None:
        start = self._word_start_before(self.cursor)
        self.value = self.value[:start] + self.value[self.cursor:]
        self.cursor = start

    def handle_editing_key(self, key: KeyEvent) -> bool:
        """Apply a standard line-editing key. Returns False if the key is not an edit."""
        if key.alt:
            if key.key in ("b", "left"):
                self.move_word_left()
            elif key.key in ("f", "right"):
                self.move_word_right()
            elif key.key == "backspace":
                self.delete_word_backward()
            else:
                return False
            return True
        if key.ctrl:
            if key.key == "a":
                self.move_home()
            elif key.key == "e":
                self.move_end()
            elif key.key == "w":
                self.delete_word_backward()
            else:
                return False
            return True
        actions = {
            "backspace": self.delete_backward,
            "delete": self.delete_forward,
            "left": self.move_left,
            "right": self.move_right,
            "home": self.move_home,
            "end": self.move_end,
        }
        action = actions.get(key.key)
        if action is not None:
            action()
            return True
        if key.char:
            self.insert(key.char)
            return True
        return False


__all__ = ["TextInput"]
