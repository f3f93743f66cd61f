"""Tag entry widget with autocomplete over existing tag names."""

from typing import Iterable, List, Optional

from core.desktop.devtools.interface.tui_models import KeyEvent
from core.desktop.devtools.interface.tui_text_input import TextInput

MAX_TAG_SUGGESTIONS = 5


class TagInput:
    def __init__(self, tags: Optional[List[str]] = None):
        self.input = TextInput(placeholder="Type tag, press Enter to add")
        self.tags: List[str] = list(tags or [])
        self.suggestions: List[str] = []
        self.selected_suggestion: Optional[int] = None

    @property
    def input_value(self) -> str:
        return self.input.value

    def add_tag(self, tag: str) -> None:
        tag = tag.strip()
        if tag and not any(t.lower() == tag.lower() for t in self.tags):
            self.tags.append(tag)

    def remove_last_tag(self) -> None:
        if self.tags:
            self.tags.pop()

    def remove_tag(self, tag: str) -> None:
        self.tags = [t for t in self.tags if t != tag]

    def current_suggestion(self) -> Optional[str]:
        if self.selected_suggestion is None:
            return None
        if 0 <= self.selected_suggestion < len(self.suggestions):
            return self.suggestions[self.selected_suggestion]
        return None

    def _reset_suggestions(self) -> None:
        self.suggestions = []
        self.selected_suggestion = None

    def update_suggestions(self, all_tags: Iterable[str]) -> None:
        query = self.input.value.lower()
        if not query:
            self._reset_suggestions()
            return
        existing = {t.lower() for t in self.tags}
        matches = [name for name in all_tags if query in name.lower() and name.lower() not in existing]
        self.suggestions = matches[:MAX_TAG_SUGGESTIONS]
        self.selected_suggestion = 0 if self.suggestions else None

    def _commit_input(self) -> None:
        tag = self.input.value.strip()
        if tag:
            self.add_tag(tag)
            self.input.clear()
            self._reset_suggestions()

    def _cycle(self, step: int) -> bool:
        if not self.suggestions:
            return False
        if self.selected_suggestion is None:
            self.selected_suggestion = 0
        else:
            self.selected_suggestion = (self.selected_suggestion + step) % len(self.suggestions)
        return True

    def handle_key(self, key: KeyEvent, all_tags: Iterable[str]) -> bool:
        """Returns True when the key was consumed.

        Tab without a selected suggestion is not consumed so the owning dialog
        can move focus to its next field.
        """
        if key.key == "enter" or key.is_plain_char(","):
            self._commit_input()
            return True
        if key.key == "backspace" and not key.alt:
            if self.input.is_empty():
                self.remove_last_tag()
            else:
                self.input.delete_backward()
                self.update_suggestions(all_tags)
            return True
        if key.key == "tab":
            suggestion = self.current_suggestion()
            if suggestion is None:
                return False
            self.add_tag(suggestion)
            self.input.clear()
            self._reset_suggestions()
            return True
        if key.key == "up":
            return self._cycle(-1)
        if key.key == "down":
            return self._cycle(1)
        if key.key == "delete":
            self.input.delete_forward()
            self.update_suggestions(all_tags)
            return True
        if key.key in ("left", "right", "home", "end"):
            self.input.handle_editing_key(key)
            return True
        if key.is_char and not key.ctrl:
            if key.alt:
                return self.input.handle_editing_key(key)
            self.input.insert(key.key)
            self.update_suggestions(all_tags)
            return True
        return False


__all__ = ["TagInput", "MAX_TAG_SUGGESTIONS"]
