"""Quick capture dialog: one line of text with inline @project #tag !priority due:date.

The line is reparsed from scratch after every edit. Autocomplete looks only
at the token under the cursor (text from the previous space up to the
cursor) and offers projects for ``@``, tags for ``#`` and the four priority
levels for ``!``.
"""

from enum import Enum
from typing import Dict, List, Optional, Tuple

from core import Priority, Project, Task, parse_capture_input
from core.capture import ParsedCapture
from core.desktop.devtools.interface.tui_add_task import AddTaskDialog
from core.desktop.devtools.interface.tui_models import KeyEvent
from core.desktop.devtools.interface.tui_tag_input import TagInput
from core.desktop.devtools.interface.tui_text_input import TextInput

PRIORITY_CANDIDATES = ("1", "2", "3", "4")


class QuickCaptureAction(Enum):
    NONE = "none"
    SUBMIT = "submit"
    CANCEL = "cancel"
    EXPAND = "expand"


class SuggestionMode(Enum):
    NONE = "none"
    PROJECTS = "projects"
    TAGS = "tags"
    PRIORITIES = "priorities"


_TOKEN_PREFIXES = {"@": SuggestionMode.PROJECTS, "#": SuggestionMode.TAGS, "!": SuggestionMode.PRIORITIES}


def build_project_tag_map(tasks: List[Task]) -> Dict[str, List[str]]:
    """Tags used so far inside each project, in first-seen order."""
    mapping: Dict[str, List[str]] = {}
    for task in tasks:
        if task.project_id is None:
            continue
        entry = mapping.setdefault(task.project_id, [])
        for tag in task.tags:
            if tag not in entry:
                entry.append(tag)
    return mapping


class QuickCaptureDialog:
    def __init__(self, projects: List[Project], tags: List[str], tasks: List[Task]):
        self.input = TextInput(placeholder="Task title @project #tag !priority due:date")
        self.parsed = ParsedCapture()
        self.projects = list(projects)
        self.all_tags = list(tags)
        self.matched_project: Optional[Project] = None
        self.explicit_project: Optional[Project] = None
        self.suggestions: List[str] = []
        self.selected_suggestion: Optional[int] = None
        self.suggestion_mode = SuggestionMode.NONE
        self.project_tag_map = build_project_tag_map(tasks)

    def set_project(self, project: Project) -> None:
        self.explicit_project = project

    @property
    def project(self) -> Optional[Project]:
        return self.explicit_project or self.matched_project

    # ------------------------------------------------------------ keys

    def handle_key(self, key: KeyEvent) -> QuickCaptureAction:
        k = key.key
        if k == "enter":
            self.reparse()
            return QuickCaptureAction.SUBMIT
        if k == "esc":
            return QuickCaptureAction.CANCEL
        if k == "tab":
            if self.suggestions:
                self.accept_suggestion()
                return QuickCaptureAction.NONE
            self.reparse()
            return QuickCaptureAction.EXPAND
        if k in ("up", "down") and self.suggestions:
            if self.selected_suggestion is not None:
                step = -1 if k == "up" else 1
                self.selected_suggestion = (self.selected_suggestion + step) % len(self.suggestions)
            return QuickCaptureAction.NONE

        if key.alt and k in ("left", "right"):
            self.input.handle_editing_key(key)
            self.update_suggestions()
        elif k in ("left", "right", "home", "end"):
            self.input.handle_editing_key(key)
            self.update_suggestions()
        elif (key.alt and k in ("b", "f", "backspace")) or k in ("backspace", "delete") or (key.is_char and key.plain):
            self.input.handle_editing_key(key)
            self.reparse()
            self.update_suggestions()
        return QuickCaptureAction.NONE

    # --------------------------------------------------------- parsing

    def reparse(self) -> None:
        self.parsed = parse_capture_input(self.input.value)
        name = self.parsed.project_name
        self.matched_project = self.fuzzy_match_project(name) if name else None
        if name is not None and self.explicit_project is not None:
            self.explicit_project = None

    def fuzzy_match_project(self, name: str) -> Optional[Project]:
        lower = name.lower()
        for match in (
            lambda p: p.name.lower() == lower,
            lambda p: p.name.lower().startswith(lower),
            lambda p: lower in p.name.lower(),
        ):
            for project in self.projects:
                if match(project):
                    return project
        return None

    def active_token_at_cursor(self) -> Optional[Tuple[SuggestionMode, str, int, int]]:
        """(mode, partial text after the prefix, start, end) of the token before the cursor."""
        value = self.input.value
        cursor = self.input.cursor
        if cursor == 0 or not value:
            return None
        start = cursor
        while start > 0 and value[start - 1] != " ":
            start -= 1
        token = value[start:cursor]
        mode = _TOKEN_PREFIXES.get(token[:1])
        if mode is None:
            return None
        return mode, token[1:], start, cursor

    # ----------------------------------------------------- suggestions

    def _project_suggestions(self, partial: str) -> List[str]:
        if not partial:
            return [p.name for p in self.projects]
        lower = partial.lower()
        matches: List[str] = []
        for match in (
            lambda n: n == lower,
            lambda n: n.startswith(lower),
            lambda n: lower in n,
        ):
            for project in self.projects:
                if match(project.name.lower()) and project.name not in matches:
                    matches.append(project.name)
        return matches

    def _tag_suggestions(self, partial: str) -> List[str]:
        lower = partial.lower()
        already = {t.lower() for t in self.parsed.tags}
        current = self.project
        scoped = {t.lower() for t in self.project_tag_map.get(current.id, [])} if current else set()
        scoped_tags: List[str] = []
        other_tags: List[str] = []
        for name in self.all_tags:
            if name.lower() in already:
                continue
            (scoped_tags if name.lower() in scoped else other_tags).append(name)
        return [t for t in scoped_tags + other_tags if lower in t.lower()]

    def update_suggestions(self) -> None:
        token = self.active_token_at_cursor()
        if token is None:
            self.suggestions = []
            self.selected_suggestion = None
            self.suggestion_mode = SuggestionMode.NONE
            return
        mode, partial, _, _ = token
        if mode is SuggestionMode.PROJECTS:
            self.suggestions = self._project_suggestions(partial)
        elif mode is SuggestionMode.TAGS:
            self.suggestions = self._tag_suggestions(partial)
        else:
            self.suggestions = [p for p in PRIORITY_CANDIDATES if p.startswith(partial)]
        self.suggestion_mode = mode
        self.selected_suggestion = 0 if self.suggestions else None

    def current_suggestion(self) -> Optional[str]:
        idx = self.selected_suggestion
        if idx is None or not 0 <= idx < len(self.suggestions):
            return None
        return self.suggestions[idx]

    def accept_suggestion(self) -> None:
        selected = self.current_suggestion()
        if selected is None:
            return
        token = self.active_token_at_cursor()
        mode = self.suggestion_mode
        if mode is SuggestionMode.PROJECTS:
            project = next((p for p in self.projects if p.name == selected), None)
            if project is not None:
                self.explicit_project = project
            replacement = ""
        elif mode is SuggestionMode.TAGS:
            replacement = f"#{selected}"
        elif mode is SuggestionMode.PRIORITIES:
            replacement = f"!{selected}"
        else:
            return
        if token is not None:
            _, _, start, end = token
            self.replace_token(start, end, replacement)
        self.suggestions = []
        self.selected_suggestion = None
        self.suggestion_mode = SuggestionMode.NONE
        self.reparse()

    def replace_token(self, start: int, end: int, replacement: str) -> None:
        value = self.input.value
        collapsed = " ".join((value[:start] + replacement + value[end:]).split())
        if replacement:
            cursor = min(start + len(replacement), len(collapsed))
        else:
            cursor = min(start, len(collapsed))
        self.input.set_value(collapsed)
        self.input.cursor = cursor

    # ------------------------------------------------------ conversion

    def to_task(self) -> Optional[Task]:
        title = self.parsed.title.strip()
        if not title:
            return None
        task = Task.new(title)
        task.priority = self.parsed.priority or Priority.MEDIUM
        task.due_date = self.parsed.due_date
        for tag in self.parsed.tags:
            task.add_tag(tag)
        if self.project is not None:
            task.project_id = self.project.id
        return task

    def to_add_task_dialog(self) -> AddTaskDialog:
        dialog = AddTaskDialog(all_tags=self.all_tags)
        if self.parsed.title:
            dialog.title.set_value(self.parsed.title)
        dialog.priority = self.parsed.priority or Priority.MEDIUM
        if self.parsed.due_date_text:
            dialog.due_date.set_value(self.parsed.due_date_text)
        dialog.tags = TagInput(self.parsed.tags)
        if self.project is not None:
            dialog.project_id = self.project.id
        return dialog


__all__ = [
    "QuickCaptureDialog",
    "QuickCaptureAction",
    "SuggestionMode",
    "build_project_tag_map",
    "PRIORITY_CANDIDATES",
]
