"""Create or edit a project: name, color and icon."""

from enum import Enum
from typing import Optional

from core import Project
from core.desktop.devtools.interface.tui_models import DialogAction, KeyEvent
from core.desktop.devtools.interface.tui_text_input import TextInput

PROJECT_COLORS = [
    ("#3498db", "Blue"),
    ("#e74c3c", "Red"),
    ("#2ecc71", "Green"),
    ("#f39c12", "Orange"),
    ("#9b59b6", "Purple"),
    ("#1abc9c", "Teal"),
    ("#e91e63", "Pink"),
    ("#607d8b", "Gray"),
]

PROJECT_ICONS = ["📁", "📋", "🏠", "💼", "📚", "🎯", "💡", "⭐"]


class ProjectField(Enum):
    NAME = 0
    COLOR = 1
    ICON = 2
    SUBMIT = 3

    def next(self) -> "ProjectField":
        members = list(ProjectField)
        return members[(members.index(self) + 1) % len(members)]

    def prev(self) -> "ProjectField":
        members = list(ProjectField)
        return members[(members.index(self) - 1) % len(members)]


def _cycle_choice(index: int, size: int, key: KeyEvent) -> int:
    """Left/right wrap around; digits 1..size jump directly."""
    k = key.key
    if k in ("left", "h"):
        return (index - 1) % size
    if k in ("right", "l"):
        return (index + 1) % size
    if key.is_char and k.isascii() and k.isdigit() and 1 <= int(k) <= size:
        return int(k) - 1
    return index


class ProjectDialog:
    def __init__(self):
        self.name = TextInput(placeholder="Project name...")
        self.selected_color = 0
        self.selected_icon = 0
        self.focused_field = ProjectField.NAME
        self.editing_project_id: Optional[str] = None
        self.dialog_title = "New Project"

    @classmethod
    def from_project(cls, project: Project) -> "ProjectDialog":
        dialog = cls()
        dialog.name.set_value(project.name)
        colors = [code for code, _ in PROJECT_COLORS]
        dialog.selected_color = colors.index(project.color) if project.color in colors else 0
        dialog.selected_icon = PROJECT_ICONS.index(project.icon) if project.icon in PROJECT_ICONS else 0
        dialog.editing_project_id = project.id
        dialog.dialog_title = "Edit Project"
        return dialog

    def is_editing(self) -> bool:
        return self.editing_project_id is not None

    @property
    def color(self) -> str:
        return PROJECT_COLORS[self.selected_color][0]

    @property
    def icon(self) -> str:
        return PROJECT_ICONS[self.selected_icon]

    def handle_key(self, key: KeyEvent) -> DialogAction:
        k = key.key
        if k == "esc":
            return DialogAction.CANCEL
        if k == "enter" and (key.ctrl or self.focused_field is ProjectField.SUBMIT):
            return DialogAction.SUBMIT
        if k == "tab":
            self.focused_field = self.focused_field.next()
            return DialogAction.NONE
        if k == "backtab":
            self.focused_field = self.focused_field.prev()
            return DialogAction.NONE

        field = self.focused_field
        if field is ProjectField.NAME:
            if k in ("backspace", "delete", "left", "right", "home", "end") or (key.is_char and key.plain):
                self.name.handle_editing_key(key)
        elif field is ProjectField.COLOR:
            self.selected_color = _cycle_choice(self.selected_color, len(PROJECT_COLORS), key)
        elif field is ProjectField.ICON:
            self.selected_icon = _cycle_choice(self.selected_icon, len(PROJECT_ICONS), key)
        return DialogAction.NONE

    def to_project(self) -> Optional[Project]:
        name = self.name.value.strip()
        if not name:
            return None
        project = Project.with_style(name, self.color, self.icon)
        if self.editing_project_id is not None:
            project.id = self.editing_project_id
        return project


__all__ = ["ProjectDialog", "ProjectField", "PROJECT_COLORS", "PROJECT_ICONS"]
