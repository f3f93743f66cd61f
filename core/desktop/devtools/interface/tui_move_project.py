"""Pick a project to move the selected task into."""

from typing import List, Optional

from core import Project
from core.desktop.devtools.interface.tui_models import DialogAction, KeyEvent


class MoveToProjectDialog:
    def __init__(self, projects: List[Project], task_id: str, current_project_id: Optional[str] = None):
        self.projects = list(projects)
        self.task_id = task_id
        self.selected_index = 0
        for idx, project in enumerate(self.projects):
            if project.id == current_project_id:
                self.selected_index = idx
                break

    def selected_project(self) -> Optional[Project]:
        if 0 <= self.selected_index < len(self.projects):
            return self.projects[self.selected_index]
        return None

    def selected_project_id(self) -> Optional[str]:
        project = self.selected_project()
        return project.id if project else None

    def handle_key(self, key: KeyEvent) -> DialogAction:
        k = key.key
        last = max(len(self.projects) - 1, 0)
        if k in ("esc", "q"):
            return DialogAction.CANCEL
        if k == "enter":
            return DialogAction.SUBMIT
        if k in ("up", "k"):
            self.selected_index = max(self.selected_index - 1, 0)
        elif k in ("down", "j"):
            self.selected_index = min(self.selected_index + 1, last)
        elif k in ("home", "g"):
            self.selected_index = 0
        elif k in ("end", "G"):
            self.selected_index = last
        return DialogAction.NONE


__all__ = ["MoveToProjectDialog"]
