"""Application state: the single owner of everything the TUI shows."""

import time
from typing import Any, List, Optional

from application.ports import Storage
from core import Filter, Project, SortOrder, Task
from core.desktop.devtools.interface.constants import STATUS_TTL
from core.desktop.devtools.interface.tui_calendar import CalendarState
from core.desktop.devtools.interface.tui_loader import load_snapshot
from core.desktop.devtools.interface.tui_log_view import LogState
from core.desktop.devtools.interface.tui_models import FocusPanel, InputMode, View
from core.desktop.devtools.interface.tui_navigation import clamp_index, wrap_index

ALL_TASKS_LABEL = "All Tasks"


class AppState:
    """Mutable TUI state threaded through the dispatcher.

    Project selection index 0 is the virtual "All Tasks" entry; indices
    1..N map to ``projects[index - 1]``. The visible task list is computed
    on every call and never cached.
    """

    def __init__(self, storage: Storage, status_ttl: float = STATUS_TTL, log_state: Optional[LogState] = None):
        self.storage = storage
        self.tasks: List[Task] = []
        self.projects: List[Project] = []
        self.tags: List[str] = []

        self.current_view = View.MAIN
        self.input_mode = InputMode.NORMAL
        self.focus = FocusPanel.TASK_LIST
        self.selected_task_index: Optional[int] = None
        self.selected_project_index = 0
        self.filter = Filter()
        self.sort = SortOrder.default()
        self.dialog: Any = None

        self.status_message = ""
        self.status_message_expires = 0.0
        self.status_ttl = status_ttl

        self.input_buffer = ""
        self.input_cursor = 0
        self.editing_task: Optional[Task] = None

        self.search_results: List = []
        self.selected_search_index = 0

        self.calendar_state = CalendarState()
        self.log_state = log_state or LogState()
        self.should_quit = False

    # ------------------------------------------------------------ data

    def load_data(self) -> None:
        self.tasks, self.projects, self.tags = load_snapshot(self.storage)
        self.selected_project_index = min(self.selected_project_index, len(self.projects))
        self.clamp_selection()

    def project_tasks(self) -> List[Task]:
        project_id = self.selected_project_id()
        if project_id is None:
            return list(self.tasks)
        return [task for task in self.tasks if task.project_id == project_id]

    def visible_tasks(self) -> List[Task]:
        return self.sort.apply(self.filter.apply(self.project_tasks()))

    def task_count_for_project(self, project_id: str) -> int:
        return sum(1 for task in self.tasks if task.project_id == project_id)

    def find_task(self, task_id: str) -> Optional[Task]:
        return next((task for task in self.tasks if task.id == task_id), None)

    # -------------------------------------------------------- selection

    def selected_task(self) -> Optional[Task]:
        visible = self.visible_tasks()
        idx = self.selected_task_index
        if idx is None or not 0 <= idx < len(visible):
            return None
        return visible[idx]

    def selected_project(self) -> Optional[Project]:
        if self.selected_project_index == 0:
            return None
        idx = self.selected_project_index - 1
        if 0 <= idx < len(self.projects):
            return self.projects[idx]
        return None

    def selected_project_id(self) -> Optional[str]:
        project = self.selected_project()
        return project.id if project else None

    def selected_project_name(self) -> str:
        project = self.selected_project()
        return project.name if project else ALL_TASKS_LABEL

    def clamp_selection(self) -> None:
        self.selected_task_index = clamp_index(self.selected_task_index, len(self.visible_tasks()))

    def reset_selection(self) -> None:
        self.selected_task_index = 0 if self.visible_tasks() else None

    def select_next_task(self) -> None:
        self.selected_task_index = wrap_index(self.selected_task_index, 1, len(self.visible_tasks()))

    def select_previous_task(self) -> None:
        self.selected_task_index = wrap_index(self.selected_task_index, -1, len(self.visible_tasks()))

    def select_next_project(self) -> None:
        self.selected_project_index = wrap_index(self.selected_project_index, 1, len(self.projects) + 1)
        self.clamp_selection()

    def select_previous_project(self) -> None:
        self.selected_project_index = wrap_index(self.selected_project_index, -1, len(self.projects) + 1)
        self.clamp_selection()

    def select_task_by_id(self, task_id: str) -> bool:
        for idx, task in enumerate(self.visible_tasks()):
            if task.id == task_id:
                self.selected_task_index = idx
                return True
        return False

    def toggle_focus(self) -> None:
        self.focus = FocusPanel.TASK_LIST if self.focus is FocusPanel.SIDEBAR else FocusPanel.SIDEBAR

    # ----------------------------------------------------------- status

    def set_status(self, message: str, ttl: Optional[float] = None) -> None:
        self.status_message = message
        self.status_message_expires = time.time() + (self.status_ttl if ttl is None else ttl)

    def clear_status(self) -> None:
        self.status_message = ""
        self.status_message_expires = 0.0

    def on_tick(self, now: Optional[float] = None) -> None:
        ts = now if now is not None else time.time()
        if self.status_message and ts >= self.status_message_expires:
            self.clear_status()

    # ------------------------------------------------------------ input

    def clear_input(self) -> None:
        self.input_buffer = ""
        self.input_cursor = 0


__all__ = ["AppState", "ALL_TASKS_LABEL"]
