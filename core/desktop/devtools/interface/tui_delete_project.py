"""Delete-project dialog: move the project's tasks to Inbox, delete them, or cancel."""

from enum import Enum

from core import INBOX_ID
from core.desktop.devtools.interface.tui_models import DialogAction, KeyEvent


class DeleteProjectChoice(Enum):
    MOVE_TO_INBOX = 0
    DELETE_TASKS = 1
    CANCEL = 2


_CHOICES = list(DeleteProjectChoice)


class DeleteProjectDialog:
    def __init__(self, project_id: str, project_name: str, task_count: int):
        if project_id == INBOX_ID:
            raise ValueError("The Inbox project cannot be deleted")
        self.project_id = project_id
        self.project_name = project_name
        self.task_count = task_count
        self.selected = DeleteProjectChoice.MOVE_TO_INBOX

    @property
    def message(self) -> str:
        tasks = "1 task" if self.task_count == 1 else f"{self.task_count} tasks"
        return f'Delete project "{self.project_name}"?\nThis project has {tasks}.'

    def _step(self, delta: int) -> None:
        self.selected = _CHOICES[(_CHOICES.index(self.selected) + delta) % len(_CHOICES)]

    def handle_key(self, key: KeyEvent) -> DialogAction:
        k = key.key
        if k in ("m", "M"):
            self.selected = DeleteProjectChoice.MOVE_TO_INBOX
            return DialogAction.SUBMIT
        if k in ("d", "D"):
            self.selected = DeleteProjectChoice.DELETE_TASKS
            return DialogAction.SUBMIT
        if k in ("esc", "c", "C"):
            self.selected = DeleteProjectChoice.CANCEL
            return DialogAction.CANCEL
        if k in ("up", "k"):
            self._step(-1)
        elif k in ("down", "j"):
            self._step(1)
        elif k == "enter":
            if self.selected is DeleteProjectChoice.CANCEL:
                return DialogAction.CANCEL
            return DialogAction.SUBMIT
        return DialogAction.NONE


__all__ = ["DeleteProjectDialog", "DeleteProjectChoice"]
