"""Add/edit task dialog: title, description, due date, priority and tags."""

import logging
import webbrowser
from enum import Enum
from typing import List, Optional

from core import Priority, Task
from core.dates import local_date, parse_due_date
from core.desktop.devtools.interface.tui_date_picker import DatePicker, DatePickerAction
from core.desktop.devtools.interface.tui_models import DialogAction, KeyEvent
from core.desktop.devtools.interface.tui_tag_input import TagInput
from core.desktop.devtools.interface.tui_text_input import TextInput
from core.desktop.devtools.interface.tui_textarea import DescriptionTextArea, TextAreaAction

logger = logging.getLogger("taskdeck.tui")


class AddTaskField(Enum):
    TITLE = 0
    DESCRIPTION = 1
    DUE_DATE = 2
    PRIORITY = 3
    TAGS = 4
    SUBMIT = 5

    def next(self) -> "AddTaskField":
        members = list(AddTaskField)
        return members[(members.index(self) + 1) % len(members)]

    def prev(self) -> "AddTaskField":
        members = list(AddTaskField)
        return members[(members.index(self) - 1) % len(members)]


_PRIORITY_KEYS = {"1": Priority.LOW, "2": Priority.MEDIUM, "3": Priority.HIGH, "4": Priority.URGENT}
_PRIORITY_ORDER = [Priority.LOW, Priority.MEDIUM, Priority.HIGH, Priority.URGENT]


class AddTaskDialog:
    def __init__(self, all_tags: Optional[List[str]] = None, project_id: Optional[str] = None):
        self.title = TextInput(placeholder="Task title...")
        self.description = DescriptionTextArea()
        self.due_date = TextInput(placeholder="today, +1d, mon, c=calendar")
        self.priority = Priority.MEDIUM
        self.project_id = project_id
        self.tags = TagInput()
        self.all_tags: List[str] = list(all_tags or [])
        self.focused_field = AddTaskField.TITLE
        self.editing_task: Optional[Task] = None
        self.dialog_title = "Add Task"
        self.date_picker: Optional[DatePicker] = None
        self.status_message: Optional[str] = None

    @classmethod
    def from_task(cls, task: Task, all_tags: Optional[List[str]] = None) -> "AddTaskDialog":
        dialog = cls(all_tags=all_tags, project_id=task.project_id)
        dialog.title.set_value(task.title)
        dialog.description.set_text(task.description or "")
        if task.due_date is not None:
            dialog.due_date.set_value(local_date(task.due_date).strftime("%Y-%m-%d"))
        dialog.priority = task.priority
        dialog.tags = TagInput(task.tags)
        dialog.editing_task = task
        dialog.dialog_title = "Edit Task"
        return dialog

    @property
    def editing_task_id(self) -> Optional[str]:
        return self.editing_task.id if self.editing_task else None

    def is_editing(self) -> bool:
        return self.editing_task is not None

    # ------------------------------------------------------------ keys

    def handle_key(self, key: KeyEvent) -> DialogAction:
        if self.date_picker is not None:
            return self._handle_date_picker(key)

        if key.key == "esc":
            return DialogAction.CANCEL
        if key.key == "enter" and (key.ctrl or self.focused_field is AddTaskField.SUBMIT):
            return DialogAction.SUBMIT
        if key.key == "tab" and not key.ctrl:
            if self.focused_field is AddTaskField.TAGS and self.tags.current_suggestion() is not None:
                self.tags.handle_key(key, self.all_tags)
            else:
                self.focused_field = self.focused_field.next()
            return DialogAction.NONE
        if key.key == "backtab":
            self.focused_field = self.focused_field.prev()
            return DialogAction.NONE

        field = self.focused_field
        if field is AddTaskField.TITLE:
            self.title.handle_editing_key(key)
        elif field is AddTaskField.DESCRIPTION:
            self._handle_description(key)
        elif field is AddTaskField.DUE_DATE:
            self._handle_due_date(key)
        elif field is AddTaskField.PRIORITY:
            self._handle_priority(key)
        elif field is AddTaskField.TAGS:
            self.tags.handle_key(key, self.all_tags)
        return DialogAction.NONE

    def _handle_date_picker(self, key: KeyEvent) -> DialogAction:
        action = self.date_picker.handle_key(key)
        if action is DatePickerAction.SELECT:
            self.due_date.set_value(self.date_picker.selected.strftime("%Y-%m-%d"))
            self.date_picker = None
        elif action is DatePickerAction.CANCEL:
            self.date_picker = None
        return DialogAction.NONE

    def _handle_description(self, key: KeyEvent) -> None:
        action = self.description.handle_key(key)
        if action is TextAreaAction.NEXT_FIELD:
            self.focused_field = self.focused_field.next()
        elif action is TextAreaAction.PREV_FIELD:
            self.focused_field = self.focused_field.prev()
        elif action is TextAreaAction.OPEN_LINK:
            self.open_link(self.description.link_at_cursor())

    def open_link(self, url: Optional[str]) -> None:
        if not url:
            return
        try:
            opened = webbrowser.open(url)
        except webbrowser.Error as exc:
            logger.warning("Failed to open %s: %s", url, exc)
            opened = False
        self.status_message = f"Opened: {url}" if opened else "Failed to open link"

    def _handle_due_date(self, key: KeyEvent) -> None:
        if key.is_plain_char("c"):
            initial = parse_due_date(self.due_date.value.strip())
            self.date_picker = DatePicker(local_date(initial) if initial else None)
            return
        self.due_date.handle_editing_key(key)

    def _handle_priority(self, key: KeyEvent) -> None:
        idx = _PRIORITY_ORDER.index(self.priority)
        if key.key in ("left", "h"):
            self.priority = _PRIORITY_ORDER[(idx - 1) % len(_PRIORITY_ORDER)]
        elif key.key in ("right", "l"):
            self.priority = _PRIORITY_ORDER[(idx + 1) % len(_PRIORITY_ORDER)]
        elif key.key in _PRIORITY_KEYS:
            self.priority = _PRIORITY_KEYS[key.key]

    # ------------------------------------------------------ conversion

    def to_task(self) -> Optional[Task]:
        """Build the task; None when the title is empty.

        When editing, id, status, creation and completion times carry over.
        """
        title = self.title.value.strip()
        if not title:
            return None
        task = Task.new(title)
        if self.editing_task is not None:
            task.id = self.editing_task.id
            task.status = self.editing_task.status
            task.created_at = self.editing_task.created_at
            task.completed_at = self.editing_task.completed_at
        description = self.description.text().strip()
        task.description = description or None
        task.due_date = parse_due_date(self.due_date.value.strip())
        task.priority = self.priority
        task.project_id = self.project_id
        task.tags = list(self.tags.tags)
        return task


__all__ = ["AddTaskDialog", "AddTaskField"]
