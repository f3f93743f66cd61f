"""Key routing: the active dialog first, then the key map and dispatcher.

On SUBMIT each dialog kind performs its storage work and reloads; the
dialog slot is cleared only after every write succeeded, so a failing
Storage call leaves the dialog open with its input intact.
"""

import copy
import logging
from typing import Optional

from core import Task
from core.desktop.devtools.interface.i18n import translate
from core.desktop.devtools.interface.tui_actions import execute
from core.desktop.devtools.interface.tui_add_task import AddTaskDialog
from core.desktop.devtools.interface.tui_confirm import ConfirmDialog
from core.desktop.devtools.interface.tui_delete_project import DeleteProjectChoice, DeleteProjectDialog
from core.desktop.devtools.interface.tui_filter_sort import FilterSortDialog
from core.desktop.devtools.interface.tui_keymap import map_key
from core.desktop.devtools.interface.tui_loader import refresh_tags
from core.desktop.devtools.interface.tui_models import DialogAction, KeyEvent
from core.desktop.devtools.interface.tui_move_project import MoveToProjectDialog
from core.desktop.devtools.interface.tui_project_dialog import ProjectDialog
from core.desktop.devtools.interface.tui_quick_capture import QuickCaptureAction, QuickCaptureDialog
from core.desktop.devtools.interface.tui_settings import SettingsDialog, SettingsOption

logger = logging.getLogger("taskdeck.actions")


def handle_key(app, key: KeyEvent) -> bool:
    """Process one key; False means the event loop should stop."""
    if app.dialog is not None:
        handle_dialog_key(app, key)
        return True
    command = map_key(key, app)
    if command is None:
        return True
    return execute(command, app)


def _close(app) -> None:
    app.dialog = None


def _cancel(app) -> None:
    app.clear_status()
    _close(app)


def _save_task(app, task: Task, editing: bool) -> None:
    if editing:
        app.storage.update_task(task)
        message = translate("STATUS_TASK_UPDATED")
    else:
        app.storage.insert_task(task)
        message = translate("STATUS_TASK_CREATED")
    refresh_tags(app)
    app.load_data()
    app.select_task_by_id(task.id)
    app.set_status(message)


# ------------------------------------------------------------------ dialogs


def _on_add_task(app, dialog: AddTaskDialog, action: DialogAction) -> None:
    if action is DialogAction.SUBMIT:
        task = dialog.to_task()
        if task is None:
            app.set_status(translate("STATUS_TITLE_REQUIRED"))
            return
        _save_task(app, task, dialog.is_editing())
        _close(app)
    elif action is DialogAction.CANCEL:
        _cancel(app)
    elif dialog.status_message:
        app.set_status(dialog.status_message)
        dialog.status_message = None


def _on_confirm(app, dialog: ConfirmDialog, action: DialogAction) -> None:
    if action is DialogAction.SUBMIT:
        task = app.selected_task()
        if task is not None:
            app.storage.delete_task(task.id)
            refresh_tags(app)
            app.load_data()
            app.set_status(translate("STATUS_TASK_DELETED"))
        _close(app)
    elif action is DialogAction.CANCEL:
        _cancel(app)


def _on_filter_sort(app, dialog: FilterSortDialog, action: DialogAction) -> None:
    if action is DialogAction.SUBMIT:
        app.filter = dialog.selected_filter()
        app.sort = dialog.selected_sort()
        app.reset_selection()
        app.set_status(translate("STATUS_FILTER_SORT", filter=app.filter.label(), sort=app.sort.label))
        _close(app)
    elif action is DialogAction.CANCEL:
        _close(app)


def _on_delete_project(app, dialog: DeleteProjectDialog, action: DialogAction) -> None:
    if action is DialogAction.SUBMIT:
        if dialog.selected is DeleteProjectChoice.MOVE_TO_INBOX:
            app.storage.move_tasks_to_inbox(dialog.project_id)
            app.storage.delete_project(dialog.project_id)
            message = translate("STATUS_PROJECT_MOVED_TO_INBOX")
        elif dialog.selected is DeleteProjectChoice.DELETE_TASKS:
            app.storage.delete_tasks_by_project(dialog.project_id)
            app.storage.delete_project(dialog.project_id)
            refresh_tags(app)
            message = translate("STATUS_PROJECT_TASKS_DELETED")
        else:
            _cancel(app)
            return
        app.selected_project_index = 0
        app.load_data()
        app.set_status(message)
        _close(app)
    elif action is DialogAction.CANCEL:
        _cancel(app)


def _on_project(app, dialog: ProjectDialog, action: DialogAction) -> None:
    if action is DialogAction.SUBMIT:
        project = dialog.to_project()
        if project is None:
            app.set_status(translate("STATUS_PROJECT_NAME_REQUIRED"))
            return
        if dialog.is_editing():
            existing = app.storage.get_project(project.id)
            if existing is not None:
                project.created_at = existing.created_at
            app.storage.update_project(project)
            message = translate("STATUS_PROJECT_UPDATED")
        else:
            app.storage.insert_project(project)
            message = translate("STATUS_PROJECT_CREATED")
        app.load_data()
        app.set_status(message)
        _close(app)
    elif action is DialogAction.CANCEL:
        _cancel(app)


def _on_move_to_project(app, dialog: MoveToProjectDialog, action: DialogAction) -> None:
    if action is DialogAction.SUBMIT:
        project = dialog.selected_project()
        current = app.find_task(dialog.task_id)
        if project is not None and current is not None:
            task = copy.deepcopy(current)
            task.project_id = project.id
            task.touch()
            app.storage.update_task(task)
            app.load_data()
            app.set_status(translate("STATUS_TASK_MOVED", project=project.name))
        _close(app)
    elif action is DialogAction.CANCEL:
        _cancel(app)


def _on_settings(app, dialog: SettingsDialog, action: DialogAction) -> None:
    if action is DialogAction.SUBMIT:
        option = dialog.confirmed_option()
        if option is SettingsOption.DELETE_COMPLETED_TASKS:
            count = app.storage.delete_completed_tasks()
            refresh_tags(app)
            app.load_data()
            app.set_status(translate("STATUS_DELETED_COMPLETED", count=count))
        elif option is SettingsOption.RESET_DATABASE:
            task_count = app.storage.delete_all_tasks()
            project_count = app.storage.delete_all_projects_except_inbox()
            refresh_tags(app)
            app.selected_project_index = 0
            app.load_data()
            app.selected_task_index = None
            app.set_status(translate("STATUS_DATABASE_RESET", tasks=task_count, projects=project_count))
        _close(app)
    elif action is DialogAction.CANCEL:
        _cancel(app)


def _on_quick_capture(app, dialog: QuickCaptureDialog, action: QuickCaptureAction) -> None:
    if action is QuickCaptureAction.SUBMIT:
        task = dialog.to_task()
        if task is None:
            app.set_status(translate("STATUS_TITLE_REQUIRED"))
            return
        _save_task(app, task, editing=False)
        _close(app)
    elif action is QuickCaptureAction.EXPAND:
        app.dialog = dialog.to_add_task_dialog()
        app.set_status(translate("STATUS_EDIT_HINT"))
    elif action is QuickCaptureAction.CANCEL:
        _cancel(app)


_DIALOG_HANDLERS = [
    (AddTaskDialog, _on_add_task),
    (QuickCaptureDialog, _on_quick_capture),
    (ConfirmDialog, _on_confirm),
    (FilterSortDialog, _on_filter_sort),
    (DeleteProjectDialog, _on_delete_project),
    (ProjectDialog, _on_project),
    (MoveToProjectDialog, _on_move_to_project),
    (SettingsDialog, _on_settings),
]


def handle_dialog_key(app, key: KeyEvent) -> Optional[object]:
    """Feed `key` to the active dialog and act on its result; returns the action."""
    dialog = app.dialog
    for dialog_type, handler in _DIALOG_HANDLERS:
        if isinstance(dialog, dialog_type):
            action = dialog.handle_key(key)
            handler(app, dialog, action)
            return action
    logger.warning("No key handler for dialog %r", type(dialog).__name__)
    _close(app)
    return None


__all__ = ["handle_key", "handle_dialog_key"]
