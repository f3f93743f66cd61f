import logging
from unittest import mock

import pytest

from application.errors import StorageEngineError
from core import INBOX_ID, Priority, TaskStatus
from core.desktop.devtools.interface.tui_add_task import AddTaskDialog
from core.desktop.devtools.interface.tui_dialog_actions import handle_key
from core.desktop.devtools.interface.tui_filter_sort import FilterSortDialog
from core.desktop.devtools.interface.tui_models import FocusPanel, KeyEvent
from core.desktop.devtools.interface.tui_move_project import MoveToProjectDialog
from core.desktop.devtools.interface.tui_project_dialog import ProjectDialog
from core.desktop.devtools.interface.tui_quick_capture import QuickCaptureDialog
from core.desktop.devtools.interface.tui_settings import SettingsDialog

CTRL_ENTER = KeyEvent("enter", ctrl=True)


def press(app, *keys):
    result = True
    for key in keys:
        result = handle_key(app, key if isinstance(key, KeyEvent) else KeyEvent(key))
    return result


def type_text(app, text):
    press(app, *list(text))


def test_add_task_through_dialog(app):
    press(app, "a")
    assert isinstance(app.dialog, AddTaskDialog)
    type_text(app, "Call bank")
    press(app, CTRL_ENTER)
    assert app.dialog is None
    assert app.status_message == "Task created"
    assert app.selected_task().title == "Call bank"
    assert app.selected_task().project_id is None


def test_empty_title_keeps_dialog_open(app):
    press(app, "a", CTRL_ENTER)
    assert isinstance(app.dialog, AddTaskDialog)
    assert app.status_message == "Title is required"
    press(app, "esc")
    assert app.dialog is None
    assert app.status_message == ""


def test_edit_task_keeps_identity(app):
    original = app.selected_task()
    press(app, "e")
    type_text(app, " v2")
    press(app, CTRL_ENTER)
    stored = app.storage.get_task(original.id)
    assert stored.title == "Write report v2"
    assert stored.created_at == original.created_at
    assert app.status_message == "Task updated"


def test_edit_tags_dialog_adds_tag(app):
    original = app.selected_task()
    press(app, "t")
    type_text(app, "urgent")
    press(app, "enter", CTRL_ENTER)
    assert app.storage.get_task(original.id).tags == ["docs", "urgent"]
    assert "urgent" in app.tags


def test_confirm_delete_task(app):
    doomed = app.selected_task()
    press(app, "d", "y")
    assert app.dialog is None
    assert app.storage.get_task(doomed.id) is None
    assert app.status_message == "Task deleted"
    assert "docs" not in app.tags


def test_confirm_cancel_keeps_task(app):
    press(app, "d", "n")
    assert app.dialog is None
    assert len(app.storage.get_all_tasks()) == 3


def _select_work_in_sidebar(app):
    app.focus = FocusPanel.SIDEBAR
    app.selected_project_index = 2


def test_delete_project_moving_tasks_to_inbox(app):
    _select_work_in_sidebar(app)
    work_id = app.selected_project_id()
    press(app, "d", "m")
    assert app.dialog is None
    assert app.storage.get_project(work_id) is None
    assert app.storage.get_task_count_by_project(INBOX_ID) == 3
    assert app.selected_project_index == 0
    assert app.status_message == "Project deleted, tasks moved to Inbox"


def test_delete_project_with_tasks(app):
    _select_work_in_sidebar(app)
    press(app, "d", "d")
    assert [t.title for t in app.storage.get_all_tasks()] == ["Buy milk"]
    assert [p.id for p in app.projects] == [INBOX_ID]
    assert app.tags == []
    assert app.status_message == "Project and tasks deleted"


def test_create_project_from_sidebar(app):
    app.focus = FocusPanel.SIDEBAR
    press(app, "a")
    assert isinstance(app.dialog, ProjectDialog)
    type_text(app, "Home")
    press(app, CTRL_ENTER)
    assert [p.name for p in app.projects] == ["Inbox", "Work", "Home"]
    assert app.status_message == "Project created"


def test_blank_project_name_keeps_dialog(app):
    app.focus = FocusPanel.SIDEBAR
    press(app, "a", CTRL_ENTER)
    assert isinstance(app.dialog, ProjectDialog)
    assert app.status_message == "Project name is required"


def test_edit_project_keeps_created_at(app):
    _select_work_in_sidebar(app)
    before = app.selected_project()
    press(app, "e")
    type_text(app, "!")
    press(app, CTRL_ENTER)
    after = app.storage.get_project(before.id)
    assert after.name == "Work!"
    assert after.created_at == before.created_at
    assert app.status_message == "Project updated"


def test_move_task_to_inbox(app):
    task = app.selected_task()
    press(app, "m")
    assert isinstance(app.dialog, MoveToProjectDialog)
    press(app, "g", "enter")
    assert app.storage.get_task(task.id).project_id == INBOX_ID
    assert app.status_message == "Task moved to Inbox"


def test_settings_delete_completed(app):
    press(app, " ")
    press(app, "S")
    assert isinstance(app.dialog, SettingsDialog)
    press(app, "enter", "y")
    assert app.dialog is None
    assert len(app.storage.get_all_tasks()) == 2
    assert app.status_message == "Deleted 1 completed task(s)"


def test_settings_reset_database(app):
    press(app, "S", "down", "enter", "y")
    assert app.storage.get_all_tasks() == []
    assert [p.id for p in app.storage.get_all_projects()] == [INBOX_ID]
    assert app.selected_task_index is None
    assert app.status_message == "Database reset: deleted 3 task(s) and 1 project(s)"


def test_quick_capture_creates_task(app):
    press(app, "n")
    assert isinstance(app.dialog, QuickCaptureDialog)
    type_text(app, "Ship @work !1")
    press(app, "enter")
    assert app.dialog is None
    task = app.selected_task()
    assert task.title == "Ship"
    assert task.project_id == app.projects[1].id
    assert task.priority is Priority.URGENT


def test_quick_capture_expands_to_full_dialog(app):
    press(app, "n")
    type_text(app, "Draft")
    press(app, "tab")
    assert isinstance(app.dialog, AddTaskDialog)
    assert app.dialog.title.value == "Draft"
    assert app.status_message == "Tab between fields, Ctrl+Enter to save"


def test_filter_sort_dialog_applies(app):
    press(app, "f")
    dialog = app.dialog
    assert isinstance(dialog, FilterSortDialog)
    press(app, "j", "tab", "j", "enter")
    assert app.dialog is None
    assert app.filter == dialog.selected_filter()
    assert app.sort == dialog.selected_sort()
    assert app.status_message == f"Filter: {app.filter.label()}, Sort: {app.sort.label}"


def test_storage_failure_leaves_dialog_open(app, monkeypatch):
    monkeypatch.setattr(app.storage, "insert_task", mock.Mock(side_effect=StorageEngineError("disk full")))
    press(app, "a")
    type_text(app, "Lost?")
    dialog = app.dialog
    with pytest.raises(StorageEngineError):
        press(app, CTRL_ENTER)
    assert app.dialog is dialog
    assert dialog.title.value == "Lost?"
    assert len(app.tasks) == 3


def test_completed_toggle_via_space_in_detail_view(app):
    task = app.selected_task()
    press(app, "v", " ")
    assert app.storage.get_task(task.id).status is TaskStatus.COMPLETED


def test_unknown_dialog_is_dropped(app, caplog):
    app.dialog = object()
    with caplog.at_level(logging.WARNING, logger="taskdeck.actions"):
        assert press(app, "x") is True
    assert app.dialog is None
    assert "No key handler" in caplog.text
