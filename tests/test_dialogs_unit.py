import unittest

import pytest

from core import Filter, FilterKind, INBOX_ID, Priority, Project, SortOrder, TaskStatus
from core.desktop.devtools.interface.tui_confirm import ConfirmDialog
from core.desktop.devtools.interface.tui_delete_project import DeleteProjectChoice, DeleteProjectDialog
from core.desktop.devtools.interface.tui_filter_sort import FILTERS, SORTS, FilterSortDialog, FilterSortSection
from core.desktop.devtools.interface.tui_models import DialogAction, KeyEvent
from core.desktop.devtools.interface.tui_move_project import MoveToProjectDialog
from core.desktop.devtools.interface.tui_project_dialog import PROJECT_COLORS, PROJECT_ICONS, ProjectDialog, ProjectField
from core.desktop.devtools.interface.tui_settings import SettingsDialog, SettingsOption, SettingsState

from conftest import make_task


def press(dialog, *keys):
    action = None
    for key in keys:
        action = dialog.handle_key(key if isinstance(key, KeyEvent) else KeyEvent(key))
    return action


class ConfirmDialogTests(unittest.TestCase):
    def test_enter_defaults_to_cancel(self):
        dialog = ConfirmDialog.delete_task("Buy milk")
        self.assertIn('"Buy milk"', dialog.message)
        self.assertEqual(press(dialog, "enter"), DialogAction.CANCEL)

    def test_toggle_then_enter_submits(self):
        dialog = ConfirmDialog.delete_task("x")
        self.assertEqual(press(dialog, "left", "enter"), DialogAction.SUBMIT)

    def test_shortcuts(self):
        self.assertEqual(press(ConfirmDialog("t", "m"), "Y"), DialogAction.SUBMIT)
        self.assertEqual(press(ConfirmDialog("t", "m"), "n"), DialogAction.CANCEL)
        self.assertEqual(press(ConfirmDialog("t", "m"), "esc"), DialogAction.CANCEL)
        self.assertEqual(press(ConfirmDialog("t", "m"), "x"), DialogAction.NONE)


def test_delete_project_message_pluralizes():
    assert "has 1 task." in DeleteProjectDialog("p", "Work", 1).message
    assert "has 3 tasks." in DeleteProjectDialog("p", "Work", 3).message


def test_delete_project_rejects_inbox():
    with pytest.raises(ValueError):
        DeleteProjectDialog(INBOX_ID, "Inbox", 0)


def test_delete_project_shortcuts_and_navigation():
    dialog = DeleteProjectDialog("p", "Work", 2)
    assert press(dialog, "d") is DialogAction.SUBMIT
    assert dialog.selected is DeleteProjectChoice.DELETE_TASKS

    dialog = DeleteProjectDialog("p", "Work", 2)
    assert press(dialog, "M") is DialogAction.SUBMIT
    assert dialog.selected is DeleteProjectChoice.MOVE_TO_INBOX

    dialog = DeleteProjectDialog("p", "Work", 2)
    assert press(dialog, "up") is DialogAction.NONE
    assert dialog.selected is DeleteProjectChoice.CANCEL
    assert press(dialog, "enter") is DialogAction.CANCEL

    dialog = DeleteProjectDialog("p", "Work", 2)
    assert press(dialog, "j", "enter") is DialogAction.SUBMIT
    assert dialog.selected is DeleteProjectChoice.DELETE_TASKS
    assert press(DeleteProjectDialog("p", "Work", 0), "c") is DialogAction.CANCEL


def test_move_dialog_starts_on_current_project_and_clamps():
    projects = [Project.inbox(), Project(id="a", name="A"), Project(id="b", name="B")]
    dialog = MoveToProjectDialog(projects, "task-1", current_project_id="a")
    assert dialog.selected_project_id() == "a"
    press(dialog, "down", "down", "down")
    assert dialog.selected_project_id() == "b"
    press(dialog, "g")
    assert dialog.selected_project_id() == INBOX_ID
    press(dialog, "up")
    assert dialog.selected_index == 0
    assert press(dialog, "G", "enter") is DialogAction.SUBMIT
    assert dialog.selected_project_id() == "b"
    assert press(dialog, "q") is DialogAction.CANCEL


def test_move_dialog_with_no_projects():
    dialog = MoveToProjectDialog([], "task-1")
    assert dialog.selected_project() is None
    press(dialog, "down")
    assert dialog.selected_index == 0


def test_project_dialog_create_flow():
    dialog = ProjectDialog()
    assert not dialog.is_editing()
    press(dialog, *"Home")
    press(dialog, "tab", "right", "right")
    assert dialog.focused_field is ProjectField.COLOR
    assert dialog.color == PROJECT_COLORS[2][0]
    press(dialog, "tab", "8")
    assert dialog.icon == PROJECT_ICONS[7]
    press(dialog, "right")
    assert dialog.icon == PROJECT_ICONS[0]
    assert press(dialog, "tab", "enter") is DialogAction.SUBMIT
    project = dialog.to_project()
    assert project.name == "Home"
    assert project.color == PROJECT_COLORS[2][0]


def test_project_dialog_color_wraps_left():
    dialog = ProjectDialog()
    press(dialog, "tab", "left")
    assert dialog.selected_color == len(PROJECT_COLORS) - 1


def test_project_dialog_edit_keeps_id_and_rejects_blank():
    original = Project.with_style("Work", PROJECT_COLORS[3][0], PROJECT_ICONS[4])
    dialog = ProjectDialog.from_project(original)
    assert dialog.is_editing()
    assert dialog.selected_color == 3 and dialog.selected_icon == 4
    assert dialog.to_project().id == original.id
    press(dialog, *["backspace"] * 4)
    assert dialog.to_project() is None
    assert press(dialog, KeyEvent("enter", ctrl=True)) is DialogAction.SUBMIT


def test_filter_sort_dialog_initial_selection_and_counts():
    tasks = [make_task("a"), make_task("b", status=TaskStatus.COMPLETED), make_task("c", priority=Priority.URGENT)]
    dialog = FilterSortDialog(Filter(FilterKind.COMPLETED), SortOrder.PRIORITY_DESC, tasks)
    assert dialog.selected_filter() == Filter(FilterKind.COMPLETED)
    assert dialog.selected_sort() is SortOrder.PRIORITY_DESC
    labels = [label for _, label, _ in FILTERS]
    assert dialog.filter_counts[labels.index("All")] == 3
    assert dialog.filter_counts[labels.index("Pending")] == 2
    assert dialog.filter_counts[labels.index("Urgent")] == 1


def test_filter_sort_dialog_unknown_filter_falls_back():
    dialog = FilterSortDialog(Filter.by_tag("x"), SortOrder.CREATED_ASC, [])
    assert dialog.filter_index == 0
    assert dialog.sort_index == 0
    dialog = FilterSortDialog(Filter(FilterKind.IN_PROGRESS), SortOrder.DUE_DATE_ASC, [])
    assert dialog.filter_index == 0


def test_filter_sort_dialog_navigation():
    dialog = FilterSortDialog(Filter(FilterKind.ALL), SortOrder.DUE_DATE_ASC, [])
    press(dialog, "up")
    assert dialog.filter_index == 0
    press(dialog, "G")
    assert dialog.filter_index == len(FILTERS) - 1
    press(dialog, "tab")
    assert dialog.section is FilterSortSection.SORT
    press(dialog, "j", "j")
    assert dialog.selected_sort() is SORTS[2][0]
    press(dialog, "end")
    assert dialog.sort_index == len(SORTS) - 1
    press(dialog, "h")
    assert dialog.section is FilterSortSection.FILTER
    assert press(dialog, "enter") is DialogAction.SUBMIT
    assert press(dialog, "esc") is DialogAction.CANCEL


class SettingsDialogTests(unittest.TestCase):
    def test_enter_opens_confirmation_defaulting_to_no(self):
        dialog = SettingsDialog()
        press(dialog, "down", "enter")
        self.assertIs(dialog.state, SettingsState.CONFIRMING)
        self.assertIs(dialog.confirmed_option(), SettingsOption.RESET_DATABASE)
        self.assertEqual(press(dialog, "enter"), DialogAction.NONE)
        self.assertIs(dialog.state, SettingsState.MENU)
        self.assertIsNone(dialog.confirmed_option())

    def test_confirm_with_y_or_toggle(self):
        dialog = SettingsDialog()
        press(dialog, "enter")
        self.assertEqual(press(dialog, "y"), DialogAction.SUBMIT)
        self.assertIs(dialog.confirmed_option(), SettingsOption.DELETE_COMPLETED_TASKS)

        dialog = SettingsDialog()
        press(dialog, "enter", "tab")
        self.assertEqual(press(dialog, "enter"), DialogAction.SUBMIT)

    def test_menu_navigation_clamps_and_esc_cancels(self):
        dialog = SettingsDialog()
        press(dialog, "k")
        self.assertEqual(dialog.selected_index, 0)
        press(dialog, "j", "j", "j")
        self.assertEqual(dialog.selected_index, len(dialog.options) - 1)
        self.assertEqual(press(dialog, "esc"), DialogAction.CANCEL)

    def test_esc_in_confirmation_returns_to_menu(self):
        dialog = SettingsDialog()
        press(dialog, "enter")
        self.assertEqual(press(dialog, "esc"), DialogAction.NONE)
        self.assertIs(dialog.state, SettingsState.MENU)


@pytest.mark.parametrize("key", ["²", "٣", "0", "9"])
def test_project_dialog_ignores_non_ascii_and_out_of_range_digits(key):
    dialog = ProjectDialog()
    press(dialog, "tab")
    assert dialog.focused_field is ProjectField.COLOR
    assert press(dialog, key) is DialogAction.NONE
    assert dialog.selected_color == 0
