"""Rendering helpers for TaskDeckTUI to keep the class slim.

Every function takes the AppState (or a dialog) plus the available width
and returns prompt_toolkit FormattedText. Nothing here mutates state.
"""

import logging
import time
from datetime import timedelta
from typing import List, Optional, Tuple

from prompt_toolkit.formatted_text import FormattedText

from core import Task
from core.dates import format_due_date, local_date, local_today
from core.desktop.devtools.interface.constants import HELP_LINES, TIMESTAMP_FORMAT
from core.desktop.devtools.interface.i18n import translate
from core.desktop.devtools.interface.tui_add_task import AddTaskDialog, AddTaskField
from core.desktop.devtools.interface.tui_calendar import CalendarFocus, get_tasks_for_selected_day, has_overdue_on
from core.desktop.devtools.interface.tui_confirm import ConfirmDialog
from core.desktop.devtools.interface.tui_delete_project import DeleteProjectChoice, DeleteProjectDialog
from core.desktop.devtools.interface.tui_display import display_width, pad_display, trim_display, wrap_display
from core.desktop.devtools.interface.tui_filter_sort import FILTERS, SORTS, FilterSortDialog, FilterSortSection
from core.desktop.devtools.interface.tui_models import FocusPanel, InputMode
from core.desktop.devtools.interface.tui_move_project import MoveToProjectDialog
from core.desktop.devtools.interface.tui_project_dialog import PROJECT_COLORS, PROJECT_ICONS, ProjectDialog, ProjectField
from core.desktop.devtools.interface.tui_quick_capture import QuickCaptureDialog
from core.desktop.devtools.interface.tui_settings import SettingsDialog, SettingsState
from core.desktop.devtools.interface.tui_text_input import TextInput

Fragments = List[Tuple[str, str]]

DAY_NAMES = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]


def _merge_style(selected_style: Optional[str], fragment_style: str) -> str:
    if not selected_style:
        return fragment_style
    return f"{selected_style} {fragment_style}".strip()


def _header(title: str, width: int) -> Fragments:
    return [("class:header", pad_display(f" {title}", width)), ("", "\n")]


def _priority_style(task: Task) -> str:
    return f"class:priority.{task.priority.code}"


def _status_style(task: Task) -> str:
    return f"class:status.{task.status.code}"


def _status_glyph(task: Task) -> str:
    return task.status.value[2]


def _priority_glyph(task: Task) -> str:
    return task.priority.value[3]


def _due_fragment(task: Task) -> Tuple[str, str]:
    if task.due_date is None:
        return ("class:text.dim", "")
    style = "class:overdue" if task.is_overdue() else "class:text.dim"
    return (style, format_due_date(task.due_date))


# ------------------------------------------------------------------ sidebar


def render_sidebar(app, width: int) -> FormattedText:
    focused = app.focus is FocusPanel.SIDEBAR and app.dialog is None
    result: Fragments = _header(translate("PROJECTS"), width)
    rows = [(translate("ALL_TASKS"), "≡", len(app.tasks))]
    rows += [(p.name, p.icon, app.task_count_for_project(p.id)) for p in app.projects]
    for idx, (name, icon, count) in enumerate(rows):
        selected = idx == app.selected_project_index
        counter = f" {count}"
        label = trim_display(f" {icon} {name}", max(width - display_width(counter), 1), "…")
        line = pad_display(label, max(width - display_width(counter), 0)) + counter
        if selected:
            result.append(("class:selected" if focused else "class:focused", line))
        else:
            result.append(("class:text", line))
        result.append(("", "\n"))
    return FormattedText(result)


# ---------------------------------------------------------------- task list


def _task_row(task: Task, width: int, selected_style: Optional[str]) -> Fragments:
    done = task.status.is_closed
    title_style = "class:done" if done else "class:text"
    due_style, due_text = _due_fragment(task)
    tags = " ".join(f"#{t}" for t in task.tags)
    right = f" {due_text}" if due_text else ""
    tag_part = f" {tags}" if tags else ""
    fixed = 5 + display_width(right)
    title_width = max(width - fixed - display_width(tag_part), 4)
    title = trim_display(task.title, title_width, "…")
    if display_width(title) + display_width(tag_part) > width - fixed:
        tag_part = trim_display(tag_part, max(width - fixed - display_width(title), 0))
    used = 5 + display_width(title) + display_width(tag_part) + display_width(right)
    filler = " " * max(width - used, 0)
    return [
        (_merge_style(selected_style, ""), " "),
        (_merge_style(selected_style, _status_style(task)), _status_glyph(task)),
        (_merge_style(selected_style, ""), " "),
        (_merge_style(selected_style, _priority_style(task)), _priority_glyph(task)),
        (_merge_style(selected_style, ""), " "),
        (_merge_style(selected_style, title_style), title),
        (_merge_style(selected_style, "class:tag"), tag_part),
        (_merge_style(selected_style, ""), filler),
        (_merge_style(selected_style, due_style), right),
    ]


def render_task_list(app, width: int, height: int) -> FormattedText:
    tasks = app.visible_tasks()
    focused = app.focus is FocusPanel.TASK_LIST and app.dialog is None
    title = f"{translate('TASKS')}: {app.selected_project_name()} [{app.filter.label()}]"
    result: Fragments = _header(title, width)
    if not tasks:
        result.append(("class:text.dim", f" {translate('NO_TASKS')}"))
        return FormattedText(result)
    rows = max(height - 1, 1)
    selected = app.selected_task_index
    offset = 0
    if selected is not None and selected >= rows:
        offset = selected - rows + 1
    for idx, task in enumerate(tasks[offset:offset + rows], start=offset):
        style = None
        if idx == selected:
            style = "class:selected" if focused else "class:focused"
        result.extend(_task_row(task, width, style))
        result.append(("", "\n"))
    return FormattedText(result)


def render_input_line(app, width: int) -> FormattedText:
    """Inline editor shown while Editing mode is active."""
    if app.input_mode is not InputMode.EDITING:
        return FormattedText([])
    return FormattedText(_input_fragments("> ", app.input_buffer, app.input_cursor, width))


def _input_fragments(prompt: str, value: str, cursor: int, width: int, placeholder: str = "") -> Fragments:
    if not value and placeholder:
        return [("class:text", prompt), ("class:selected", " "), ("class:text.dimmer", trim_display(placeholder, width))]
    before = value[:cursor]
    at = value[cursor] if cursor < len(value) else " "
    after = value[cursor + 1:]
    return [
        ("class:text", prompt),
        ("class:text", before),
        ("class:selected", at),
        ("class:text", after),
    ]


def _text_input(prompt: str, field: TextInput, width: int, active: bool) -> Fragments:
    if active:
        return _input_fragments(prompt, field.value, field.cursor, width, field.placeholder)
    shown = field.value or field.placeholder
    style = "class:text" if field.value else "class:text.dimmer"
    return [("class:text.dim", prompt), (style, trim_display(shown, max(width - display_width(prompt), 0), "…"))]


# -------------------------------------------------------------- task detail


def render_task_detail(app, width: int) -> FormattedText:
    task = app.selected_task()
    if task is None:
        return FormattedText(_header(translate("TASKS"), width) + [("class:text.dim", f" {translate('NO_TASKS')}")])
    result: Fragments = _header(task.title, width)
    project = next((p for p in app.projects if p.id == task.project_id), None)
    due_style, due_text = _due_fragment(task)
    fields = [
        (translate("STATUS"), _status_style(task), f"{_status_glyph(task)} {task.status.label}"),
        (translate("PRIORITY"), _priority_style(task), f"{_priority_glyph(task)} {task.priority.label}"),
        (translate("DUE"), due_style, due_text or "-"),
        (translate("PROJECT"), "class:text", f"{project.icon} {project.name}" if project else "-"),
        (translate("TAGS"), "class:tag", " ".join(f"#{t}" for t in task.tags) or "-"),
    ]
    for label, style, value in fields:
        result.append(("class:text.dim", pad_display(f" {label}:", 12)))
        result.append((style, value))
        result.append(("", "\n"))
    result.append(("class:text.dim", f" created {local_date(task.created_at)}  updated {task.updated_at.astimezone().strftime(TIMESTAMP_FORMAT)}"))
    result.append(("", "\n\n"))
    result.append(("class:text.dim", f" {translate('DESCRIPTION')}:"))
    result.append(("", "\n"))
    for line in wrap_display(task.description or "-", max(width - 2, 1)):
        result.append(("class:text", f" {line}"))
        result.append(("", "\n"))
    return FormattedText(result)


# ----------------------------------------------------------------- calendar


def render_calendar(app, width: int) -> FormattedText:
    state = app.calendar_state
    today = local_today()
    result: Fragments = _header(translate("CALENDAR_TITLE"), width)
    cell = max(width // 7, 6)
    grid_focused = state.focus is CalendarFocus.DAY_GRID
    for offset in range(7):
        day = state.week_start + timedelta(days=offset)
        count = sum(
            1 for t in app.tasks
            if t.due_date is not None and local_date(t.due_date) == day and (state.show_completed or not t.status.is_closed)
        )
        label = f"{DAY_NAMES[offset]} {day.day:02d}" + (f" ({count})" if count else "")
        if offset == state.selected_day:
            style = "class:selected" if grid_focused else "class:focused"
        elif has_overdue_on(app.tasks, day):
            style = "class:overdue"
        elif day == today:
            style = "class:header"
        else:
            style = "class:text"
        result.append((style, pad_display(f" {label}", cell)))
    result.append(("", "\n\n"))

    selected_date = state.selected_date()
    result.append(("class:dialog.title", f" {selected_date.strftime('%A, %B %d')}"))
    result.append(("", "\n"))
    tasks = get_tasks_for_selected_day(app)
    if not tasks:
        result.append(("class:text.dim", f" {translate('NO_TASKS_FOR_DAY')}"))
        return FormattedText(result)
    for idx, task in enumerate(tasks):
        style = None
        if state.focus is CalendarFocus.TASK_LIST and idx == state.selected_task_index:
            style = "class:selected"
        result.extend(_task_row(task, width, style))
        result.append(("", "\n"))
    return FormattedText(result)


# ------------------------------------------------------------------- search


def _highlight(title: str, span: Optional[Tuple[int, int]], base: str) -> Fragments:
    if span is None:
        return [(base, title)]
    start, end = span
    return [(base, title[:start]), ("class:match", title[start:end]), (base, title[end:])]


def render_search(app, width: int) -> FormattedText:
    result: Fragments = _header(translate("SEARCH_IN", project=app.selected_project_name()), width)
    result.extend(_input_fragments("/ ", app.input_buffer, app.input_cursor, width))
    result.append(("", "\n\n"))
    if not app.input_buffer:
        return FormattedText(result)
    if not app.search_results:
        result.append(("class:text.dim", f" {translate('NO_RESULTS')}"))
        return FormattedText(result)
    for idx, item in enumerate(app.search_results):
        task = item.task
        selected = idx == app.selected_search_index
        marker = "▸ " if selected else "  "
        base = "class:done" if task.status.is_closed else "class:text"
        if selected:
            base = "class:selected"
        result.append((base, marker))
        result.append((_status_style(task), f"{_status_glyph(task)} "))
        result.extend(_highlight(trim_display(task.title, max(width - 6, 1), "…"), item.title_match, base))
        result.append(("", "\n"))
        if item.desc_snippet:
            result.append(("class:text.dim", "    " + trim_display(item.desc_snippet.replace("\n", " "), max(width - 4, 1))))
            result.append(("", "\n"))
    return FormattedText(result)


# -------------------------------------------------------------- help / logs


def render_help(app, width: int) -> FormattedText:
    result: Fragments = _header(translate("HELP_TITLE"), width)
    key_width = max(display_width(keys) for keys, _ in HELP_LINES) + 2
    for keys, description in HELP_LINES:
        result.append(("class:tag", pad_display(f" {keys}", key_width + 1)))
        result.append(("class:text", description))
        result.append(("", "\n"))
    return FormattedText(result)


def render_debug_logs(app, width: int) -> FormattedText:
    state = app.log_state
    result: Fragments = _header(translate("DEBUG_TITLE"), width)
    result.append(("class:text.dim", f" level ≥ {logging.getLevelName(state.display_level)}"))
    result.append(("", "\n"))
    if not state.hide_targets:
        current = state.current_target()
        for target in state.targets():
            level = logging.getLevelName(state.threshold_for(target))
            style = "class:selected" if target == current and state.focus_targets else "class:text.dim"
            result.append((style, pad_display(f" {target}", max(width - 10, 1)) + f" {level}"))
            result.append(("", "\n"))
        result.append(("class:border", "─" * width))
        result.append(("", "\n"))
    for line in state.visible_lines():
        stamp = time.strftime("%H:%M:%S", time.localtime(line.created))
        result.append(("class:text.dim", f"{stamp} "))
        result.append((f"class:log.{line.level_name.lower()}", f"{line.level_name:<8} "))
        result.append(("class:text.dim", f"{line.target}: "))
        result.append(("class:text", line.message))
        result.append(("", "\n"))
    return FormattedText(result)


# ------------------------------------------------------------------ dialogs


def _button(label: str, focused: bool, danger: bool = False) -> Tuple[str, str]:
    if focused:
        return ("class:button.danger" if danger else "class:button.focused", f" {label} ")
    return ("class:button", f" {label} ")


def _field_marker(active: bool) -> Tuple[str, str]:
    return ("class:focused", "▸ ") if active else ("", "  ")


def _render_add_task(dialog: AddTaskDialog, width: int) -> Fragments:
    f = dialog.focused_field
    result: Fragments = [("class:dialog.title", f" {dialog.dialog_title}"), ("", "\n\n")]
    result.append(_field_marker(f is AddTaskField.TITLE))
    result.extend(_text_input("Title: ", dialog.title, width, f is AddTaskField.TITLE))
    result.append(("", "\n"))
    result.append(_field_marker(f is AddTaskField.DESCRIPTION))
    result.append(("class:text.dim", "Description:"))
    result.append(("", "\n"))
    area = dialog.description
    for row, line in enumerate(area.lines):
        if f is AddTaskField.DESCRIPTION and row == area.cursor_row:
            result.extend(_input_fragments("    ", line, area.cursor_col, width))
        else:
            result.append(("class:text", "    " + trim_display(line, max(width - 4, 1))))
        result.append(("", "\n"))
    result.append(_field_marker(f is AddTaskField.DUE_DATE))
    result.extend(_text_input("Due: ", dialog.due_date, width, f is AddTaskField.DUE_DATE))
    result.append(("", "\n"))
    if dialog.date_picker is not None:
        result.extend(_render_date_picker(dialog.date_picker))
    result.append(_field_marker(f is AddTaskField.PRIORITY))
    result.append(("class:text.dim", "Priority: "))
    result.append((f"class:priority.{dialog.priority.code}", f"◀ {dialog.priority.label} ▶"))
    result.append(("", "\n"))
    result.append(_field_marker(f is AddTaskField.TAGS))
    result.append(("class:text.dim", "Tags: "))
    result.append(("class:tag", " ".join(f"#{t}" for t in dialog.tags.tags) + " "))
    result.extend(_text_input("", dialog.tags.input, width, f is AddTaskField.TAGS))
    suggestion = dialog.tags.current_suggestion()
    if f is AddTaskField.TAGS and suggestion:
        result.append(("class:text.dimmer", f"  → {suggestion}"))
    result.append(("", "\n\n"))
    result.append(("", "  "))
    result.append(_button("Save", f is AddTaskField.SUBMIT))
    result.append(("class:text.dim", "  Ctrl+Enter save, Esc cancel"))
    return result


def _render_date_picker(picker) -> Fragments:
    result: Fragments = [("class:dialog.title", f"    {picker.view_month.strftime('%B %Y')}"), ("", "\n")]
    result.append(("class:text.dim", "    " + " ".join(name[:2] for name in DAY_NAMES)))
    result.append(("", "\n"))
    for week in picker.month_grid():
        result.append(("", "    "))
        for day in week:
            if day is None:
                result.append(("", "   "))
            elif day == picker.selected.day:
                result.append(("class:selected", f"{day:2d}"))
                result.append(("", " "))
            else:
                result.append(("class:text", f"{day:2d} "))
        result.append(("", "\n"))
    return result


def _render_quick_capture(dialog: QuickCaptureDialog, width: int) -> Fragments:
    result: Fragments = [("class:dialog.title", " Quick Capture"), ("", "\n\n")]
    result.extend(_input_fragments("› ", dialog.input.value, dialog.input.cursor, width, dialog.input.placeholder))
    result.append(("", "\n\n"))
    parsed = dialog.parsed
    project = dialog.project
    preview = [
        ("Title", parsed.title or "-"),
        ("Project", f"{project.icon} {project.name}" if project else (parsed.project_name or "Inbox")),
        ("Tags", " ".join(f"#{t}" for t in parsed.tags) or "-"),
        ("Priority", parsed.priority.label if parsed.priority else "-"),
        ("Due", format_due_date(parsed.due_date) or "-"),
    ]
    for label, value in preview:
        result.append(("class:text.dim", pad_display(f"  {label}:", 12)))
        result.append(("class:text", value))
        result.append(("", "\n"))
    if dialog.suggestions:
        result.append(("", "\n"))
        for idx, suggestion in enumerate(dialog.suggestions):
            style = "class:selected" if idx == dialog.selected_suggestion else "class:text.dim"
            result.append((style, f"  {suggestion} "))
    return result


def _render_confirm(dialog: ConfirmDialog, width: int) -> Fragments:
    result: Fragments = [("class:dialog.title", f" {dialog.title}"), ("", "\n\n")]
    for line in wrap_display(dialog.message, max(width - 2, 1)):
        result.append(("class:text", f" {line}"))
        result.append(("", "\n"))
    result.append(("", "\n "))
    result.append(_button(dialog.confirm_label, dialog.selected_yes, dialog.destructive))
    result.append(("", "  "))
    result.append(_button(dialog.cancel_label, not dialog.selected_yes))
    return result


def _render_delete_project(dialog: DeleteProjectDialog, width: int) -> Fragments:
    result: Fragments = [("class:dialog.title", " Delete Project"), ("", "\n\n")]
    for line in dialog.message.split("\n"):
        result.append(("class:text", f" {line}"))
        result.append(("", "\n"))
    result.append(("", "\n"))
    labels = [
        (DeleteProjectChoice.MOVE_TO_INBOX, "[m] Move tasks to Inbox", False),
        (DeleteProjectChoice.DELETE_TASKS, "[d] Delete project and tasks", True),
        (DeleteProjectChoice.CANCEL, "[c] Cancel", False),
    ]
    for choice, label, danger in labels:
        result.append(("", " "))
        result.append(_button(label, dialog.selected is choice, danger))
        result.append(("", "\n"))
    return result


def _render_project(dialog: ProjectDialog, width: int) -> Fragments:
    f = dialog.focused_field
    result: Fragments = [("class:dialog.title", f" {dialog.dialog_title}"), ("", "\n\n")]
    result.append(_field_marker(f is ProjectField.NAME))
    result.extend(_text_input("Name: ", dialog.name, width, f is ProjectField.NAME))
    result.append(("", "\n"))
    result.append(_field_marker(f is ProjectField.COLOR))
    result.append(("class:text.dim", "Color: "))
    for idx, (hex_value, name) in enumerate(PROJECT_COLORS):
        style = f"fg:{hex_value}" + (" reverse" if idx == dialog.selected_color else "")
        result.append((style, " ● "))
    result.append(("class:text.dim", f" {PROJECT_COLORS[dialog.selected_color][1]}"))
    result.append(("", "\n"))
    result.append(_field_marker(f is ProjectField.ICON))
    result.append(("class:text.dim", "Icon:  "))
    for idx, icon in enumerate(PROJECT_ICONS):
        result.append(("class:selected" if idx == dialog.selected_icon else "", f" {icon} "))
    result.append(("", "\n\n  "))
    result.append(_button("Save", f is ProjectField.SUBMIT))
    return result


def _render_move(dialog: MoveToProjectDialog, width: int) -> Fragments:
    result: Fragments = [("class:dialog.title", " Move to Project"), ("", "\n\n")]
    for idx, project in enumerate(dialog.projects):
        style = "class:selected" if idx == dialog.selected_index else "class:text"
        result.append((style, pad_display(f" {project.icon} {project.name}", max(width - 2, 1))))
        result.append(("", "\n"))
    return result


def _render_filter_sort(dialog: FilterSortDialog, width: int) -> Fragments:
    result: Fragments = [("class:dialog.title", " Filter & Sort"), ("", "\n\n")]
    in_filter = dialog.section is FilterSortSection.FILTER
    result.append(("class:header" if in_filter else "class:text.dim", " Filter"))
    result.append(("", "\n"))
    for idx, (_, label, desc) in enumerate(FILTERS):
        style = "class:selected" if idx == dialog.filter_index and in_filter else (
            "class:focused" if idx == dialog.filter_index else "class:text"
        )
        result.append((style, pad_display(f"  {label} ({dialog.filter_counts[idx]})", 26)))
        result.append(("class:text.dimmer", trim_display(desc, max(width - 28, 0))))
        result.append(("", "\n"))
    result.append(("", "\n"))
    result.append(("class:text.dim" if in_filter else "class:header", " Sort"))
    result.append(("", "\n"))
    for idx, (_, label, desc) in enumerate(SORTS):
        style = "class:selected" if idx == dialog.sort_index and not in_filter else (
            "class:focused" if idx == dialog.sort_index else "class:text"
        )
        result.append((style, pad_display(f"  {label}", 26)))
        result.append(("class:text.dimmer", trim_display(desc, max(width - 28, 0))))
        result.append(("", "\n"))
    return result


def _render_settings(dialog: SettingsDialog, width: int) -> Fragments:
    result: Fragments = [("class:dialog.title", " Settings"), ("", "\n\n")]
    if dialog.state is SettingsState.CONFIRMING and dialog.confirming_option is not None:
        result.append(("class:text", f" {dialog.confirming_option.label}?"))
        result.append(("", "\n"))
        result.append(("class:overdue", " This cannot be undone."))
        result.append(("", "\n\n "))
        result.append(_button("Yes", dialog.confirm_selected_yes, danger=True))
        result.append(("", "  "))
        result.append(_button("No", not dialog.confirm_selected_yes))
        return result
    for idx, option in enumerate(dialog.options):
        style = "class:selected" if idx == dialog.selected_index else "class:text"
        result.append((style, pad_display(f" {option.label}", max(width - 2, 1))))
        result.append(("", "\n"))
    return result


_DIALOG_RENDERERS = [
    (AddTaskDialog, _render_add_task),
    (QuickCaptureDialog, _render_quick_capture),
    (ConfirmDialog, _render_confirm),
    (DeleteProjectDialog, _render_delete_project),
    (ProjectDialog, _render_project),
    (MoveToProjectDialog, _render_move),
    (FilterSortDialog, _render_filter_sort),
    (SettingsDialog, _render_settings),
]


def render_dialog(dialog, width: int) -> FormattedText:
    for dialog_type, renderer in _DIALOG_RENDERERS:
        if isinstance(dialog, dialog_type):
            return FormattedText(renderer(dialog, width))
    return FormattedText([])


__all__ = [
    "render_sidebar",
    "render_task_list",
    "render_input_line",
    "render_task_detail",
    "render_calendar",
    "render_search",
    "render_help",
    "render_debug_logs",
    "render_dialog",
]
