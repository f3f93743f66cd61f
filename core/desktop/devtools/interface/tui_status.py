"""Status bar builder for TaskDeckTUI."""

from prompt_toolkit.formatted_text import FormattedText

from core.desktop.devtools.interface.i18n import translate
from core.desktop.devtools.interface.tui_display import display_width, trim_display
from core.desktop.devtools.interface.tui_models import InputMode, View

_VIEW_HINTS = {
    View.MAIN: "HINT_MAIN",
    View.CALENDAR: "HINT_CALENDAR",
    View.TASK_DETAIL: "HINT_DETAIL",
    View.SEARCH: "HINT_SEARCH",
    View.DEBUG_LOGS: "HINT_DEBUG",
    View.HELP: "HINT_DETAIL",
}


def status_hint(app) -> str:
    if app.input_mode is InputMode.EDITING:
        return "Enter:save  Esc:cancel"
    return translate(_VIEW_HINTS.get(app.current_view, "HINT_MAIN"))


def build_status_text(app, width: int = 120) -> FormattedText:
    """Left: transient message or hint. Right: filter, sort and done/total counts."""
    tasks = app.visible_tasks()
    total = len(tasks)
    done = sum(1 for t in tasks if t.status.is_closed)
    right = f" {app.filter.label()} · {app.sort.label} · {done}/{total} "
    left_budget = max(width - display_width(right) - 1, 0)
    if app.status_message:
        left = ("class:status-bar.message", trim_display(f" {app.status_message}", left_budget, "…"))
    else:
        left = ("class:status-bar", trim_display(f" {status_hint(app)}", left_budget, "…"))
    gap = " " * max(width - display_width(left[1]) - display_width(right), 0)
    return FormattedText([
        left,
        ("class:status-bar", gap),
        ("class:status-bar", right),
    ])


__all__ = ["build_status_text", "status_hint"]
