"""Weekly calendar state and the per-day task list it shows."""

from datetime import date, timedelta
from enum import Enum
from typing import List, Optional

from core import SortOrder, Task
from core.dates import local_date, local_today


class CalendarFocus(Enum):
    DAY_GRID = "day_grid"
    TASK_LIST = "task_list"


def _week_start(day: date) -> date:
    return day - timedelta(days=day.weekday())


class CalendarState:
    """Week starting Monday; `selected_day` is 0 (Mon) .. 6 (Sun)."""

    def __init__(self, today: Optional[date] = None):
        today = today or local_today()
        self.week_start = _week_start(today)
        self.selected_day = today.weekday()
        self.focus = CalendarFocus.DAY_GRID
        self.selected_task_index = 0
        self.show_completed = False

    def selected_date(self) -> date:
        return self.week_start + timedelta(days=self.selected_day)

    def prev_day(self) -> None:
        if self.selected_day == 0:
            self.prev_week()
            self.selected_day = 6
        else:
            self.selected_day -= 1

    def next_day(self) -> None:
        if self.selected_day == 6:
            self.next_week()
            self.selected_day = 0
        else:
            self.selected_day += 1

    def prev_week(self) -> None:
        self.week_start -= timedelta(days=7)

    def next_week(self) -> None:
        self.week_start += timedelta(days=7)

    def goto_today(self, today: Optional[date] = None) -> None:
        today = today or local_today()
        self.week_start = _week_start(today)
        self.selected_day = today.weekday()

    def toggle_focus(self) -> None:
        if self.focus is CalendarFocus.DAY_GRID:
            self.focus = CalendarFocus.TASK_LIST
            self.selected_task_index = 0
        else:
            self.focus = CalendarFocus.DAY_GRID

    def prev_task(self) -> None:
        self.selected_task_index = max(self.selected_task_index - 1, 0)

    def next_task(self, task_count: int) -> None:
        if task_count > 0 and self.selected_task_index < task_count - 1:
            self.selected_task_index += 1

    def reset_task_selection(self) -> None:
        self.selected_task_index = 0

    def toggle_show_completed(self) -> None:
        self.show_completed = not self.show_completed
        self.selected_task_index = 0


def tasks_for_date(tasks: List[Task], day: date, show_completed: bool = True) -> List[Task]:
    """Tasks due on `day` (local time), in default sort order."""
    matching = [
        task
        for task in tasks
        if task.due_date is not None
        and local_date(task.due_date) == day
        and (show_completed or not task.status.is_closed)
    ]
    return SortOrder.default().apply(matching)


def get_tasks_for_selected_day(app) -> List[Task]:
    state = app.calendar_state
    return tasks_for_date(app.tasks, state.selected_date(), state.show_completed)


def selected_calendar_task(app) -> Optional[Task]:
    day_tasks = get_tasks_for_selected_day(app)
    idx = app.calendar_state.selected_task_index
    if 0 <= idx < len(day_tasks):
        return day_tasks[idx]
    return None


def has_overdue_on(tasks: List[Task], day: date) -> bool:
    return any(task.is_overdue() for task in tasks_for_date(tasks, day, show_completed=False))


__all__ = [
    "CalendarFocus",
    "CalendarState",
    "tasks_for_date",
    "get_tasks_for_selected_day",
    "selected_calendar_task",
    "has_overdue_on",
]
