"""Month-grid date picker nested inside the task dialog."""

import calendar
from datetime import date, timedelta
from enum import Enum
from typing import List, Optional

from core.dates import local_today
from core.desktop.devtools.interface.tui_models import KeyEvent


class DatePickerAction(Enum):
    NONE = "none"
    SELECT = "select"
    CANCEL = "cancel"


def _days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


class DatePicker:
    def __init__(self, selected: Optional[date] = None):
        self.selected = selected or local_today()
        self.view_month = self.selected.replace(day=1)

    def set_date(self, value: date) -> None:
        self.selected = value
        self.view_month = value.replace(day=1)

    def _shift_days(self, days: int) -> None:
        self.selected += timedelta(days=days)
        self.view_month = self.selected.replace(day=1)

    def _shift_month(self, step: int) -> None:
        year, month = self.view_month.year, self.view_month.month + step
        if month == 0:
            year, month = year - 1, 12
        elif month == 13:
            year, month = year + 1, 1
        self.view_month = date(year, month, 1)
        day = min(self.selected.day, _days_in_month(year, month))
        self.selected = date(year, month, day)

    def prev_month(self) -> None:
        self._shift_month(-1)

    def next_month(self) -> None:
        self._shift_month(1)

    def month_grid(self) -> List[List[Optional[int]]]:
        """Weeks (Monday first) of the viewed month; None pads outside days."""
        weeks = calendar.Calendar(firstweekday=0).monthdayscalendar(self.view_month.year, self.view_month.month)
        return [[day or None for day in week] for week in weeks]

    def handle_key(self, key: KeyEvent) -> DatePickerAction:
        k = key.key
        if k in ("left", "h"):
            self._shift_days(-1)
        elif k in ("right", "l"):
            self._shift_days(1)
        elif k in ("up", "k"):
            self._shift_days(-7)
        elif k in ("down", "j"):
            self._shift_days(7)
        elif k in ("pageup", "H"):
            self.prev_month()
        elif k in ("pagedown", "L"):
            self.next_month()
        elif k == "t":
            self.set_date(local_today())
        elif k == "enter":
            return DatePickerAction.SELECT
        elif k in ("esc", "q"):
            return DatePickerAction.CANCEL
        return DatePickerAction.NONE


__all__ = ["DatePicker", "DatePickerAction"]
