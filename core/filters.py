"""Filter and sort engine for task lists.

Filters are pure predicates; `Filter.apply` is exactly the list of tasks for
which `Filter.matches` is true. Sort orders are stable.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, List, Optional

from .status import Priority, TaskStatus
from .task import Task


class FilterKind(Enum):
    ALL = "all"
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    ARCHIVED = "archived"
    DUE_TODAY = "due_today"
    DUE_THIS_WEEK = "due_this_week"
    OVERDUE = "overdue"
    BY_PROJECT = "by_project"
    BY_TAG = "by_tag"
    BY_PRIORITY = "by_priority"


_STATUS_FILTERS = {
    FilterKind.PENDING: TaskStatus.PENDING,
    FilterKind.IN_PROGRESS: TaskStatus.IN_PROGRESS,
    FilterKind.COMPLETED: TaskStatus.COMPLETED,
    FilterKind.ARCHIVED: TaskStatus.ARCHIVED,
}

_LABELS = {
    FilterKind.ALL: "All",
    FilterKind.PENDING: "Pending",
    FilterKind.IN_PROGRESS: "In Progress",
    FilterKind.COMPLETED: "Completed",
    FilterKind.ARCHIVED: "Archived",
    FilterKind.DUE_TODAY: "Due Today",
    FilterKind.DUE_THIS_WEEK: "Due This Week",
    FilterKind.OVERDUE: "Overdue",
}


@dataclass(frozen=True)
class Filter:
    """One filter variant; `arg` carries the project id, tag name or Priority."""

    kind: FilterKind = FilterKind.PENDING
    arg: Any = None

    @classmethod
    def by_project(cls, project_id: str) -> "Filter":
        return cls(FilterKind.BY_PROJECT, project_id)

    @classmethod
    def by_tag(cls, tag: str) -> "Filter":
        return cls(FilterKind.BY_TAG, tag)

    @classmethod
    def by_priority(cls, priority: Priority) -> "Filter":
        return cls(FilterKind.BY_PRIORITY, priority)

    def matches(self, task: Task) -> bool:
        kind = self.kind
        if kind is FilterKind.ALL:
            return True
        if kind in _STATUS_FILTERS:
            return task.status is _STATUS_FILTERS[kind]
        if kind is FilterKind.DUE_TODAY:
            return task.is_due_today()
        if kind is FilterKind.DUE_THIS_WEEK:
            return task.is_due_this_week()
        if kind is FilterKind.OVERDUE:
            return task.is_overdue()
        if kind is FilterKind.BY_PROJECT:
            return task.project_id is not None and task.project_id == self.arg
        if kind is FilterKind.BY_TAG:
            return task.has_tag(self.arg)
        if kind is FilterKind.BY_PRIORITY:
            return task.priority is self.arg
        raise ValueError(f"Unhandled filter kind: {kind!r}")

    def apply(self, tasks: Iterable[Task]) -> List[Task]:
        return [task for task in tasks if self.matches(task)]

    def label(self) -> str:
        if self.kind is FilterKind.BY_PROJECT:
            return f"Project: {self.arg}"
        if self.kind is FilterKind.BY_TAG:
            return f"#{self.arg}"
        if self.kind is FilterKind.BY_PRIORITY:
            return f"{self.arg.label} Priority"
        return _LABELS[self.kind]


_FILTER_CYCLE = (
    Filter(FilterKind.ALL),
    Filter(FilterKind.PENDING),
    Filter(FilterKind.COMPLETED),
    Filter(FilterKind.DUE_TODAY),
    Filter(FilterKind.OVERDUE),
)


def cycle_filter(current: Optional[Filter]) -> Filter:
    """Advance through the single-key filter cycle.

    Only All, Pending, Completed, DueToday and Overdue take part; any other
    filter restarts the cycle at All.
    """
    if current in _FILTER_CYCLE:
        return _FILTER_CYCLE[(_FILTER_CYCLE.index(current) + 1) % len(_FILTER_CYCLE)]
    return _FILTER_CYCLE[0]


class SortOrder(Enum):
    DUE_DATE_ASC = "due_date_asc"
    DUE_DATE_DESC = "due_date_desc"
    PRIORITY_DESC = "priority_desc"
    PRIORITY_ASC = "priority_asc"
    CREATED_DESC = "created_desc"
    CREATED_ASC = "created_asc"
    ALPHABETICAL = "alphabetical"

    @property
    def label(self) -> str:
        return _SORT_LABELS[self]

    def apply(self, tasks: Iterable[Task]) -> List[Task]:
        """Return a new list ordered by this sort; equal keys keep input order."""
        return sorted(tasks, key=_SORT_KEYS[self])

    @classmethod
    def default(cls) -> "SortOrder":
        return cls.DUE_DATE_ASC


def _due_asc(task: Task):
    if task.due_date is not None:
        return (0, task.due_date.timestamp())
    return (1, task.created_at.timestamp())


def _due_desc(task: Task):
    if task.due_date is not None:
        return (0, -task.due_date.timestamp())
    return (1, -task.created_at.timestamp())


_SORT_KEYS = {
    SortOrder.DUE_DATE_ASC: _due_asc,
    SortOrder.DUE_DATE_DESC: _due_desc,
    SortOrder.PRIORITY_DESC: lambda t: -t.priority.rank,
    SortOrder.PRIORITY_ASC: lambda t: t.priority.rank,
    SortOrder.CREATED_DESC: lambda t: -t.created_at.timestamp(),
    SortOrder.CREATED_ASC: lambda t: t.created_at.timestamp(),
    SortOrder.ALPHABETICAL: lambda t: t.title,
}

_SORT_LABELS = {
    SortOrder.DUE_DATE_ASC: "Due Date",
    SortOrder.DUE_DATE_DESC: "Due Date (latest)",
    SortOrder.PRIORITY_DESC: "Priority",
    SortOrder.PRIORITY_ASC: "Priority (lowest)",
    SortOrder.CREATED_DESC: "Created",
    SortOrder.CREATED_ASC: "Created (oldest)",
    SortOrder.ALPHABETICAL: "Alphabetical",
}


__all__ = ["Filter", "FilterKind", "SortOrder", "cycle_filter"]
