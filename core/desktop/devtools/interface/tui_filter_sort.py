"""Filter and sort picker with per-filter task counts."""

from enum import Enum
from typing import List

from core import Filter, FilterKind, Priority, SortOrder, Task
from core.desktop.devtools.interface.tui_models import DialogAction, KeyEvent

FILTERS = [
    (Filter(FilterKind.ALL), "All", "Show all tasks"),
    (Filter(FilterKind.PENDING), "Pending", "Tasks not yet completed"),
    (Filter(FilterKind.COMPLETED), "Completed", "Finished tasks"),
    (Filter(FilterKind.DUE_TODAY), "Due Today", "Tasks due today"),
    (Filter(FilterKind.DUE_THIS_WEEK), "Due This Week", "Tasks due within 7 days"),
    (Filter(FilterKind.OVERDUE), "Overdue", "Past due tasks"),
    (Filter.by_priority(Priority.URGENT), "Urgent", "Urgent priority only"),
    (Filter.by_priority(Priority.HIGH), "High", "High priority only"),
    (Filter.by_priority(Priority.MEDIUM), "Medium", "Medium priority only"),
    (Filter.by_priority(Priority.LOW), "Low", "Low priority only"),
]

SORTS = [
    (SortOrder.DUE_DATE_ASC, "Due Date", "Earliest due first"),
    (SortOrder.PRIORITY_DESC, "Priority", "Highest priority first"),
    (SortOrder.CREATED_DESC, "Created", "Newest first"),
    (SortOrder.ALPHABETICAL, "Alphabetical", "A-Z by title"),
]


class FilterSortSection(Enum):
    FILTER = "filter"
    SORT = "sort"


def _initial_filter_index(current: Filter) -> int:
    for idx, (candidate, _, _) in enumerate(FILTERS):
        if candidate == current:
            return idx
    # Fall back to the first entry of the same kind (e.g. any priority filter).
    for idx, (candidate, _, _) in enumerate(FILTERS):
        if candidate.kind is current.kind:
            return idx
    return 0


class FilterSortDialog:
    def __init__(self, current_filter: Filter, current_sort: SortOrder, tasks: List[Task]):
        self.section = FilterSortSection.FILTER
        self.filter_index = _initial_filter_index(current_filter)
        sorts = [sort for sort, _, _ in SORTS]
        self.sort_index = sorts.index(current_sort) if current_sort in sorts else 0
        self.filter_counts = [len(candidate.apply(tasks)) for candidate, _, _ in FILTERS]

    def selected_filter(self) -> Filter:
        return FILTERS[self.filter_index][0]

    def selected_sort(self) -> SortOrder:
        return SORTS[self.sort_index][0]

    def _move(self, index: int) -> None:
        if self.section is FilterSortSection.FILTER:
            self.filter_index = max(0, min(index, len(FILTERS) - 1))
        else:
            self.sort_index = max(0, min(index, len(SORTS) - 1))

    @property
    def _current_index(self) -> int:
        return self.filter_index if self.section is FilterSortSection.FILTER else self.sort_index

    def handle_key(self, key: KeyEvent) -> DialogAction:
        k = key.key
        if k in ("esc", "q"):
            return DialogAction.CANCEL
        if k == "enter":
            return DialogAction.SUBMIT
        if k in ("tab", "left", "right", "h", "l"):
            self.section = (
                FilterSortSection.SORT if self.section is FilterSortSection.FILTER else FilterSortSection.FILTER
            )
        elif k in ("up", "k"):
            self._move(self._current_index - 1)
        elif k in ("down", "j"):
            self._move(self._current_index + 1)
        elif k in ("home", "g"):
            self._move(0)
        elif k in ("end", "G"):
            self._move(len(FILTERS) + len(SORTS))
        return DialogAction.NONE


__all__ = ["FilterSortDialog", "FilterSortSection", "FILTERS", "SORTS"]
