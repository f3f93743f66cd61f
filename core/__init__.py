from .status import Priority, TaskStatus
from .task import Task
from .project import Project, Tag, INBOX_ID
from .filters import Filter, FilterKind, SortOrder, cycle_filter
from .capture import ParsedCapture, parse_capture_input
from .dates import parse_due_date

__all__ = [
    "Priority",
    "TaskStatus",
    "Task",
    "Project",
    "Tag",
    "INBOX_ID",
    # Filtering
    "Filter",
    "FilterKind",
    "SortOrder",
    "cycle_filter",
    # Quick capture
    "ParsedCapture",
    "parse_capture_input",
    "parse_due_date",
]
