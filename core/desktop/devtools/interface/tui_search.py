"""Case-insensitive live search over task titles and descriptions."""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from core import Task

SNIPPET_BEFORE = 20
SNIPPET_AFTER = 30


@dataclass
class SearchResult:
    task: Task
    title_match: Optional[Tuple[int, int]] = None
    desc_snippet: Optional[str] = None


def _snippet(description: str, pos: int, length: int) -> str:
    start = max(pos - SNIPPET_BEFORE, 0)
    end = min(pos + length + SNIPPET_AFTER, len(description))
    prefix = "..." if start > 0 else ""
    suffix = "..." if end < len(description) else ""
    return f"{prefix}{description[start:end]}{suffix}"


def search_tasks(query: str, tasks: Iterable[Task]) -> List[SearchResult]:
    """Tasks whose title or description contains `query`, in input order.

    `title_match` is the (start, end) character span inside the title.
    """
    needle = query.lower()
    if not needle:
        return []
    results: List[SearchResult] = []
    for task in tasks:
        pos = task.title.lower().find(needle)
        title_match = (pos, pos + len(needle)) if pos >= 0 else None
        desc_snippet = None
        if task.description:
            dpos = task.description.lower().find(needle)
            if dpos >= 0:
                desc_snippet = _snippet(task.description, dpos, len(needle))
        if title_match is not None or desc_snippet is not None:
            results.append(SearchResult(task=task, title_match=title_match, desc_snippet=desc_snippet))
    return results


__all__ = ["SearchResult", "search_tasks"]
