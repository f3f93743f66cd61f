"""Selection arithmetic shared by the task list, sidebar and dialogs."""

from typing import Iterable, Optional


def wrap_index(current: Optional[int], delta: int, total: int) -> Optional[int]:
    """Move `current` by `delta`, wrapping past either end; None when empty."""
    if total <= 0:
        return None
    if current is None:
        return 0 if delta >= 0 else total - 1
    return (current + delta) % total


def clamp_index(current: Optional[int], total: int) -> Optional[int]:
    """Empty → None, otherwise `min(current or 0, total - 1)`."""
    if total <= 0:
        return None
    return min(current or 0, total - 1)


def step_clamped(current: Optional[int], delta: int, total: int) -> Optional[int]:
    """Move by `delta` without wrapping (page up/down)."""
    if total <= 0:
        return current
    return max(0, min((current or 0) + delta, total - 1))


def position_of(items: Iterable, ident: str) -> Optional[int]:
    for idx, item in enumerate(items):
        if item.id == ident:
            return idx
    return None


__all__ = ["wrap_index", "clamp_index", "step_clamped", "position_of"]
