"""Display-width helpers: trimming, padding and wrapping with wide glyphs."""

from typing import List

from wcwidth import wcwidth


def _char_width(ch: str) -> int:
    w = wcwidth(ch)
    return w if w and w > 0 else 0


def display_width(text: str) -> int:
    """Visual width of text accounting for wide/narrow characters."""
    return sum(_char_width(ch) for ch in text)


def trim_display(text: str, width: int, ellipsis: str = "") -> str:
    """Trim text so its visible width fits `width`, optionally marking the cut."""
    if display_width(text) <= width:
        return text
    budget = max(width - display_width(ellipsis), 0)
    acc = []
    used = 0
    for ch in text:
        w = _char_width(ch)
        if used + w > budget:
            break
        acc.append(ch)
        used += w
    return "".join(acc) + (ellipsis if width >= display_width(ellipsis) else "")


def pad_display(text: str, width: int) -> str:
    """Trim and pad with spaces to exact visible width."""
    trimmed = trim_display(text, width)
    return trimmed + " " * max(width - display_width(trimmed), 0)


def wrap_display(text: str, width: int) -> List[str]:
    """Wrap text into lines no wider than `width`; explicit newlines are kept."""
    if width <= 0:
        return [text]
    lines: List[str] = []
    for raw in text.split("\n"):
        current = ""
        used = 0
        for ch in raw:
            w = _char_width(ch)
            if used + w > width and current:
                lines.append(current)
                current, used = ch, w
            else:
                current += ch
                used += w
        lines.append(current)
    return lines


__all__ = ["display_width", "trim_display", "pad_display", "wrap_display"]
