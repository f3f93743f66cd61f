"""Quick-capture micro-language.

One line of text such as ``Fix login @Backend #bug !1 due:fri`` is split on
whitespace and each word is classified by its prefix:

- ``@name``   project name (the last one wins)
- ``#tag``    tag, appended in order
- ``!1``-``!4`` priority: 1=Urgent, 2=High, 3=Medium, 4=Low
- ``due:x``   due-date text, resolved with :func:`core.dates.parse_due_date`
- ``\\@x`` / ``\\#x`` literal ``@x`` / ``#x`` in the title

Everything else is a title word. Parsing never fails.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from .dates import parse_due_date
from .status import Priority

PRIORITY_SHORTCUTS = {
    "1": Priority.URGENT,
    "2": Priority.HIGH,
    "3": Priority.MEDIUM,
    "4": Priority.LOW,
}


@dataclass
class ParsedCapture:
    title: str = ""
    project_name: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    priority: Optional[Priority] = None
    due_date_text: Optional[str] = None
    due_date: Optional[datetime] = None


def parse_capture_input(text: str) -> ParsedCapture:
    result = ParsedCapture()
    title_words: List[str] = []

    for word in text.split():
        if word.startswith("@"):
            name = word[1:]
            if name:
                result.project_name = name
            else:
                title_words.append(word)
        elif word.startswith("#"):
            tag = word[1:]
            if tag:
                result.tags.append(tag)
            else:
                title_words.append(word)
        elif word.startswith("!"):
            priority = PRIORITY_SHORTCUTS.get(word[1:])
            if priority is None:
                title_words.append(word)
            else:
                result.priority = priority
        elif word.startswith("due:"):
            due_text = word[len("due:"):]
            if due_text:
                result.due_date_text = due_text
                result.due_date = parse_due_date(due_text)
        elif word.startswith("\\@") or word.startswith("\\#"):
            title_words.append(word[1:])
        else:
            title_words.append(word)

    result.title = " ".join(title_words)
    return result


__all__ = ["ParsedCapture", "parse_capture_input", "PRIORITY_SHORTCUTS"]
