"""Status and label strings in the user's language.

Resolution order: TASKDECK_LANG, the caller's preference, the ``lang`` key of
the user config, then the system locale (LC_ALL / LC_MESSAGES / LANG).
Anything unknown resolves to English; tests always get English.
"""

import os
from typing import List, Optional

from config import get_user_lang
from core.desktop.devtools.interface.constants import LANG_PACK

BASE_LANG = "en"
_LOCALE_VARS = ("LC_ALL", "LC_MESSAGES", "LANG")

# non-English packs inherit any key they lack
for _lang, _values in LANG_PACK.items():
    if _lang != BASE_LANG:
        for _key, _text in LANG_PACK[BASE_LANG].items():
            _values.setdefault(_key, _text)


def available_languages() -> List[str]:
    return sorted(LANG_PACK)


def locale_lang() -> Optional[str]:
    """Language code of the system locale ("ru_RU.UTF-8" -> "ru"), if supported."""
    for var in _LOCALE_VARS:
        raw = os.getenv(var, "")
        code = raw.split(".", 1)[0].split("_", 1)[0].lower()
        if code in LANG_PACK:
            return code
        if raw:
            # first non-empty variable decides, like the C library does
            return None
    return None


def effective_lang(preferred: Optional[str] = None) -> str:
    if os.getenv("PYTEST_CURRENT_TEST"):
        return BASE_LANG
    for candidate in (os.getenv("TASKDECK_LANG"), preferred, get_user_lang(), locale_lang()):
        if candidate and candidate in LANG_PACK:
            return candidate
    return BASE_LANG


def translate(key: str, lang: Optional[str] = None, **kwargs) -> str:
    """Look `key` up and format it; a missing placeholder returns the raw template."""
    base = LANG_PACK[BASE_LANG]
    template = LANG_PACK.get(effective_lang(lang), base).get(key) or base.get(key, key)
    try:
        return template.format(**kwargs)
    except (KeyError, IndexError, ValueError):
        return template


__all__ = ["available_languages", "effective_lang", "locale_lang", "translate"]
