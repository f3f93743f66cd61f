#!/usr/bin/env python3
"""TUI themes: a few named colors per theme expanded into style classes."""

from typing import Dict

from prompt_toolkit.styles import Style

# fg, dim, dimmer, accent, border, surface, panel, info, ok, warn, bad, tag, ink
_COLORS: Dict[str, Dict[str, str]] = {
    "dark-olive": {
        "fg": "#d7dfe6",
        "dim": "#97a0a9",
        "dimmer": "#6d717a",
        "accent": "#ffb347",
        "border": "#4b525a",
        "surface": "#3b3b3b",
        "panel": "#262a2f",
        "bar": "#2c313a",
        "info": "#61afef",
        "ok": "#9ad974",
        "warn": "#e5c07b",
        "bad": "#e06c75",
        "tag": "#c678dd",
        "ink": "#1e1e1e",
    },
    "dark-contrast": {
        "fg": "#e8eaec",
        "dim": "#a7b0ba",
        "dimmer": "#6f757d",
        "accent": "#ffb347",
        "border": "#5a6169",
        "surface": "#3d4047",
        "panel": "#1f2227",
        "bar": "#2a2d33",
        "info": "#7cc4ff",
        "ok": "#b8f171",
        "warn": "#f0c674",
        "bad": "#ff6b6b",
        "tag": "#d19aff",
        "ink": "#111111",
    },
    "light-paper": {
        "fg": "#2b2f33",
        "dim": "#5f666d",
        "dimmer": "#8f969c",
        "accent": "#b35900",
        "border": "#c4c9ce",
        "surface": "#dde3e8",
        "panel": "#f3f1ea",
        "bar": "#e6e2d6",
        "info": "#1f6fb2",
        "ok": "#2e7d32",
        "warn": "#9a6700",
        "bad": "#c62828",
        "tag": "#7b3fa0",
        "ink": "#ffffff",
    },
}


def _expand(c: Dict[str, str]) -> Dict[str, str]:
    return {
        "": c["fg"],
        "text": c["fg"],
        "text.dim": c["dim"],
        "text.dimmer": c["dimmer"],
        "header": f"{c['accent']} bold",
        "border": c["border"],
        "selected": f"bg:{c['surface']} {c['fg']} bold",
        "focused": f"{c['accent']} bold",
        "priority.low": c["dimmer"],
        "priority.medium": c["info"],
        "priority.high": f"{c['warn']} bold",
        "priority.urgent": f"{c['bad']} bold",
        "status.pending": c["fg"],
        "status.in_progress": c["info"],
        "status.completed": c["ok"],
        "status.archived": c["dimmer"],
        "done": f"{c['dimmer']} strike",
        "overdue": f"{c['bad']} bold",
        "tag": c["tag"],
        "match": f"bg:{c['warn']} {c['ink']} bold",
        "dialog": f"bg:{c['panel']} {c['fg']}",
        "dialog.title": f"bg:{c['panel']} {c['accent']} bold",
        "button": f"bg:{c['surface']} {c['fg']}",
        "button.focused": f"bg:{c['info']} {c['ink']} bold",
        "button.danger": f"bg:{c['bad']} {c['ink']} bold",
        "status-bar": f"bg:{c['bar']} {c['dim']}",
        "status-bar.message": f"bg:{c['bar']} {c['ok']} bold",
        "log.debug": c["info"],
        "log.info": c["ok"],
        "log.warning": c["warn"],
        "log.error": f"{c['bad']} bold",
        "log.critical": f"{c['bad']} bold reverse",
    }


THEMES: Dict[str, Dict[str, str]] = {name: _expand(colors) for name, colors in _COLORS.items()}

DEFAULT_THEME = "dark-olive"


def get_theme_palette(theme: str) -> Dict[str, str]:
    """Style classes of `theme`; unknown names get the default theme."""
    return dict(THEMES.get(theme) or THEMES[DEFAULT_THEME])


def build_style(theme: str) -> Style:
    return Style.from_dict(get_theme_palette(theme))


__all__ = ["THEMES", "DEFAULT_THEME", "get_theme_palette", "build_style"]
