"""Color palettes for the list and hint regions."""

from __future__ import annotations

from dataclasses import dataclass, fields
from types import MappingProxyType


@dataclass(frozen=True)
class UITheme:
    """SGR prefixes per screen element; ``reset`` closes any of them."""

    name: str
    reset: str
    border: str
    header: str
    cursor: str
    toggled: str
    hint: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    border="\033[2m",
    header="\033[1m",
    cursor="\033[46;30m",
    toggled="\033[47;30m",
    hint="\033[37;40m",
)

# Every style empty: frames carry no escape sequences at all.
PLAIN_THEME = UITheme("plain", *("" for _ in fields(UITheme)[1:]))

THEMES = MappingProxyType({theme.name: theme for theme in (DEFAULT_THEME, PLAIN_THEME)})


def available_theme_names() -> list[str]:
    return sorted(THEMES)


def resolve_theme(name: str | None, no_color: bool = False) -> UITheme:
    """Look up ``name`` case-insensitively; unknown names get the default."""
    if no_color:
        return PLAIN_THEME
    key = (name or DEFAULT_THEME.name).strip().lower()
    return THEMES.get(key, DEFAULT_THEME)
