"""UI theme definitions and selection helpers.

Themes are ANSI palettes for the selector chrome: header, info lines,
highlighted row, spinner, borders, and the error line.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by the view projector."""

    name: str
    reset: str
    header: str
    info: str
    item: str
    selected: str
    spinner: str
    border: str
    hint: str
    error: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    header="\033[1;38;5;39;48;5;234m",
    info="\033[38;5;220m",
    item="",
    selected="\033[1;38;5;234;48;5;39m",
    spinner="\033[1;38;5;220m",
    border="\033[38;5;39m",
    hint="\033[3;38;5;245m",
    error="\033[1;38;5;203m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    header="\033[1;38;5;45m",
    info="\033[38;5;153m",
    item="\033[38;5;252m",
    selected="\033[1;38;5;16;48;5;45m",
    spinner="\033[1;38;5;117m",
    border="\033[2;38;5;31m",
    hint="\033[2;38;5;110m",
    error="\033[1;38;5;210m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="",
    header="",
    info="",
    item="",
    selected="",
    spinner="",
    border="",
    hint="",
    error="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
