"""UI theme definitions and selection helpers.

Themes are ANSI palettes for catalog rows, headings and error lines.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    reset: str
    heading: str
    address: str
    checkbox_on: str
    checkbox_off: str
    container_path: str
    entry_path: str
    title_id: str
    error: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    heading="\033[1;38;5;81m",
    address="\033[2;38;5;250m",
    checkbox_on="\033[38;5;42m",
    checkbox_off="\033[38;5;214m",
    container_path="\033[1;34m",
    entry_path="\033[38;5;252m",
    title_id="\033[38;5;229m",
    error="\033[1;31m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    heading="\033[1;38;5;45m",
    address="\033[2;38;5;110m",
    checkbox_on="\033[38;5;84m",
    checkbox_off="\033[38;5;215m",
    container_path="\033[1;38;5;45m",
    entry_path="\033[38;5;252m",
    title_id="\033[38;5;153m",
    error="\033[1;38;5;203m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="",
    heading="",
    address="",
    checkbox_on="",
    checkbox_off="",
    container_path="",
    entry_path="",
    title_id="",
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
