"""UI theme definitions and selection helpers.

Themes are ANSI palettes handed to the renderer as plain values; nothing in
the rendering path reads a module-level style.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Theme:
    """Semantic ANSI palette used by renderers."""

    name: str
    reset: str
    match: str
    dim: str
    gutter: str
    separator: str
    status: str
    error: str
    prompt: str
    placeholder: str
    help_heading: str
    help_key: str


DEFAULT_THEME = Theme(
    name="default",
    reset="\033[0m",
    match="\033[97;41m",
    dim="\033[90m",
    gutter="\033[90m",
    separator="\033[2m",
    status="\033[92m",
    error="\033[91m",
    prompt="\033[1m",
    placeholder="\033[2m",
    help_heading="\033[1;38;5;81m",
    help_key="\033[38;5;229m",
)

OCEAN_THEME = Theme(
    name="ocean",
    reset="\033[0m",
    match="\033[1;38;5;16;48;5;45m",
    dim="\033[2;38;5;110m",
    gutter="\033[38;5;31m",
    separator="\033[2;38;5;31m",
    status="\033[38;5;45m",
    error="\033[38;5;215m",
    prompt="\033[1;38;5;153m",
    placeholder="\033[2;38;5;110m",
    help_heading="\033[1;38;5;45m",
    help_key="\033[38;5;153m",
)

# Without color, matches fall back to reverse video so they stay visible.
PLAIN_THEME = Theme(
    name="plain",
    reset="\033[0m",
    match="\033[7m",
    dim="",
    gutter="",
    separator="",
    status="",
    error="",
    prompt="",
    placeholder="",
    help_heading="",
    help_key="",
)

_THEMES: dict[str, Theme] = {
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


def resolve_theme(name: str | None, *, no_color: bool = False) -> Theme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "Theme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
