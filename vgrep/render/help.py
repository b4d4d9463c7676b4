"""Key help block shown above the prompt.

Presentation only; colors come from the active theme.
"""

from __future__ import annotations

from ..theme import Theme

HELP_ENTRIES: tuple[tuple[str, str], ...] = (
    ("Enter", "print matches"),
    ("Esc/Ctrl+C", "cancel"),
    ("Up/Down", "scroll"),
    ("PgUp/PgDn", "half page"),
    ("Home/End", "top/bottom"),
    ("Left/Right", "move cursor"),
    ("Ctrl+A/E", "start/end"),
    ("Del/Ctrl+D", "delete forward"),
    ("Ctrl+U", "clear"),
    ("Ctrl+W", "delete word"),
    ("Ctrl+K", "delete to end"),
    ("Ctrl+?", "toggle help"),
)


def help_lines(theme: Theme) -> tuple[str, ...]:
    """Return the heading plus one styled row per key binding."""
    heading = f"{theme.help_heading}KEYS{theme.reset}" if theme.help_heading else "KEYS"
    rows = [heading]
    key_width = max(len(key) for key, _desc in HELP_ENTRIES)
    for key, desc in HELP_ENTRIES:
        label = key.ljust(key_width)
        if theme.help_key:
            label = f"{theme.help_key}{label}{theme.reset}"
        rows.append(f"{label}  {desc}")
    return tuple(rows)


def help_row_count(max_lines: int, show_help: bool) -> int:
    """Rows reserved for help; always leaves at least one content row."""
    if not show_help:
        return 0
    return max(0, min(len(HELP_ENTRIES) + 1, max_lines - 1))
