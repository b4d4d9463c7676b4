"""Public runtime orchestration entry points.

Groups the interactive bootstrap (`run_filter`) and the lower-level event loop
used by tests and composition code.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .loop import RuntimeLoopTiming


def run_filter(*args, **kwargs):
    """Lazily import the session entrypoint to keep package imports lightweight."""
    from .app import run_filter as _run_filter

    return _run_filter(*args, **kwargs)


def run_main_loop(*args, **kwargs):
    """Lazily import loop runner to avoid package-import cycles."""
    from .loop import run_main_loop as _run_main_loop

    return _run_main_loop(*args, **kwargs)


def __getattr__(name: str):
    if name == "RuntimeLoopTiming":
        from . import loop as _loop

        return getattr(_loop, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "run_filter",
    "RuntimeLoopTiming",
    "run_main_loop",
]
