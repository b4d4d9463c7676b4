"""Key-combo dispatch table used by the filter session."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass


@dataclass(frozen=True)
class KeyComboBinding:
    """Mapping from one or more key tokens to a single action callback."""

    combos: tuple[str, ...]
    handler: Callable[[], None]


class KeyComboRegistry:
    """Exact-match key-dispatch table."""

    def __init__(self) -> None:
        self._handlers: dict[str, Callable[[], None]] = {}

    def register_binding(self, binding: KeyComboBinding) -> KeyComboRegistry:
        """Register one binding, overwriting existing handlers for same combos."""
        for combo in binding.combos:
            self._handlers[combo] = binding.handler
        return self

    def register_bindings(self, *bindings: KeyComboBinding) -> KeyComboRegistry:
        """Register multiple bindings and return ``self`` for fluent usage."""
        for binding in bindings:
            self.register_binding(binding)
        return self

    def dispatch(self, key: str) -> bool:
        """Invoke the handler bound to ``key``; return whether one existed."""
        handler = self._handlers.get(key)
        if handler is None:
            return False
        handler()
        return True
