"""Rolling-window detector for a hidden unlock sequence."""

from __future__ import annotations

from typing import Callable

from ledgerdesk.schema import DEFAULT_SECRET_SEQUENCE


class SecretSequenceDetector:
    """Watch keypresses for an exact target sequence.

    Keeps the last ``len(target)`` characters. When they equal the target,
    the buffer is cleared and ``on_unlock`` fires once. Matching is literal,
    so operator glyphs such as "×" or "±" must match exactly.
    """

    def __init__(
        self,
        target: str = DEFAULT_SECRET_SEQUENCE,
        on_unlock: Callable[[], None] | None = None,
    ) -> None:
        if not target:
            raise ValueError("target must not be empty")
        self.target = target
        self.on_unlock = on_unlock
        self._buffer = ""

    @property
    def buffer(self) -> str:
        return self._buffer

    def feed(self, key: str) -> bool:
        """Append one keypress and return True if it completed the target."""
        self._buffer = (self._buffer + key)[-len(self.target):]
        if self._buffer != self.target:
            return False
        self._buffer = ""
        if self.on_unlock is not None:
            self.on_unlock()
        return True

    def feed_many(self, keys: str) -> int:
        """Feed each character in order and return how many unlocks fired."""
        return sum(1 for key in keys if self.feed(key))

    def reset(self) -> None:
        self._buffer = ""
