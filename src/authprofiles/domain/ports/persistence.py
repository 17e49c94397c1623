"""Port for the key/value state the profile store persists into."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

type JsonValue = str | int | float | bool | None | list[JsonValue] | dict[str, JsonValue]


@runtime_checkable
class Memento(Protocol):
    """Whole-value key/value storage.

    Values are JSON-compatible and always read and written in full; there are no
    per-key transactions. Implementations must hand out values the caller may
    mutate without affecting stored state.
    """

    def get(self, key: str, default: JsonValue = None) -> JsonValue: ...

    async def update(self, key: str, value: JsonValue) -> None:
        """Store ``value`` under ``key``; ``None`` removes the key."""
        ...
