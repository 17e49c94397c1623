"""Process-local memento."""

from __future__ import annotations

from copy import deepcopy
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from authprofiles.domain.ports.persistence import JsonValue


class InMemoryMemento:
    def __init__(self, initial: dict[str, JsonValue] | None = None) -> None:
        self._values: dict[str, JsonValue] = deepcopy(initial) if initial else {}
        self.writes = 0

    def get(self, key: str, default: JsonValue = None) -> JsonValue:
        if key not in self._values:
            return default
        return deepcopy(self._values[key])

    async def update(self, key: str, value: JsonValue) -> None:
        self.writes += 1
        if value is None:
            self._values.pop(key, None)
            return
        self._values[key] = deepcopy(value)

    def keys(self) -> list[str]:
        return list(self._values)
