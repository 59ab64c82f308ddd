"""Key-value storage backends for the recovery store."""

from __future__ import annotations

from typing import Protocol


class SlotStorage(Protocol):
    """Per-profile string slots."""

    async def write(self, key: str, value: str) -> None:
        ...

    async def take(self, key: str) -> str | None:
        """Return the value stored under ``key`` and remove it."""
        ...


class InMemorySlotStorage:
    def __init__(self) -> None:
        self._slots: dict[str, str] = {}

    async def write(self, key: str, value: str) -> None:
        self._slots[key] = value

    async def take(self, key: str) -> str | None:
        return self._slots.pop(key, None)

    def __len__(self) -> int:
        return len(self._slots)
