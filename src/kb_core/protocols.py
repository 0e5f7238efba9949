"""Protocols for dependency injection into the search cache."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class StorageProtocol(Protocol):
    """Protocol for string key-value stores backing the search cache."""

    def get(self, key: str) -> str | None:
        """Return the stored value, or None if the key is absent."""
        ...

    def set(self, key: str, value: str) -> None:
        """Store a value, replacing any previous one."""
        ...

    def delete(self, key: str) -> None:
        """Remove a key. Missing keys are ignored."""
        ...


@runtime_checkable
class ClockProtocol(Protocol):
    """Protocol for wall-clock time sources."""

    def now_ms(self) -> int:
        """Return the current time in milliseconds since the epoch."""
        ...
