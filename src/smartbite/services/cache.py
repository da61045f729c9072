"""TTL cache for nutrition provider responses."""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Protocol


class Cache(Protocol):
    """Key-value cache with per-entry expiry."""

    def get(self, key: str) -> object | None:
        """Return a cached value if present and not expired."""

    def set(self, key: str, value: object, ttl_seconds: int) -> None:
        """Store a value for ``ttl_seconds``."""


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class InMemoryCache(Cache):
    """Process-local cache; entries expire lazily on read.

    ``max_entries`` bounds memory by evicting the entry closest to expiry.
    """

    max_entries: int = 1024
    clock: Callable[[], datetime] = _utcnow
    _entries: dict[str, tuple[object, datetime]] = field(
        default_factory=dict, init=False, repr=False
    )

    def __post_init__(self) -> None:
        if self.max_entries < 1:
            raise ValueError("max_entries must be at least 1")

    def get(self, key: str) -> object | None:
        cached = self._entries.get(key)
        if cached is None:
            return None
        value, expires_at = cached
        if self.clock() >= expires_at:
            del self._entries[key]
            return None
        return value

    def set(self, key: str, value: object, ttl_seconds: int) -> None:
        if key not in self._entries and len(self._entries) >= self.max_entries:
            oldest = min(self._entries, key=lambda name: self._entries[name][1])
            del self._entries[oldest]
        self._entries[key] = (value, self.clock() + timedelta(seconds=ttl_seconds))

    def __len__(self) -> int:
        return len(self._entries)
