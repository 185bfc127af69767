"""Per-user cache of the most recent diet plan."""

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Protocol

from diet_optimizer.domain.diet import CacheEntry, DietPlan
from diet_optimizer.domain.errors import PersistenceFailure

_logger = logging.getLogger(__name__)


class CacheStore(Protocol):
    """Persistence interface for cached plans."""

    def load(self) -> dict[str, CacheEntry]:
        """Return all persisted entries keyed by user id."""

    def save(self, entries: dict[str, CacheEntry]) -> None:
        """Replace the persisted entries with ``entries``."""


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class ResultCache:
    """Holds the last plan per user and gates recomputation by a cooldown.

    Every read, write and clear runs under one lock, and writes rewrite the
    persisted store while that lock is held. Entries never expire on their
    own; the cooldown only decides whether ``get`` reports them as fresh.
    """

    store: CacheStore | None = None
    cooldown: timedelta = timedelta(minutes=1440)
    clock: Callable[[], datetime] = _utcnow
    debug: bool = False
    _entries: dict[str, CacheEntry] = field(default_factory=dict, init=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False)

    def restore(self) -> int:
        """Load persisted entries into memory and return how many were read."""
        if self.store is None:
            return 0
        with self._lock:
            self._entries = dict(self.store.load())
            return len(self._entries)

    def get(self, user_id: str) -> CacheEntry | None:
        """Return the user's entry if it was generated within the cooldown."""
        with self._lock:
            entry = self._entries.get(user_id)
            if entry is None:
                return None
            if self.clock() - entry.generated_at >= self.cooldown:
                return None
            return entry

    def peek(self, user_id: str) -> CacheEntry | None:
        """Return the user's entry regardless of the cooldown."""
        with self._lock:
            return self._entries.get(user_id)

    def put(self, user_id: str, plan: DietPlan) -> CacheEntry:
        """Store a freshly generated plan and persist the cache."""
        with self._lock:
            entry = CacheEntry(user_id=user_id, generated_at=self.clock(), plan=plan)
            self._entries[user_id] = entry
            self._persist()
            return entry

    def clear(self, user_id: str) -> bool:
        """Drop the user's entry; return False when there was none."""
        with self._lock:
            if self._entries.pop(user_id, None) is None:
                return False
            self._persist()
            return True

    def remaining(self, entry: CacheEntry) -> timedelta:
        """Return the time left before ``entry`` may be recomputed."""
        with self._lock:
            left = self.cooldown - (self.clock() - entry.generated_at)
        return max(left, timedelta(0))

    def set_cooldown(self, minutes: int) -> None:
        """Change the process-wide recompute cooldown."""
        if minutes < 0:
            raise ValueError("Cooldown minutes must be non-negative")
        with self._lock:
            self.cooldown = timedelta(minutes=minutes)

    def entries(self) -> list[CacheEntry]:
        """Return a snapshot of all cached entries."""
        with self._lock:
            return list(self._entries.values())

    def _persist(self) -> None:
        if self.store is None:
            return
        try:
            self.store.save(dict(self._entries))
        except PersistenceFailure as exc:
            if self.debug:
                _logger.warning("Failed to persist diet cache: %s", exc)
