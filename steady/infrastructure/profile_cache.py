"""Read-through cache of user profiles with a fixed expiry."""

from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from typing import Callable

from steady.domain.models import Profile
from steady.infrastructure.logging.logger import get_app_logger


DEFAULT_TTL = timedelta(hours=24)


@dataclass(frozen=True)
class _CacheEntry:
    profile: Profile
    stored_at: datetime


class ProfileCache:
    """Cache profiles per user id for a fixed time-to-live."""

    def __init__(
        self,
        ttl: timedelta = DEFAULT_TTL,
        clock: Callable[[], datetime] = datetime.now,
        logger=None,
    ) -> None:
        """Initialize the cache.

        Args:
            ttl: Time an entry stays valid after being stored.
            clock: Callable returning the current time.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._ttl = ttl
        self._clock = clock
        self._logger = logger or get_app_logger()
        self._entries: dict[str, _CacheEntry] = {}

    def get(self, user_id: str) -> Profile | None:
        """Return the cached profile, evicting it once expired."""
        entry = self._entries.get(user_id)
        if entry is None:
            return None
        if self._clock() - entry.stored_at > self._ttl:
            self._logger.info(f"Profile cache expired for user {user_id}")
            self.invalidate(user_id)
            return None
        return entry.profile

    def set(self, user_id: str, profile: Profile | None) -> None:
        """Store a profile; storing None invalidates the entry."""
        if profile is None:
            self.invalidate(user_id)
            return
        self._entries[user_id] = _CacheEntry(profile, self._clock())

    def update(self, user_id: str, **changes) -> Profile | None:
        """Patch a cached profile and restart its expiry.

        Returns:
            Profile | None: Updated profile, or None when nothing is cached.
        """
        cached = self.get(user_id)
        if cached is None:
            return None
        updated = replace(cached, **changes)
        self.set(user_id, updated)
        return updated

    def invalidate(self, user_id: str | None = None) -> None:
        """Drop one user's entry, or every entry when no id is given."""
        if user_id is None:
            self._entries.clear()
            return
        self._entries.pop(user_id, None)


__all__ = ["ProfileCache", "DEFAULT_TTL"]
