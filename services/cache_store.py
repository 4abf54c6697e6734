import logging
import time
from dataclasses import dataclass

from sqlalchemy.exc import SQLAlchemyError

from models import CacheEntry

logger = logging.getLogger(__name__)

# Hard limit of the store itself; callers keep their own, lower ceiling
MAX_VALUE_BYTES = 100 * 1024


@dataclass(frozen=True)
class CacheResult:
    """
    Outcome of a best-effort cache operation.

    ok=False means the store could not serve the request. Callers are free
    to ignore it and fall back to computing the value.
    """
    ok: bool
    value: str = None
    error: str = None

    @property
    def hit(self):
        return self.ok and self.value is not None


class CacheStore:
    """Key-value cache with per-entry TTL, backed by the cache_entries table."""

    def __init__(self, session_factory, clock=time.time, max_value_bytes=MAX_VALUE_BYTES):
        self.session_factory = session_factory
        self.clock = clock
        self.max_value_bytes = max_value_bytes

    def get(self, key):
        """Return the live value for key; expired entries read as a miss and are dropped."""
        try:
            with self.session_factory() as session:
                entry = session.get(CacheEntry, key)
                if entry is None:
                    return CacheResult(ok=True)
                if entry.expires_at <= self.clock():
                    session.delete(entry)
                    session.commit()
                    return CacheResult(ok=True)
                return CacheResult(ok=True, value=entry.value)
        except SQLAlchemyError as e:
            logger.warning("Cache get failed for %s: %s", key, e)
            return CacheResult(ok=False, error=str(e))

    def put(self, key, value, ttl_seconds):
        size = len(value.encode('utf-8'))
        if size > self.max_value_bytes:
            logger.warning("Cache put skipped for %s: %d bytes exceeds %d", key, size, self.max_value_bytes)
            return CacheResult(ok=False, error='Value too large')

        try:
            with self.session_factory() as session:
                session.merge(CacheEntry(
                    key=key,
                    value=value,
                    expires_at=self.clock() + ttl_seconds,
                ))
                session.commit()
            return CacheResult(ok=True)
        except SQLAlchemyError as e:
            logger.warning("Cache put failed for %s: %s", key, e)
            return CacheResult(ok=False, error=str(e))

    def remove(self, key):
        try:
            with self.session_factory() as session:
                session.query(CacheEntry).filter(CacheEntry.key == key).delete()
                session.commit()
            return CacheResult(ok=True)
        except SQLAlchemyError as e:
            logger.warning("Cache remove failed for %s: %s", key, e)
            return CacheResult(ok=False, error=str(e))

    def purge_expired(self):
        """Delete every expired entry. Returns the number removed (0 on store failure)."""
        try:
            with self.session_factory() as session:
                removed = session.query(CacheEntry).filter(
                    CacheEntry.expires_at <= self.clock()
                ).delete()
                session.commit()
            return removed
        except SQLAlchemyError as e:
            logger.warning("Cache purge of expired entries failed: %s", e)
            return 0
