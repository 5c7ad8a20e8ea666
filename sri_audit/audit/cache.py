"""In-memory cache of the most recent audit per host.

Entries are keyed by the exact host string the client sent
(``https://example.com`` and ``https://example.com/`` are
different keys).  Nothing expires in the background: staleness
is checked only when the same host is requested again.

**Freshness:** elapsed time is truncated toward zero to whole
minutes before it is compared with the TTL, so a result read
anywhere inside minute ``ttl - 1`` is fresh and one read at
exactly ``ttl`` minutes is stale.
"""

from __future__ import annotations

from sri_audit.models.audit import AuditResult
from sri_audit.utils import logger

log = logger.create_logger("AuditCache")

_MS_PER_MINUTE = 60_000


def elapsed_minutes(timestamp_ms: int, now_ms: int) -> int:
    """Whole minutes between two epoch-ms instants, truncated toward zero."""
    return int((now_ms - timestamp_ms) / _MS_PER_MINUTE)


class AuditCache:
    """Host-keyed store of :class:`AuditResult` values."""

    def __init__(self) -> None:
        self._entries: dict[str, AuditResult] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, host: object) -> bool:
        return host in self._entries

    def get(self, host: str) -> AuditResult | None:
        """Return the stored result for *host*, fresh or not."""
        return self._entries.get(host)

    def put(self, host: str, result: AuditResult) -> None:
        """Store *result* for *host*, replacing any previous entry."""
        self._entries[host] = result
        log.debug("Audit cached", {"host": host, "timestamp": result.timestamp})

    def invalidate(self, host: str) -> None:
        """Drop the entry for *host*; a missing entry is not an error."""
        if self._entries.pop(host, None) is not None:
            log.debug("Audit cache entry cleared", {"host": host})

    @staticmethod
    def is_fresh(entry: AuditResult, ttl_minutes: int, now_ms: int) -> bool:
        """Check whether *entry* can still be served.

        Args:
            entry: A cached result; its ``timestamp`` is the entry time.
            ttl_minutes: Cache lifetime in whole minutes.
            now_ms: Current instant in epoch milliseconds.
        """
        return elapsed_minutes(entry.timestamp, now_ms) < ttl_minutes
