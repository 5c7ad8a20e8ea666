"""
Audit orchestration: validation, caching, page load and extraction.

The :class:`Auditor` owns no state of its own.  It is handed the
shared :class:`~sri_audit.browser.session.BrowserSession` and
:class:`~sri_audit.audit.cache.AuditCache` and drives one page per
cache miss.

Overlapping audits of the same host are not serialised: each
loads its own page and the last one to finish wins the cache
slot.  Audits of different hosts never wait on each other.
"""

from __future__ import annotations

import asyncio
import itertools
import re
import time
from collections.abc import Callable

from playwright import async_api

from sri_audit import config, errors
from sri_audit.audit import extraction, root_domain
from sri_audit.audit.cache import AuditCache
from sri_audit.browser.session import BrowserSession
from sri_audit.models.audit import AuditResult, ResourceDescriptor
from sri_audit.utils import logger

log = logger.create_logger("Auditor")

# Matches http://, https:// and the malformed htts://.
_SCHEME_PATTERN = re.compile(r"^htt(?:p|p?s)://")

# Per-call suffix for timer labels.
_audit_ids = itertools.count(1)


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return time.time_ns() // 1_000_000


def strip_scheme(host: str) -> str:
    """Validate the scheme of *host* and return the remainder.

    Raises:
        errors.InvalidHostError: If *host* has no http(s) scheme.
    """
    match = _SCHEME_PATTERN.match(host)
    if match is None:
        raise errors.InvalidHostError("no protocol on host")
    return host[match.end():]


class Auditor:
    """Runs SRI audits against the shared browser session."""

    def __init__(
        self,
        session: BrowserSession,
        cache: AuditCache,
        settings: config.Settings,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self._session = session
        self._cache = cache
        self._settings = settings
        self._clock = clock

    @property
    def cache(self) -> AuditCache:
        return self._cache

    async def audit(self, host: str, clear: bool = False) -> AuditResult:
        """Audit *host* or return its fresh cached result.

        Args:
            host: Page URL including its ``http://``/``https://`` scheme.
            clear: Drop any cached result first, forcing a new page load.

        Raises:
            errors.NotReadyError: The browser has not launched.
            errors.InvalidHostError: *host* has no http(s) scheme.
            errors.DomainParseError: *host* has no registrable domain.
            errors.NavigationError: The page failed to load.
            errors.NavigationTimeoutError: The page load timed out.
        """
        if not self._session.is_ready:
            raise errors.NotReadyError("browser not yet initialized")

        root = root_domain.resolve(strip_scheme(host))

        if clear:
            self._cache.invalidate(host)

        previous = self._cache.get(host)
        if previous is not None and self._cache.is_fresh(
            previous, self._settings.cache_ttl_minutes, self._clock()
        ):
            log.info("Serving cached audit", {"host": host, "timestamp": previous.timestamp})
            return previous

        label = f"{host}#{next(_audit_ids)}"
        log.start_timer(label)
        try:
            links, scripts = await self._inspect(host, root)
        except Exception:
            log.end_timer(label, "Audit failed")
            raise

        result = AuditResult(scripts=scripts, links=links, timestamp=self._clock())
        self._cache.put(host, result)
        log.end_timer(label, "Audit complete")
        log.info(
            "Resources without integrity",
            {"host": host, "root": root, "scripts": len(scripts), "links": len(links)},
        )
        return result

    async def _inspect(self, host: str, root: str) -> tuple[list[ResourceDescriptor], list[ResourceDescriptor]]:
        """Load *host* in a new page and extract links and scripts."""
        page = await self._session.new_page()
        try:
            await self._navigate(page, host)
            await asyncio.sleep(self._settings.settle_delay_ms / 1000)
            links, scripts = await asyncio.gather(
                extraction.links_without_integrity(page, root),
                extraction.scripts_without_integrity(page, root),
            )
        finally:
            try:
                await page.close()
            except Exception as exc:
                log.debug("Page close error (non-fatal)", {"error": str(exc)})
        return links, scripts

    async def _navigate(self, page: async_api.Page, host: str) -> None:
        """Navigate *page* to *host*, translating Playwright failures."""
        timeout = self._settings.navigation_timeout_ms
        log.debug("Navigating", {"url": host, "timeout": timeout})
        try:
            await page.goto(host, timeout=timeout)
        except async_api.TimeoutError as exc:
            log.warn("Navigation timed out", {"url": host, "timeout": timeout})
            raise errors.NavigationTimeoutError(
                f"navigation to {host} timed out after {timeout}ms"
            ) from exc
        except async_api.Error as exc:
            log.warn("Navigation error", {"url": host, "error": str(exc)})
            raise errors.NavigationError(f"navigation to {host} failed: {exc}") from exc
