"""
Shared browser session for page audits.

A single headless Chromium instance is launched once at startup
and reused for every audit; each audit opens and closes its own
page on it.

Lifecycle::

    UNINITIALIZED --init()--> INITIALIZING --launch ok--> READY

There is no way back to ``UNINITIALIZED``.  If the launch fails
the session stays ``INITIALIZING`` and later ``init()`` calls are
silent no-ops; the server treats the failure as fatal and exits.
"""

from __future__ import annotations

import enum

from playwright import async_api

from sri_audit import errors
from sri_audit.utils import logger

log = logger.create_logger("BrowserSession")


class SessionState(enum.Enum):
    """Lifecycle state of a :class:`BrowserSession`."""

    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"


class BrowserSession:
    """
    Owns the Playwright driver and the one browser it launched.
    """

    def __init__(self, headless: bool = True) -> None:
        """Create an uninitialised session; nothing is launched yet."""
        self._headless = headless
        self._state = SessionState.UNINITIALIZED
        self._playwright: async_api.Playwright | None = None
        self._browser: async_api.Browser | None = None

    @property
    def state(self) -> SessionState:
        """Current lifecycle state."""
        return self._state

    @property
    def is_ready(self) -> bool:
        """True once the browser has launched successfully."""
        return self._state is SessionState.READY

    # ==========================================================================
    # Browser Lifecycle
    # ==========================================================================

    async def init(self) -> None:
        """Launch the browser on the first call; later calls do nothing.

        Raises:
            errors.LaunchError: If Playwright or Chromium fails to
                start.  The session is left ``INITIALIZING``.
        """
        if self._state is not SessionState.UNINITIALIZED:
            log.debug("Browser init skipped", {"state": self._state.value})
            return

        self._state = SessionState.INITIALIZING
        log.info("Launching browser", {"headless": self._headless})
        log.start_timer("launch")

        pw: async_api.Playwright | None = None
        try:
            pw = await async_api.async_playwright().start()
            browser = await pw.chromium.launch(headless=self._headless)
        except Exception as exc:
            if pw is not None:
                try:
                    await pw.stop()
                except Exception as stop_exc:
                    log.debug("Playwright stop error (non-fatal)", {"error": str(stop_exc)})
            log.error("Browser launch failed", {"error": str(exc)})
            raise errors.LaunchError(f"browser failed to launch: {exc}") from exc

        self._playwright = pw
        self._browser = browser
        self._state = SessionState.READY
        log.end_timer("launch", "Browser ready")

    async def new_page(self) -> async_api.Page:
        """Open a fresh page on the shared browser.

        Raises:
            errors.NotReadyError: If the browser has not launched.
        """
        if self._state is not SessionState.READY or self._browser is None:
            raise errors.NotReadyError("browser not yet initialized")
        return await self._browser.new_page()

    # ==========================================================================
    # Cleanup
    # ==========================================================================

    async def close(self) -> None:
        """Close the browser and stop Playwright if they were started."""
        if self._browser:
            log.debug("Closing browser")
            try:
                await self._browser.close()
            except Exception as exc:
                log.debug("Browser close error (non-fatal)", {"error": str(exc)})
            self._browser = None

        if self._playwright:
            try:
                await self._playwright.stop()
            except Exception as exc:
                log.debug("Playwright stop error (non-fatal)", {"error": str(exc)})
            self._playwright = None
