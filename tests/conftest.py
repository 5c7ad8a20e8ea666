"""Shared fixtures and browser doubles for the test suite."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Any

import pytest

from sri_audit import config
from sri_audit.audit.cache import AuditCache
from sri_audit.audit.orchestrator import Auditor

# ── Browser doubles ─────────────────────────────────────────────


class FakePage:
    """Stands in for a Playwright page with canned DOM results."""

    def __init__(
        self,
        links: list[dict[str, Any]] | None = None,
        scripts: list[dict[str, Any]] | None = None,
        goto_error: BaseException | None = None,
        gate: asyncio.Event | None = None,
    ) -> None:
        self.links = links or []
        self.scripts = scripts or []
        self.goto_error = goto_error
        self.gate = gate
        self.visited: list[str] = []
        self.goto_timeouts: list[int | None] = []
        self.selectors: list[str] = []
        self.closed = False

    async def goto(self, url: str, timeout: int | None = None) -> None:
        self.visited.append(url)
        self.goto_timeouts.append(timeout)
        if self.gate is not None:
            await self.gate.wait()
        if self.goto_error is not None:
            raise self.goto_error

    async def eval_on_selector_all(self, selector: str, expression: str) -> list[dict[str, Any]]:
        self.selectors.append(selector)
        await asyncio.sleep(0)
        return list(self.links if selector == "link" else self.scripts)

    async def close(self) -> None:
        self.closed = True


class FakeSession:
    """Stands in for BrowserSession, handing out FakePage objects."""

    def __init__(
        self,
        page_factory: Callable[[], FakePage] | None = None,
        ready: bool = True,
        init_error: BaseException | None = None,
    ) -> None:
        self.page_factory = page_factory or FakePage
        self.ready = ready
        self.init_error = init_error
        self.pages: list[FakePage] = []
        self.init_calls = 0
        self.close_calls = 0

    @property
    def is_ready(self) -> bool:
        return self.ready

    async def init(self) -> None:
        self.init_calls += 1
        if self.init_error is not None:
            raise self.init_error
        self.ready = True

    async def new_page(self) -> FakePage:
        page = self.page_factory()
        self.pages.append(page)
        return page

    async def close(self) -> None:
        self.close_calls += 1


class FakeClock:
    """Manually advanced epoch-ms clock."""

    def __init__(self, start_ms: int = 1_700_000_000_000) -> None:
        self.now = start_ms

    def __call__(self) -> int:
        return self.now

    def advance(self, *, minutes: float = 0, ms: int = 0) -> None:
        self.now += int(minutes * 60_000) + ms


# ── Fixtures ────────────────────────────────────────────────────


@pytest.fixture()
def settings() -> config.Settings:
    """Settings with no settle delay so tests run instantly."""
    return config.Settings(
        AUDIT_CACHE_TIME_IN_MINS=15,
        WAIT_AFTER_PAGE_LOAD_IN_MS=0,
        NAVIGATION_TIMEOUT_IN_MS=5000,
        PORT=3001,
        UVICORN_HOST="127.0.0.1",
    )


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def cache() -> AuditCache:
    return AuditCache()


@pytest.fixture()
def mixed_page() -> Callable[[], FakePage]:
    """Page factory for a site at mysite.com with a mix of resources."""

    def factory() -> FakePage:
        return FakePage(
            links=[
                {"referenceUrl": "https://fonts.googleapis.com/css?family=Roboto", "integrity": "", "crossOrigin": None},
                {"referenceUrl": "https://mysite.com/styles.css", "integrity": "", "crossOrigin": None},
            ],
            scripts=[
                {"referenceUrl": "https://cdn.example.com/a.js", "integrity": "", "crossOrigin": None},
                {"referenceUrl": "https://mysite.com/app.js", "integrity": "", "crossOrigin": None},
                {"referenceUrl": "https://cdn.example.com/b.js", "integrity": "sha384-abc", "crossOrigin": "anonymous"},
                {"referenceUrl": "", "integrity": "", "crossOrigin": None},
            ],
        )

    return factory


@pytest.fixture()
def session(mixed_page: Callable[[], FakePage]) -> FakeSession:
    return FakeSession(page_factory=mixed_page)


@pytest.fixture()
def auditor(session: FakeSession, cache: AuditCache, settings: config.Settings, clock: FakeClock) -> Auditor:
    return Auditor(session, cache, settings, clock=clock)  # type: ignore[arg-type]
