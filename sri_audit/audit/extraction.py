"""
DOM extraction of ``<link>`` and ``<script>`` elements.

Each query runs inside the page and returns plain objects, so the
browser has already resolved relative ``src``/``href`` values to
absolute URLs (and left inline scripts with an empty ``src``).
"""

from __future__ import annotations

from playwright import async_api

from sri_audit.audit import integrity_filter
from sri_audit.models.audit import ResourceDescriptor

_LINKS_SCRIPT = """els => els.map(e => ({
    referenceUrl: e.href,
    integrity: e.integrity,
    crossOrigin: e.crossOrigin,
}))"""

_SCRIPTS_SCRIPT = """els => els.map(e => ({
    referenceUrl: e.src,
    integrity: e.integrity,
    crossOrigin: e.crossOrigin,
}))"""


async def _query(page: async_api.Page, selector: str, expression: str) -> list[ResourceDescriptor]:
    """Run *expression* over every element matching *selector*."""
    raw = await page.eval_on_selector_all(selector, expression)
    return [ResourceDescriptor.model_validate(item) for item in raw]


async def links_without_integrity(page: async_api.Page, root_domain: str) -> list[ResourceDescriptor]:
    """Third-party ``<link>`` elements with no integrity attribute."""
    links = await _query(page, "link", _LINKS_SCRIPT)
    return integrity_filter.filter_resources(links, root_domain)


async def scripts_without_integrity(page: async_api.Page, root_domain: str) -> list[ResourceDescriptor]:
    """Third-party ``<script>`` elements with no integrity attribute."""
    scripts = await _query(page, "script", _SCRIPTS_SCRIPT)
    return integrity_filter.filter_resources(scripts, root_domain)
