"""
Selection of third-party resources that lack an integrity attribute.

First-party detection is a plain substring test against the root
domain, so subdomains and CDN hostnames that embed the brand
domain (``cdn.example.com``, ``example.com.edgekey.net``) count as
first-party.  A third-party host that happens to contain the root
domain is therefore not reported.
"""

from __future__ import annotations

from collections.abc import Iterable

from sri_audit.models.audit import ResourceDescriptor


def is_third_party_without_integrity(resource: ResourceDescriptor, root_domain: str) -> bool:
    """Check whether a single resource should be reported."""
    url = resource.reference_url
    if not url:
        return False
    # Root-relative and protocol-relative URLs.
    if url.startswith("/"):
        return False
    if root_domain in url:
        return False
    return not resource.integrity


def filter_resources(
    resources: Iterable[ResourceDescriptor],
    root_domain: str,
) -> list[ResourceDescriptor]:
    """Return the reportable resources, preserving input order."""
    return [r for r in resources if is_third_party_without_integrity(r, root_domain)]
