"""
Root domain resolution for first- vs third-party classification.

The root domain is the registrable domain joined to its public
suffix (``www.example.co.uk`` → ``example.co.uk``).  It is only
ever used as a substring to test resource URLs against.
"""

from __future__ import annotations

import tldextract

from sri_audit import errors

# Bundled public suffix snapshot only; never fetch the live list.
_EXTRACT = tldextract.TLDExtract(suffix_list_urls=())


def resolve(host: str) -> str:
    """Return ``"{domain}.{suffix}"`` for a scheme-less host.

    Args:
        host: A host such as ``"www.example.com"``.  A trailing
            port or path is tolerated and ignored.

    Raises:
        errors.DomainParseError: When the host has no registrable
            domain or no known public suffix.
    """
    parts = _EXTRACT(host)
    if not parts.domain or not parts.suffix:
        raise errors.DomainParseError(f"unable to parse domain from host {host!r}")
    return f"{parts.domain}.{parts.suffix}"
