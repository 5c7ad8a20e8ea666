"""Pydantic models for extracted DOM resources and audit results."""

from __future__ import annotations

from typing import Any

import pydantic

from sri_audit.utils.serialization import snake_to_camel


class ResourceDescriptor(pydantic.BaseModel):
    """A rendered ``<script>`` or ``<link>`` element.

    ``reference_url`` is the absolute URL the browser resolved
    from ``src`` or ``href``; it is empty for inline scripts.
    ``cross_origin`` is carried for the report only and plays
    no part in filtering.
    """

    model_config = pydantic.ConfigDict(
        alias_generator=snake_to_camel, populate_by_name=True
    )

    reference_url: str = ""
    integrity: str = ""
    cross_origin: str | None = None

    @pydantic.field_validator("reference_url", "integrity", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        """DOM properties come back as ``null`` on some elements."""
        return "" if value is None else value


class AuditResult(pydantic.BaseModel):
    """Third-party resources without integrity for one host.

    ``timestamp`` is the creation instant in epoch milliseconds
    and doubles as the cache entry timestamp.
    """

    model_config = pydantic.ConfigDict(
        alias_generator=snake_to_camel, populate_by_name=True
    )

    scripts: list[ResourceDescriptor] = pydantic.Field(default_factory=list)
    links: list[ResourceDescriptor] = pydantic.Field(default_factory=list)
    timestamp: int
