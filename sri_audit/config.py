"""
Service configuration.

Centralises every environment variable name and default value
used by the audit service.

Uses ``pydantic_settings.BaseSettings`` for automatic environment
variable binding, type coercion, and validation.  A ``.env`` file
is loaded by the server entry point before settings are read.
"""

from __future__ import annotations

import pydantic
import pydantic_settings


class Settings(pydantic_settings.BaseSettings):
    """Runtime configuration for the audit service.

    Attributes:
        cache_ttl_minutes: Whole minutes an audit result is reused
            for the same host before the page is loaded again.
        settle_delay_ms: Fixed wait after navigation so deferred
            scripts and stylesheets can be injected into the DOM.
        navigation_timeout_ms: Upper bound on a single page load.
        port: HTTP listen port.
        host: HTTP listen interface.
    """

    cache_ttl_minutes: int = pydantic.Field(
        default=15, ge=0, validation_alias="AUDIT_CACHE_TIME_IN_MINS"
    )
    settle_delay_ms: int = pydantic.Field(
        default=1000, ge=0, validation_alias="WAIT_AFTER_PAGE_LOAD_IN_MS"
    )
    navigation_timeout_ms: int = pydantic.Field(
        default=30000, gt=0, validation_alias="NAVIGATION_TIMEOUT_IN_MS"
    )
    port: int = pydantic.Field(default=3001, validation_alias="PORT")
    host: str = pydantic.Field(default="0.0.0.0", validation_alias="UVICORN_HOST")
