"""
Server entry point: FastAPI app setup and route configuration.
Sets up the FastAPI server with security headers, the shared
browser session lifecycle, and the SRI audit endpoint.
"""

from __future__ import annotations

import contextlib
from collections.abc import AsyncGenerator

import dotenv
import fastapi
import uvicorn
from starlette import responses

from sri_audit import config, errors, security_headers
from sri_audit.audit.cache import AuditCache
from sri_audit.audit.orchestrator import Auditor
from sri_audit.browser.session import BrowserSession
from sri_audit.utils import logger

dotenv.load_dotenv()

log = logger.create_logger("Server")

HOST_REQUIRED_MESSAGE = "`host` query parameter is required"


@contextlib.asynccontextmanager
async def lifespan(app: fastapi.FastAPI) -> AsyncGenerator[None]:
    """Launch the shared browser on startup and close it on shutdown.

    A launch failure is re-raised so uvicorn aborts startup and the
    process exits.
    """
    session: BrowserSession = app.state.session
    try:
        await session.init()
    except errors.LaunchError as exc:
        log.error("Browser failed to start, shutting down", {"error": errors.get_error_message(exc)})
        raise

    settings: config.Settings = app.state.settings
    log.section("SRI Audit Server Started")
    log.info(
        "Configuration",
        {
            "cacheTtlMinutes": settings.cache_ttl_minutes,
            "settleDelayMs": settings.settle_delay_ms,
            "navigationTimeoutMs": settings.navigation_timeout_ms,
        },
    )
    try:
        yield
    finally:
        await session.close()
        log.info("Browser closed")


def create_app(
    settings: config.Settings | None = None,
    session: BrowserSession | None = None,
    cache: AuditCache | None = None,
) -> fastapi.FastAPI:
    """Build the FastAPI app around one browser session and one cache."""
    if settings is None:
        settings = config.Settings()
    if session is None:
        session = BrowserSession()
    if cache is None:
        cache = AuditCache()

    app = fastapi.FastAPI(title="SRI Audit Server", lifespan=lifespan)
    app.state.settings = settings
    app.state.session = session
    app.state.auditor = Auditor(session, cache, settings)

    # ============================================================================
    # Middleware
    # ============================================================================

    app.add_middleware(security_headers.SecurityHeadersMiddleware)

    # ============================================================================
    # API Routes
    # ============================================================================

    @app.get("/sri-audit")
    async def sri_audit_endpoint(
        request: fastapi.Request,
        host: str | None = fastapi.Query(None, description="Page URL to audit, including scheme"),
        clear: str | None = fastapi.Query(None, description="Any non-empty value forces a fresh audit"),
    ) -> responses.JSONResponse:
        """
        Audit a page for third-party resources without SRI.

        Failures are reported as ``{"error": ...}`` with status 200.
        """
        if not host:
            return responses.JSONResponse({"error": HOST_REQUIRED_MESSAGE})

        log.info(f"auditing {host}", {"clear": bool(clear)})
        auditor: Auditor = request.app.state.auditor
        try:
            result = await auditor.audit(host, clear=bool(clear))
        except Exception as exc:
            log.error("Audit failed", {"host": host, "errorType": type(exc).__name__, "error": str(exc)})
            return responses.JSONResponse({"error": errors.get_error_message(exc)})

        return responses.JSONResponse(result.model_dump(by_alias=True))

    return app


app = create_app()


# ============================================================================
# Start Server
# ============================================================================

def main() -> None:
    """Entry point for running the server."""
    settings: config.Settings = app.state.settings
    log.success(f"Server listening on {settings.host}:{settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
