"""ClickUp gateway FastAPI application."""
import logging
import sys
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .. import __version__
from ..config import Settings, get_settings
from ..errors import GatewayError
from ..tools import ToolRegistry, build_registry
from .routers import tools

logger = logging.getLogger("clickup-mcp.api")


def create_app(settings: Optional[Settings] = None, registry: Optional[ToolRegistry] = None) -> FastAPI:
    """Create the HTTP application around a tool registry."""
    settings = settings or get_settings()

    app = FastAPI(
        title="ClickUp MCP Gateway",
        description="ClickUp task management tools over HTTP",
        version=__version__,
    )
    app.state.registry = registry or build_registry(settings)

    app.include_router(tools.router, prefix="/tools")

    @app.exception_handler(GatewayError)
    async def gateway_error_handler(request: Request, exc: GatewayError):
        logger.warning(f"{type(exc).__name__} on {request.url.path}: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=exc.to_payload())

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.error(f"Unexpected error on {request.url.path}: {type(exc).__name__}: {exc}", exc_info=exc)
        return JSONResponse(status_code=500, content={"error": f"{type(exc).__name__}: {exc}"})

    @app.get("/health")
    def health_check():
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


def run():
    """Serve the HTTP binding on the configured port."""
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stderr,
    )
    if not settings.clickup_api_token:
        logger.warning("CLICKUP_API_TOKEN is not set; every tool call will fail until it is configured")

    logger.info(f"clickup-gateway listening on port {settings.port}")
    uvicorn.run(create_app(settings), host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    run()
