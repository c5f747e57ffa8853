"""FastAPI facade exposing the meme tools over plain HTTP."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import Body, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings, get_settings
from .errors import NewsMemeError, ToolArgumentError
from .tools import MemeToolkit, error_envelope

logger = logging.getLogger(__name__)

# REST path -> tool name
TOOL_ROUTES: Dict[str, str] = {
    "/tools/fetch-news": "fetch_indian_news",
    "/tools/get-templates": "get_meme_templates",
    "/tools/generate-caption": "generate_meme_caption",
    "/tools/create-meme": "create_meme",
    "/tools/generate-news-meme": "generate_news_meme",
}

AVAILABLE_ENDPOINTS = ["GET /health", "GET /tools"] + [
    f"POST {path}" for path in TOOL_ROUTES
]


def _add_cors(app: FastAPI, settings: Settings) -> None:
    """Allow browser clients to call the API."""
    origins = [o.strip() for o in settings.cors_allow_origins.split(",") if o.strip()]
    allow_credentials = True
    if settings.cors_allow_all or not origins:
        origins = ["*"]
    if origins == ["*"]:
        # Starlette/FastAPI disallow wildcard origins when credentials are enabled.
        allow_credentials = False
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def _status_for(exc: NewsMemeError) -> int:
    if isinstance(exc, ToolArgumentError):
        return status.HTTP_400_BAD_REQUEST
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _add_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            return JSONResponse(
                status_code=exc.status_code,
                content={
                    "success": False,
                    "error": "Endpoint not found",
                    "availableEndpoints": AVAILABLE_ENDPOINTS,
                },
            )
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "error": str(exc.detail)},
        )

    @app.exception_handler(RequestValidationError)
    async def bad_body(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"success": False, "error": "Request body must be a JSON object."},
        )

    @app.exception_handler(Exception)
    async def unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "error": "Internal server error"},
        )


def _add_tool_route(app: FastAPI, toolkit: MemeToolkit, path: str, tool_name: str) -> None:
    def run_tool(
        payload: Optional[Dict[str, Any]] = Body(None),
    ) -> JSONResponse:
        try:
            body = toolkit.invoke(tool_name, payload)
        except NewsMemeError as exc:
            logger.error("Error in %s: %s", tool_name, exc)
            return JSONResponse(status_code=_status_for(exc), content=error_envelope(exc))
        return JSONResponse(status_code=status.HTTP_200_OK, content=body)

    app.add_api_route(path, run_tool, methods=["POST"], name=tool_name)


def create_app(toolkit: Optional[MemeToolkit] = None) -> FastAPI:
    """Build the REST app around a toolkit (defaults to one built from the environment)."""
    if toolkit is None:
        toolkit = MemeToolkit(get_settings())

    app = FastAPI(title="News Meme Generator")
    app.state.toolkit = toolkit
    _add_cors(app, toolkit.settings)
    _add_error_handlers(app)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info("%s %s", request.method, request.url.path)
        return await call_next(request)

    @app.get("/health")
    def health() -> Dict[str, str]:
        return {"status": "healthy", "timestamp": datetime.now(timezone.utc).isoformat()}

    @app.get("/tools")
    def list_tools() -> Dict[str, Any]:
        return {"success": True, "tools": toolkit.list_tools()}

    for path, tool_name in TOOL_ROUTES.items():
        _add_tool_route(app, toolkit, path, tool_name)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    from .logging_config import configure_logging

    settings = app.state.toolkit.settings
    configure_logging(settings.log_level, settings.log_format)
    uvicorn.run(app, host=settings.http_host, port=settings.http_port)
