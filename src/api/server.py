#!/usr/bin/env python
"""FastAPI server for the Shorts Analyzer."""

import sys
import time
import uuid
from contextlib import asynccontextmanager
from pathlib import Path

# Add src directory to Python path for imports
src_dir = Path(__file__).parent.parent
if str(src_dir) not in sys.path:
    sys.path.insert(0, str(src_dir))

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.dependencies import close_services, get_config, get_monitor
from api.routers import analysis, core, debug
from services.errors import AnalyzerError
from utils.config import validate_config
from utils.logging import clear_request_context, get_logger, set_request_context, setup_logging
from utils.monitoring import UNMATCHED_ENDPOINT, RequestMonitor

config = get_config()
setup_logging(config.get("log_level", "INFO"), json_output=config.get("log_json", False))
logger = get_logger(__name__)

for problem in validate_config(config):
    logger.warning("config_problem", problem=problem)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Close shared network clients on shutdown."""
    yield
    await close_services()
    logger.info("shutdown_complete")


app = FastAPI(title="Shorts Analyzer API", version="1.0.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.get("cors_origins", ["http://localhost:3000"]),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _client_info(request: Request) -> tuple[str, str]:
    ip = request.headers.get("x-forwarded-for", "").split(",")[0].strip()
    if not ip and request.client:
        ip = request.client.host
    return ip or "unknown", request.headers.get("user-agent", "unknown")


def _monitor() -> RequestMonitor:
    return app.dependency_overrides.get(get_monitor, get_monitor)()


def _endpoint_label(request: Request) -> str:
    # Route template, so client-chosen paths cannot add metric keys
    return getattr(request.scope.get("route"), "path", UNMATCHED_ENDPOINT)


@app.middleware("http")
async def monitor_requests(request: Request, call_next):
    """Tag each request with an id and record its outcome and duration."""
    request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
    set_request_context(request_id, method=request.method, path=request.url.path)
    started = time.perf_counter()
    status_code = 500
    try:
        response = await call_next(request)
        status_code = response.status_code
        response.headers["x-request-id"] = request_id
        return response
    finally:
        _monitor().record_request(
            endpoint=_endpoint_label(request),
            method=request.method,
            status_code=status_code,
            duration_ms=(time.perf_counter() - started) * 1000,
        )
        clear_request_context()


@app.exception_handler(AnalyzerError)
async def analyzer_error_handler(request: Request, exc: AnalyzerError) -> JSONResponse:
    """Render pipeline errors as {success: false, error, details}."""
    ip, user_agent = _client_info(request)
    _monitor().record_error(request.url.path, request.method, str(exc), ip, user_agent)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Keep framework errors (403, 404, ...) in the same envelope."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies are client errors, reported as 400."""
    return JSONResponse(
        status_code=400,
        content={"success": False, "error": "Invalid request", "details": str(exc.errors())},
    )


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Anything not raised as an AnalyzerError is an unexpected 500."""
    logger.exception("unhandled_error", endpoint=request.url.path)
    ip, user_agent = _client_info(request)
    _monitor().record_error(request.url.path, request.method, str(exc), ip, user_agent)
    return JSONResponse(
        status_code=500,
        content={"success": False, "error": "Failed to analyze video", "details": str(exc)},
    )


app.include_router(core.router)
app.include_router(analysis.router)
app.include_router(debug.router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000, log_level="info")
