import argparse
import logging
import sys

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.routing import Mount

from tubeharvest import pipeline
from tubeharvest.config import get_settings, load_settings
from tubeharvest.exceptions import (
    AuthenticationError,
    ConfigurationError,
    IntegrationError,
    RateLimitError,
)
from tubeharvest.logging_config import setup_logging
from tubeharvest.models.common import ErrorResponse
from tubeharvest.routers.collect import router as collect_router
from tubeharvest.routers.youtube import router as youtube_router

logger = logging.getLogger(__name__)


# --- Localhost-only middleware ---

class LocalhostOnlyMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        client_host = request.client.host if request.client else None
        if client_host not in ("127.0.0.1", "::1", "localhost"):
            return JSONResponse(
                status_code=403,
                content=ErrorResponse(error_code="forbidden", message="Localhost access only").model_dump(),
            )
        return await call_next(request)


# --- FastAPI app ---

api = FastAPI(title="tubeharvest", version="0.1.0")
api.include_router(youtube_router)
api.include_router(collect_router)


@api.get("/api/status")
def api_status() -> dict:
    settings = get_settings()
    return {
        "max_channels": settings.max_channels,
        "max_videos": settings.max_videos,
        "output_file": str(settings.output_file),
    }


# --- Exception handlers ---

def _error(status_code: int, error_code: str, exc: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error_code=error_code, message=str(exc)).model_dump(),
    )


@api.exception_handler(AuthenticationError)
async def auth_error_handler(request: Request, exc: AuthenticationError):
    return _error(401, "auth_error", exc)


@api.exception_handler(IntegrationError)
async def integration_error_handler(request: Request, exc: IntegrationError):
    return _error(500, "integration_error", exc)


@api.exception_handler(RateLimitError)
async def rate_limit_error_handler(request: Request, exc: RateLimitError):
    return _error(429, "rate_limit", exc)


@api.exception_handler(ConfigurationError)
async def configuration_error_handler(request: Request, exc: ConfigurationError):
    return _error(500, "configuration_error", exc)


# --- Starlette root app ---

app = Starlette(
    middleware=[Middleware(LocalhostOnlyMiddleware)],
    routes=[Mount("/", app=api)],
)


# --- CLI ---

def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tubeharvest",
        description="Collect recent YouTube videos for the channels listed in a Google Sheet.",
    )
    parser.add_argument("--log-file", help="Also write logs to this file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command")

    run_cmd = sub.add_parser("run", help="Run the collection once and write the output file")
    run_cmd.add_argument("--output", help="Output .xlsx path (overrides OUTPUT_FILE)")
    run_cmd.add_argument(
        "--sheet", action="store_true", help="Also append the rows to the output Google Sheet"
    )

    sub.add_parser("serve", help="Start the local HTTP API")
    parser.set_defaults(output=None, sheet=False)
    return parser


def serve(settings):
    uvicorn.run(
        "tubeharvest.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    command = args.command or "run"

    overrides = {}
    if command == "run":
        if args.output:
            overrides["output_file"] = args.output
        if args.sheet:
            overrides["write_output_sheet"] = True

    try:
        settings = load_settings(**overrides)
    except ConfigurationError as e:
        setup_logging(log_file=args.log_file, verbose=args.verbose)
        logger.error("%s", e)
        return 2

    setup_logging(settings.log_level, log_file=args.log_file, verbose=args.verbose)

    if command == "serve":
        serve(settings)
        return 0

    videos = pipeline.run(settings)
    logger.info("Collected %d videos", len(videos))
    return 0


if __name__ == "__main__":
    sys.exit(main())
