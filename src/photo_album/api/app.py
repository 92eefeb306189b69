"""FastAPI application factory."""

import json
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse

from photo_album.api.cors import cors_headers
from photo_album.api.models import DeleteObjectRequest
from photo_album.app_logging import configure_logging
from photo_album.config import parse_allowed_origins
from photo_album.containers import AppContainer
from photo_album.domain.errors import GatewayError

DELETE_PATH = "/delete-oss-file"


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)
    allowed_origins = parse_allowed_origins(container.settings.allowed_origins)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.options(DELETE_PATH)
    async def delete_object_preflight(request: Request) -> Response:
        """Answer the CORS preflight with headers only."""
        headers = cors_headers(request.headers.get("Origin"), allowed_origins)
        return Response(status_code=200, headers=headers)

    @app.post(DELETE_PATH)
    async def delete_object(request: Request) -> JSONResponse:
        """Delete an uploaded object and its photo record."""
        state_container: AppContainer = request.app.state.container
        headers = cors_headers(request.headers.get("Origin"), allowed_origins)
        payload = await _read_payload(request)
        try:
            outcome = await state_container.deletion_service.delete_object(
                authorization=request.headers.get("Authorization"),
                object_name=payload.object_name,
            )
        except GatewayError as exc:
            return JSONResponse(
                exc.to_body(), status_code=exc.status_code, headers=headers
            )
        except Exception:
            logger.exception("Unhandled error while deleting object")
            return JSONResponse(
                {"error": "Internal server error"}, status_code=500, headers=headers
            )
        return JSONResponse(outcome.to_body(), status_code=200, headers=headers)

    return app


async def _read_payload(request: Request) -> DeleteObjectRequest:
    """Parse the JSON body; anything unreadable counts as an empty request."""
    try:
        raw = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        raw = {}
    if not isinstance(raw, dict):
        raw = {}
    return DeleteObjectRequest.model_validate(raw)
