"""Health check and redirect routes."""

import logging

from fastapi import APIRouter, Request, HTTPException, status
from fastapi.responses import RedirectResponse

from ..api.schemas import HealthResponse
from tinylink.errors import LinkNotFoundError, StorageError

router = APIRouter()
logger = logging.getLogger("tinylink.web")

SERVICE_VERSION = "1.0"


@router.get("/healthz", response_model=HealthResponse, summary="Health check")
async def healthz(request: Request):
    """Health check for load balancers; always answers 200."""
    service = request.app.state.service

    health = await service.health_check()

    return HealthResponse(
        ok=health["overall"],
        version=SERVICE_VERSION,
        database="healthy" if health["database"] else "unhealthy",
    )


@router.get("/{short_code}", include_in_schema=False)
async def redirect_to_url(request: Request, short_code: str):
    """Redirect to the original URL, counting the click."""
    service = request.app.state.service

    try:
        original_url = await service.resolve(short_code)
    except LinkNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except StorageError as e:
        logger.error(f"Redirect error for {short_code}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        )

    return RedirectResponse(url=original_url, status_code=status.HTTP_302_FOUND)
