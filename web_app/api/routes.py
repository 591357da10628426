"""API routes implementation."""

import logging
from typing import List

from fastapi import APIRouter, Request, Response, HTTPException, status

from .schemas import (
    CreateLinkRequest,
    CreateLinkResponse,
    LinkStatsResponse,
    LinkRecordResponse,
    ErrorResponse,
)
from tinylink.common.url_builder import build_short_url
from tinylink.errors import (
    InvalidFormatError,
    InvalidURLError,
    LinkConflictError,
    LinkNotFoundError,
    StorageError,
)

router = APIRouter()
logger = logging.getLogger("tinylink.web")

INTERNAL_ERROR = "Internal server error"


@router.post(
    "/links",
    response_model=CreateLinkResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid URL or custom code"},
        409: {"model": ErrorResponse, "description": "Short code already exists"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
    summary="Create short link",
    description="Create a short link. Optionally provide a custom 6-8 character code.",
)
async def create_link(request: Request, body: CreateLinkRequest):
    """Create a short link."""
    service = request.app.state.service
    config = request.app.state.config

    # Passed through as sent; only an empty value means "generate one"
    custom_code = body.custom_code or None

    try:
        link = await service.create_link(
            original_url=body.url,
            custom_code=custom_code,
        )
    except (InvalidURLError, InvalidFormatError) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except LinkConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except StorageError as e:
        logger.error(f"POST /api/links failed: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=INTERNAL_ERROR)

    return CreateLinkResponse(
        short_code=link.short_code,
        original_url=link.original_url,
        short_url=build_short_url(link.short_code, config.base_url),
        created_at=link.created_at,
    )


@router.get(
    "/links",
    response_model=List[LinkRecordResponse],
    summary="List links",
    description="List every link, newest first.",
)
async def list_links(request: Request):
    """List all links."""
    service = request.app.state.service

    try:
        links = await service.list_links()
    except StorageError as e:
        logger.error(f"GET /api/links failed: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=INTERNAL_ERROR)

    return [LinkRecordResponse.from_link(link) for link in links]


@router.get(
    "/links/{short_code}",
    response_model=LinkStatsResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Short code not found"},
    },
    summary="Get link stats",
    description="Get click statistics for one short link.",
)
async def get_link_stats(request: Request, short_code: str):
    """Get statistics for a short link."""
    service = request.app.state.service

    try:
        link = await service.get_link(short_code)
    except LinkNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except StorageError as e:
        logger.error(f"GET /api/links/{short_code} failed: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=INTERNAL_ERROR)

    return LinkStatsResponse.from_link(link)


@router.delete(
    "/links/{short_code}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        404: {"model": ErrorResponse, "description": "Short code not found"},
    },
    summary="Delete link",
)
async def delete_link(request: Request, short_code: str):
    """Delete a short link."""
    service = request.app.state.service

    try:
        deleted = await service.delete_link(short_code)
    except StorageError as e:
        logger.error(f"DELETE /api/links/{short_code} failed: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=INTERNAL_ERROR)

    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Short code '{short_code}' not found",
        )

    return Response(status_code=status.HTTP_204_NO_CONTENT)
