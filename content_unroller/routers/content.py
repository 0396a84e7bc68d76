# Content Router
"""Endpoints that unroll public and internal content."""

import json
import logging
from typing import Any, Awaitable, Callable

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse

from ..deps import get_unroller
from ..errors import UnrollerError, UUIDNotFoundError, ValidationError
from ..models.content import ID_FIELD, Content, UnrollEvent
from ..services.unrollers import UniversalUnroller
from ..services.uuid_utils import extract_uuid

logger = logging.getLogger("content_unroller.routers.content")

router = APIRouter(tags=["content"])

UnrollFunc = Callable[[UnrollEvent], Awaitable[Content]]


async def _read_event(request: Request) -> UnrollEvent:
    """Decode the request body into an unroll event, raising 400 on bad input."""
    transaction_id = getattr(request.state, "transaction_id", "")
    try:
        content: Any = json.loads(await request.body())
    except ValueError as e:
        raise HTTPException(
            status_code=400,
            detail=f"Error expanding content, supplied UUID is invalid: {e}",
        )
    if not isinstance(content, dict):
        raise HTTPException(
            status_code=400,
            detail="Error expanding content, supplied UUID is invalid: body is not a JSON object",
        )

    try:
        uuid = extract_uuid(content.get(ID_FIELD))
    except UUIDNotFoundError as e:
        raise HTTPException(
            status_code=400,
            detail=f"Error expanding content, supplied UUID is invalid: {e}",
        )

    return UnrollEvent(content=content, transaction_id=transaction_id, uuid=uuid)


async def _handle(request: Request, unroll: UnrollFunc) -> JSONResponse:
    transaction_id = getattr(request.state, "transaction_id", "")
    logger.info(f"[{transaction_id}] Transaction started {request.method} {request.url.path}")

    try:
        event = await _read_event(request)
        try:
            result = await unroll(event)
        except ValidationError as e:
            raise HTTPException(
                status_code=400,
                detail=f"Error expanding content, supplied UUID is invalid: {e}",
            )
        except UnrollerError as e:
            raise HTTPException(
                status_code=500,
                detail=f"Error expanding content for: {event.uuid}: {e}",
            )
    except HTTPException as e:
        logger.error(f"[{transaction_id}] Transaction finished with status {e.status_code}: {e.detail}")
        raise

    logger.info(f"[{transaction_id}] Transaction finished with status 200")
    return JSONResponse(content=result)


@router.post("/content")
async def unroll_content(request: Request, unroller: UniversalUnroller = Depends(get_unroller)):
    """Expand images, clips and embedded components of the posted content."""
    return await _handle(request, unroller.unroll)


@router.post("/internalcontent")
async def unroll_internal_content(request: Request, unroller: UniversalUnroller = Depends(get_unroller)):
    """Expand lead images and dynamic content of the posted internal content."""
    return await _handle(request, unroller.unroll_internal)
