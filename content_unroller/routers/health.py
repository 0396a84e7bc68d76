# Health Router
"""Health, good-to-go, ping and build-info endpoints."""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from ..config import settings
from ..deps import get_content_reader
from ..services.content_reader import ContentReader

router = APIRouter(tags=["health"])


@router.get("/__health")
async def health(request: Request, reader: ContentReader = Depends(get_content_reader)):
    """
    FT-style health report with a single check against the content store.

    Always answers 200; the overall state is reported in ``ok``.
    """
    ok, message = await reader.check_health(getattr(request.state, "transaction_id", None))
    check = {
        "id": f"check-connect-{settings.content_store_app_name}",
        "name": f"Check connectivity to {settings.content_store_app_name}",
        "ok": ok,
        "severity": 1,
        "businessImpact": "Unrolled images and dynamic content won't be available",
        "technicalSummary": f"Checks that {settings.content_store_app_name} service is reachable",
        "panicGuide": f"https://runbooks.in.ft.com/{settings.app_system_code}",
        "checkOutput": message,
    }
    return {
        "schemaVersion": 1,
        "systemCode": settings.app_system_code,
        "name": settings.app_name,
        "description": settings.app_description,
        "ok": ok,
        "checks": [check],
    }


@router.get("/__gtg")
async def good_to_go(request: Request, reader: ContentReader = Depends(get_content_reader)):
    ok, message = await reader.check_health(getattr(request.state, "transaction_id", None))
    if not ok:
        return PlainTextResponse(message, status_code=503, headers={"Cache-Control": "no-cache"})
    return PlainTextResponse("OK", headers={"Cache-Control": "no-cache"})


@router.get("/__ping")
async def ping():
    return PlainTextResponse("pong")


@router.get("/__build-info")
async def build_info():
    return JSONResponse(
        {
            "name": settings.app_system_code,
            "description": settings.app_description,
            "version": settings.app_version,
        }
    )
