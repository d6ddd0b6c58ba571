"""GET /health — Liveness check."""

from fastapi import APIRouter, Depends

from ..dependencies import get_manager
from ..session import Manager

router = APIRouter()


@router.get("/health")
async def health(manager: Manager = Depends(get_manager)):
    body = {"status": "ok", "provider": manager.provider_name}
    if hasattr(manager.provider, "__len__"):
        body["sessions"] = len(manager.provider)
    return body
