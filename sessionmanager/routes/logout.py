"""POST /session/logout — Destroy session."""

from fastapi import APIRouter, Request

from ..dependencies import destroy_session

router = APIRouter()


@router.post("/session/logout")
async def logout(request: Request):
    destroy_session(request)
    return {"success": True}
