"""/session — Inspect and edit the current session's values."""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from ..dependencies import get_session
from ..session import Session

router = APIRouter()

_MISSING = object()


class ValueRequest(BaseModel):
    value: Any


@router.get("/session")
async def read_session(session: Session = Depends(get_session)):
    return {"id": session.id, "keys": sorted(session.keys())}


@router.get("/session/values/{key}")
async def read_value(key: str, session: Session = Depends(get_session)):
    value = session.get(key, _MISSING)
    if value is _MISSING:
        raise HTTPException(status_code=404, detail={"error": "Key not found", "key": key})
    return {"key": key, "value": value}


@router.put("/session/values/{key}")
async def write_value(key: str, body: ValueRequest, session: Session = Depends(get_session)):
    session.set(key, body.value)
    return {"success": True}


@router.delete("/session/values/{key}")
async def delete_value(key: str, session: Session = Depends(get_session)):
    session.delete(key)
    return {"success": True}
