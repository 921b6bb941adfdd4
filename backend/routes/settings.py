"""Health check and player settings endpoints."""

from fastapi import APIRouter, HTTPException
from pydantic import ValidationError

from backend import storage

router = APIRouter()


@router.get("/health")
async def health():
    """Health check."""
    return {"status": "ok"}


@router.get("/settings")
async def get_settings():
    """Get player settings (back choice, reset, prompt prefix, namespaces, template)."""
    return storage.get_config()


@router.patch("/settings")
async def update_settings(body: dict):
    """Update player settings (partial merge)."""
    try:
        return storage.update_config(body)
    except ValidationError as e:
        raise HTTPException(400, str(e))
