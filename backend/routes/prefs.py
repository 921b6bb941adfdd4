"""Key-value prefs and free-standing script endpoints."""

from fastapi import APIRouter, HTTPException

from backend import storage
from backend.play import run_script

from .models import PrefValue, RunScriptBody

router = APIRouter()


@router.get("/prefs")
async def get_prefs():
    """Get all stored prefs grouped by kind (int, float, string)."""
    return storage.get_prefs()


@router.put("/prefs/{kind}/{key}")
async def set_pref(kind: str, key: str, body: PrefValue):
    """Set a single pref, coerced to its kind."""
    if kind not in storage.PREF_KINDS:
        raise HTTPException(404, "Unknown pref kind")
    try:
        return storage.set_pref(kind, key, body.value)
    except ValueError as e:
        raise HTTPException(400, str(e))


@router.delete("/prefs")
async def clear_prefs():
    """Delete every stored pref."""
    storage.clear_prefs()
    return {"ok": True}


@router.post("/scripts/run")
async def run(body: RunScriptBody):
    """Execute a script against the prefs store. Returns per-line results + variables."""
    return run_script(body.script)
