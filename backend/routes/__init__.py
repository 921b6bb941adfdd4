"""FastAPI API endpoints under /api.

Endpoint groups: settings (health + player settings), stories (CRUD, import,
passages, show/choose navigation), prefs (key-value store + script runner).
Per-story resources are nested under /api/stories/{slug}/.
"""

from fastapi import APIRouter

from .prefs import router as prefs_router
from .settings import router as settings_router
from .stories import router as stories_router

router = APIRouter()
router.include_router(settings_router)
router.include_router(stories_router)
router.include_router(prefs_router)
