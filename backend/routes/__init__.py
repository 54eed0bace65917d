"""FastAPI API endpoints under /api.

Endpoint groups: health, game (new, load, save, list, state, start, choice,
reset, ending). Per-player endpoints are nested under /api/game/{player_id}/.
"""

from fastapi import APIRouter

from .game import router as game_router
from .health import router as health_router

router = APIRouter()
router.include_router(health_router)
router.include_router(game_router)
