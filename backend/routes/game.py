"""Game lifecycle endpoints: new/load/save/list, narrative turns, reset, ending.

Every mutation goes through registry.edit(); narrative generation runs on a
snapshot taken before the LLM call so the player's lock is never held
across network I/O.
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Body, HTTPException

from backend import state
from nihilism import narrator
from nihilism.classifier import classify
from nihilism.endings import check_for_ending
from nihilism.llm import LLMError
from nihilism.loops import append_moment, reset_loop
from nihilism.memory import record_choice
from nihilism.models import Choice, NarrativeMoment, Player
from nihilism.prompts import PromptError
from nihilism.registry import PlayerNotFound
from nihilism.storage import PlayerDataError

from .models import (
    ChoiceBody,
    EndingCheckResponse,
    GameStateResponse,
    ListSavesResponse,
    LoadGameResponse,
    NarrativeResponse,
    NewGameBody,
    NewGameResponse,
    ResetResponse,
    SaveGameResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _snapshot_or_404(player_id: UUID) -> Player:
    player = state.registry().get(player_id)
    if player is None:
        raise HTTPException(404, "Player not found")
    return player


def _try_save(player: Player, context: str) -> None:
    try:
        state.storage().save_player(player)
    except OSError as e:
        logger.warning("Failed to save player %s %s: %s", player.id, context, e)


async def _generate(snapshot: Player, choice: Choice | None = None) -> NarrativeMoment:
    llm = state.llm()
    try:
        if choice is None:
            return await narrator.generate_moment(llm, snapshot)
        return await narrator.process_choice(llm, snapshot, choice)
    except (LLMError, narrator.NarrativeError, PromptError) as e:
        logger.error("LLM error for player %s: %s", snapshot.id, e)
        raise HTTPException(502, str(e))


async def _append_and_report(player_id: UUID, moment: NarrativeMoment) -> NarrativeResponse:
    try:
        async with state.registry().edit(player_id) as player:
            append_moment(player, moment)
            return NarrativeResponse(
                moment=moment,
                loop_number=player.current_loop.number,
                nihilism_score=player.memory.nihilism_score,
                ending=check_for_ending(player),
            )
    except PlayerNotFound:
        raise HTTPException(404, "Player not found")


# ── Saves ────────────────────────────────────────────────


@router.post("/game/new", response_model=NewGameResponse)
async def new_game(body: NewGameBody | None = Body(default=None)):
    """Create a player on loop 1 and auto-save it."""
    player = state.registry().create(name=body.name if body else None)
    _try_save(player, "after creation")
    return NewGameResponse(
        player=player,
        message="Welcome to the loop. You've been here before, even if you don't remember.",
    )


@router.get("/game/list", response_model=ListSavesResponse)
async def list_saves():
    """List the ids of all saved players."""
    return ListSavesResponse(saves=state.storage().list_players())


@router.get("/game/load/{player_id}", response_model=LoadGameResponse)
async def load_game(player_id: UUID):
    """Load a saved player into memory, falling back to the in-memory copy."""
    try:
        player = state.storage().load_player(player_id)
    except PlayerDataError as e:
        logger.warning("Ignoring unreadable save: %s", e)
        player = None

    if player is not None:
        state.registry().add(player)
        return LoadGameResponse(
            player=player,
            message="I remember you... welcome back to the loop.",
            found=True,
        )

    player = _snapshot_or_404(player_id)
    return LoadGameResponse(player=player, message="You never left the loop.", found=True)


@router.post("/game/save/{player_id}", response_model=SaveGameResponse)
async def save_game(player_id: UUID):
    """Persist the in-memory player to disk."""
    player = _snapshot_or_404(player_id)
    try:
        state.storage().save_player(player)
    except OSError as e:
        logger.error("Failed to save player %s: %s", player_id, e)
        return SaveGameResponse(success=False, message=f"Failed to save: {e}")
    return SaveGameResponse(
        success=True, message="Your journey has been etched into the void."
    )


# ── Play ─────────────────────────────────────────────────


@router.get("/game/{player_id}", response_model=GameStateResponse)
async def get_game_state(player_id: UUID):
    """Player state, the latest moment of this loop, and any ending reached."""
    player = _snapshot_or_404(player_id)
    return GameStateResponse(
        player=player,
        current_moment=player.narrative_history[-1] if player.narrative_history else None,
        ending=check_for_ending(player),
    )


@router.post("/game/{player_id}/start", response_model=NarrativeResponse)
async def start_narrative(player_id: UUID):
    """Generate the next moment without a choice (loop opening)."""
    snapshot = _snapshot_or_404(player_id)
    moment = await _generate(snapshot)
    return await _append_and_report(player_id, moment)


@router.post("/game/{player_id}/choice", response_model=NarrativeResponse)
async def make_choice(player_id: UUID, body: ChoiceBody):
    """Record a choice, then generate the moment that follows it."""
    try:
        async with state.registry().edit(player_id) as player:
            is_dark = classify(body.choice_id, body.choice_text)
            record_choice(player, body.choice_id, is_dark)
            snapshot = player.model_copy(deep=True)
    except PlayerNotFound:
        raise HTTPException(404, "Player not found")
    logger.debug("player %s chose %r (dark=%s)", player_id, body.choice_id, is_dark)

    if state.settings().autosave.should_save(snapshot):
        _try_save(snapshot, "during auto-save")

    choice = Choice(id=body.choice_id, text=body.choice_text)
    moment = await _generate(snapshot, choice)
    return await _append_and_report(player_id, moment)


@router.post("/game/{player_id}/reset", response_model=ResetResponse)
async def reset(player_id: UUID):
    """End the current loop and begin the next, keeping persistent memory."""
    try:
        async with state.registry().edit(player_id) as player:
            reset_loop(player)
            snapshot = player.model_copy(deep=True)
    except PlayerNotFound:
        raise HTTPException(404, "Player not found")

    _try_save(snapshot, "after reset")
    return ResetResponse(
        player=snapshot,
        message=f"Loop #{snapshot.current_loop.number} begins. Despite everything... it's still you.",
    )


@router.get("/game/{player_id}/ending", response_model=EndingCheckResponse)
async def check_ending(player_id: UUID):
    """Report whether the player has reached an ending."""
    player = _snapshot_or_404(player_id)
    ending = check_for_ending(player)
    return EndingCheckResponse(has_ending=ending is not None, ending=ending)
