"""Pydantic request/response models for API endpoints."""

from uuid import UUID

from pydantic import BaseModel

from nihilism.endings import EndingRecord
from nihilism.models import NarrativeMoment, Player


class NewGameBody(BaseModel):
    name: str | None = None


class ChoiceBody(BaseModel):
    choice_id: str
    choice_text: str = ""


class NewGameResponse(BaseModel):
    player: Player
    message: str


class LoadGameResponse(BaseModel):
    player: Player
    message: str
    found: bool


class SaveGameResponse(BaseModel):
    success: bool
    message: str


class ListSavesResponse(BaseModel):
    saves: list[UUID]


class GameStateResponse(BaseModel):
    player: Player
    current_moment: NarrativeMoment | None
    ending: EndingRecord | None


class NarrativeResponse(BaseModel):
    moment: NarrativeMoment
    loop_number: int
    nihilism_score: int
    ending: EndingRecord | None


class ResetResponse(BaseModel):
    player: Player
    message: str


class EndingCheckResponse(BaseModel):
    has_ending: bool
    ending: EndingRecord | None
