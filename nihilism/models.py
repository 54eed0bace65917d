"""Core domain models.

Every core operation mutates or reads a Player. Pydantic is used for
validation and serialisation at every data boundary (HTTP responses, saved
player documents, generator output).
"""

from __future__ import annotations

from datetime import datetime, timezone
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, model_validator

SCORE_MIN = -100
SCORE_MAX = 100
MAX_KEY_MEMORIES = 20


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Choice(BaseModel):
    """One option offered to the player in a narrative moment."""

    model_config = ConfigDict(frozen=True)

    id: str
    text: str
    consequence_hint: str | None = None


class NarrativeMoment(BaseModel):
    """A generated story beat, appended verbatim to the current loop."""

    id: UUID = Field(default_factory=uuid4)
    text: str
    speaker: str | None = None
    mood: str = "neutral"  # "hopeful" | "nihilistic" | "neutral" | "dark" | "transcendent"
    choices: list[Choice] = Field(default_factory=list)
    timestamp: datetime = Field(default_factory=utcnow)


class Loop(BaseModel):
    """A single loop iteration. Replaced, not retained, on reset."""

    number: int = Field(ge=1)
    started_at: datetime = Field(default_factory=utcnow)
    ended_at: datetime | None = None
    choices_made: list[str] = Field(default_factory=list)
    outcome: str | None = None


class PersistentMemory(BaseModel):
    """State that survives every loop reset."""

    total_loops: int = Field(default=0, ge=0)
    total_choices: int = Field(default=0, ge=0)
    dark_choices: int = Field(default=0, ge=0)
    light_choices: int = Field(default=0, ge=0)
    key_memories: list[str] = Field(default_factory=list, max_length=MAX_KEY_MEMORIES)
    character_deaths: dict[str, int] = Field(default_factory=dict)
    truths_discovered: list[str] = Field(default_factory=list)
    nihilism_score: int = Field(default=0, ge=SCORE_MIN, le=SCORE_MAX)  # -100 hopeful, +100 nihilistic

    @model_validator(mode="after")
    def _check_tallies(self) -> PersistentMemory:
        if self.dark_choices + self.light_choices != self.total_choices:
            raise ValueError(
                f"dark_choices ({self.dark_choices}) + light_choices ({self.light_choices}) "
                f"!= total_choices ({self.total_choices})"
            )
        if len(set(self.key_memories)) != len(self.key_memories):
            raise ValueError("key_memories contains duplicates")
        return self


class Player(BaseModel):
    """A player session: the single entity the core operates on."""

    id: UUID = Field(default_factory=uuid4)
    name: str | None = None
    current_loop: Loop = Field(default_factory=lambda: Loop(number=1))
    memory: PersistentMemory = Field(default_factory=PersistentMemory)
    narrative_history: list[NarrativeMoment] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utcnow)


def create_player(name: str | None = None) -> Player:
    """Return a fresh player on loop 1 with empty memory."""
    now = utcnow()
    return Player(
        name=name,
        current_loop=Loop(number=1, started_at=now),
        created_at=now,
    )
