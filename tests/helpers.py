"""Shared test helpers: a scripted LLM and player builders."""

from __future__ import annotations

import json

from nihilism.models import NarrativeMoment, PersistentMemory, Player, create_player


class StubLLM:
    """Returns queued responses in order and records every call."""

    def __init__(self, *responses: str) -> None:
        self._responses = list(responses)
        self.calls: list[tuple[str, str]] = []

    def queue(self, *responses: str) -> None:
        self._responses.extend(responses)

    async def __call__(self, system: str, user: str) -> str:
        self.calls.append((system, user))
        if not self._responses:
            raise AssertionError("StubLLM ran out of responses")
        return self._responses.pop(0)


def moment_json(text: str = "The clock hands tremble.", mood: str = "neutral", **extra) -> str:
    body = {
        "text": text,
        "speaker": None,
        "mood": mood,
        "choices": [
            {"id": "help_stranger", "text": "Help the stranger"},
            {"id": "walk_on", "text": "Walk away"},
        ],
    }
    body.update(extra)
    return json.dumps(body)


def player_with(**memory) -> Player:
    """A fresh player whose persistent memory counters are preset.

    Counters are taken as given (no validation), so ending thresholds can be
    exercised with tallies that don't add up.
    """
    player = create_player()
    player.memory = PersistentMemory.model_construct(**memory)
    return player


def moment(text: str) -> NarrativeMoment:
    return NarrativeMoment(text=text)
