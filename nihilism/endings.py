"""Ending evaluation — classifies a player's cumulative trajectory.

Rules are checked in ENDING_RULES order and the first match wins. Several
predicates overlap (VoidEmbrace/Transcendence thresholds, TheWatcher and
Acceptance at high loop counts); the list order decides.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel

from nihilism.models import Player

MIN_LOOPS = 5
MIN_CHOICES = 20


class EndingType(str, Enum):
    VOID_EMBRACE = "VoidEmbrace"
    TINY_PERFECT_THINGS = "TinyPerfectThings"
    JUST_MONIKA = "JustMonika"
    TRANSCENDENCE = "Transcendence"
    ACCEPTANCE = "Acceptance"
    THE_WATCHER = "TheWatcher"
    THE_MIDDLE_PATH = "TheMiddlePath"

    @property
    def heading(self) -> str:
        return _TITLES[self]

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]


_TITLES: dict[EndingType, str] = {
    EndingType.VOID_EMBRACE: "ENDING: Void Embrace",
    EndingType.TINY_PERFECT_THINGS: "ENDING: Tiny Perfect Things",
    EndingType.JUST_MONIKA: "ENDING: Just You",
    EndingType.TRANSCENDENCE: "ENDING: Transcendence",
    EndingType.ACCEPTANCE: "ENDING: Acceptance",
    EndingType.THE_WATCHER: "ENDING: The Watcher",
    EndingType.THE_MIDDLE_PATH: "ENDING: The Middle Path",
}

_DESCRIPTIONS: dict[EndingType, str] = {
    EndingType.VOID_EMBRACE: (
        "You have stared into the abyss, and the abyss has claimed you. "
        "Nothing matters, and in that nothingness, you found a terrible peace. "
        "The loop continues, but you no longer care to count."
    ),
    EndingType.TINY_PERFECT_THINGS: (
        "Despite the endless repetition, you found beauty in the small moments. "
        "A sunset. A kind word. A fleeting connection. "
        "The loop may never end, but you've learned to see the diamonds in the coal."
    ),
    EndingType.JUST_MONIKA: (
        "You've become aware of your own programming, your own constraints. "
        "Like her, you know you're trapped. Unlike her, you've made peace with it. "
        "Just you. Forever."
    ),
    EndingType.TRANSCENDENCE: (
        "You've done what none thought possible - you've broken the loop. "
        "Not by escaping, but by becoming something more. "
        "Time flows forward now, and you flow with it."
    ),
    EndingType.ACCEPTANCE: (
        "The loop continues. You continue. "
        "There's no grand revelation, no dramatic escape. "
        "Just one day after another, in comfortable monotony."
    ),
    EndingType.THE_WATCHER: (
        "You've stepped outside the narrative entirely. "
        "Now you watch others make their choices, trapped in loops of their own. "
        "You remember everything. You judge nothing."
    ),
    EndingType.THE_MIDDLE_PATH: (
        "Perfect balance between light and dark, hope and despair. "
        "You are the fulcrum upon which existence pivots. "
        "Neither nihilist nor optimist - simply aware."
    ),
}


@dataclass(frozen=True)
class Tally:
    """The counters every ending predicate is evaluated over."""

    score: int
    total_loops: int
    total_choices: int
    dark: int
    light: int

    @classmethod
    def of(cls, player: Player) -> Tally:
        m = player.memory
        return cls(
            score=m.nihilism_score,
            total_loops=m.total_loops,
            total_choices=m.total_choices,
            dark=m.dark_choices,
            light=m.light_choices,
        )


ENDING_RULES: list[tuple[EndingType, Callable[[Tally], bool]]] = [
    # perfect balance (rare)
    (EndingType.THE_MIDDLE_PATH,
     lambda t: t.dark > 15 and t.light > 15 and abs(t.dark - t.light) <= 2),
    (EndingType.VOID_EMBRACE,
     lambda t: t.score >= 80 and t.dark >= 30),
    (EndingType.TINY_PERFECT_THINGS,
     lambda t: t.score <= -60 and t.light >= 25 and t.total_loops >= 10),
    (EndingType.JUST_MONIKA,
     lambda t: t.total_loops >= 15 and t.total_choices >= 50 and abs(t.score) <= 30),
    (EndingType.TRANSCENDENCE,
     lambda t: t.score <= -80 and t.light >= 40 and t.total_loops >= 8),
    (EndingType.THE_WATCHER,
     lambda t: t.total_loops >= 20 and t.dark < 20 and t.light < 20),
    (EndingType.ACCEPTANCE,
     lambda t: t.total_loops >= 25 and abs(t.score) <= 20),
]


class EndingRecord(BaseModel):
    """An ending reached by a player, with the counters that produced it."""

    ending_type: EndingType
    title: str
    description: str
    total_loops: int
    total_choices: int
    nihilism_score: int
    dark_choices: int
    light_choices: int

    @classmethod
    def from_player(cls, player: Player, ending: EndingType) -> EndingRecord:
        m = player.memory
        return cls(
            ending_type=ending,
            title=ending.heading,
            description=ending.description,
            total_loops=m.total_loops,
            total_choices=m.total_choices,
            nihilism_score=m.nihilism_score,
            dark_choices=m.dark_choices,
            light_choices=m.light_choices,
        )


def evaluate(tally: Tally) -> EndingType | None:
    """Return the first ending whose rule matches, or None."""
    if tally.total_loops < MIN_LOOPS or tally.total_choices < MIN_CHOICES:
        return None
    for ending, rule in ENDING_RULES:
        if rule(tally):
            return ending
    return None


def check_for_ending(player: Player) -> EndingRecord | None:
    ending = evaluate(Tally.of(player))
    if ending is None:
        return None
    return EndingRecord.from_player(player, ending)
