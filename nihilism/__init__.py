"""Nihilism — player-state core for a narrative time-loop game.

The public operations:

    create_player()                       new player on loop 1
    classify(choice_id, choice_text)      True if the choice is dark
    record_choice(player, choice_id, is_dark)
    reset_loop(player)                    next loop, memory carried over
    build_context(player)                 text summary for the generator
    check_for_ending(player)              EndingRecord or None
"""

from .classifier import ChoiceClassifier, KeywordClassifier, classify  # noqa: F401
from .context import build_context, score_label  # noqa: F401
from .endings import EndingRecord, EndingType, check_for_ending  # noqa: F401
from .loops import append_moment, reset_loop  # noqa: F401
from .memory import record_choice  # noqa: F401
from .models import (  # noqa: F401
    Choice,
    Loop,
    NarrativeMoment,
    PersistentMemory,
    Player,
    create_player,
)
