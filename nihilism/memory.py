"""Folding classified choices into a player's persistent memory."""

from __future__ import annotations

from nihilism.models import SCORE_MAX, SCORE_MIN, Player

# Darkness accumulates faster than light recovers.
DARK_WEIGHT = 5
LIGHT_WEIGHT = 3


def record_choice(player: Player, choice_id: str, is_dark: bool) -> None:
    """Record a choice on the current loop and update the counters and score."""
    memory = player.memory
    player.current_loop.choices_made.append(choice_id)
    memory.total_choices += 1

    if is_dark:
        memory.dark_choices += 1
        memory.nihilism_score = min(memory.nihilism_score + DARK_WEIGHT, SCORE_MAX)
    else:
        memory.light_choices += 1
        memory.nihilism_score = max(memory.nihilism_score - LIGHT_WEIGHT, SCORE_MIN)
