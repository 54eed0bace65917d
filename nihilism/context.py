"""Plain-text summary of a player's state, fed to the narrative generator."""

from __future__ import annotations

from nihilism.models import Player

MEMORIES_SHOWN = 5


def score_label(score: int) -> str:
    if score > 30:
        return "Descending into darkness"
    if score < -30:
        return "Finding meaning"
    return "Balanced on the edge"


def build_context(player: Player) -> str:
    """Render loop number, score, persisting memories and this loop's choices.

    Memory and choice sections are omitted when empty. Only the first five
    key memories are listed, in stored order.
    """
    memory = player.memory
    lines = [
        f"Loop #{player.current_loop.number}",
        f"Nihilism Score: {memory.nihilism_score} ({score_label(memory.nihilism_score)})",
    ]

    if memory.key_memories:
        lines.append("")
        lines.append("Memories that persist:")
        lines.extend(f"- {m}" for m in memory.key_memories[:MEMORIES_SHOWN])

    if player.current_loop.choices_made:
        lines.append("")
        lines.append("Choices this loop:")
        lines.extend(f"- {c}" for c in player.current_loop.choices_made)

    return "".join(f"{line}\n" for line in lines)
