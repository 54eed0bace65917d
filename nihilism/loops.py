"""Loop lifecycle: appending moments and resetting while keeping memory.

State per player:

    Active(loop N) --choice--> Active(loop N)      counters update
    Active(loop N) --reset---> Active(loop N + 1)  memory carried, history cleared

There is no terminal state; reaching an ending changes nothing here.
"""

from __future__ import annotations

from nihilism.models import (
    MAX_KEY_MEMORIES,
    Loop,
    NarrativeMoment,
    Player,
    utcnow,
)


def new_loop(number: int) -> Loop:
    return Loop(number=number, started_at=utcnow())


def append_moment(player: Player, moment: NarrativeMoment) -> None:
    """Append a generated moment to the current loop's history, as-is."""
    player.narrative_history.append(moment)


def reset_loop(player: Player) -> None:
    """End the current loop and start the next one.

    The last moment of the loop becomes a key memory unless it is already
    remembered or the memory list is full. Once full, nothing new is kept
    for the rest of the player's lifetime.
    """
    memory = player.memory
    total_loops = memory.total_loops + 1

    key_memories = list(memory.key_memories)
    if player.narrative_history:
        last_text = player.narrative_history[-1].text
        if last_text not in key_memories and len(key_memories) < MAX_KEY_MEMORIES:
            key_memories.append(last_text)

    next_loop = new_loop(total_loops + 1)

    # All values computed; commit.
    memory.total_loops = total_loops
    memory.key_memories = key_memories
    player.current_loop = next_loop
    player.narrative_history = []
