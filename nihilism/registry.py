"""In-process player registry.

Holds every active player keyed by id. Readers get deep-copied snapshots;
writers go through `edit()`, which holds that player's lock for the
duration of the block. Players never share a lock, so different players
can be processed concurrently.

Typical turn:

    snapshot = registry.get(player_id)                 # read
    moment = await narrator.generate_moment(llm, snapshot)  # slow, no lock held
    async with registry.edit(player_id) as player:     # write
        loops.append_moment(player, moment)

Never await network I/O inside an `edit()` block.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from uuid import UUID

from nihilism.models import Player, create_player


class PlayerNotFound(KeyError):
    """Raised when an operation names a player the registry does not hold."""


class PlayerRegistry:
    def __init__(self) -> None:
        self._players: dict[UUID, Player] = {}
        self._locks: dict[UUID, asyncio.Lock] = {}

    def create(self, name: str | None = None) -> Player:
        """Register a new player and return a snapshot of it."""
        player = create_player(name)
        self.add(player)
        return player.model_copy(deep=True)

    def add(self, player: Player) -> None:
        """Insert or replace a player (e.g. after loading it from storage)."""
        self._players[player.id] = player.model_copy(deep=True)
        self._locks.setdefault(player.id, asyncio.Lock())

    def get(self, player_id: UUID) -> Player | None:
        player = self._players.get(player_id)
        if player is None:
            return None
        return player.model_copy(deep=True)

    def remove(self, player_id: UUID) -> bool:
        # A held lock stays registered so a re-added player shares it with
        # the edit still in progress.
        lock = self._locks.get(player_id)
        if lock is not None and not lock.locked():
            del self._locks[player_id]
        return self._players.pop(player_id, None) is not None

    @asynccontextmanager
    async def edit(self, player_id: UUID) -> AsyncIterator[Player]:
        """Exclusive access to the live player record."""
        lock = self._locks.get(player_id)
        if lock is None:
            raise PlayerNotFound(player_id)
        async with lock:
            player = self._players.get(player_id)
            if player is None:
                raise PlayerNotFound(player_id)
            yield player

    def ids(self) -> list[UUID]:
        return list(self._players)

    def __contains__(self, player_id: object) -> bool:
        return player_id in self._players

    def __len__(self) -> int:
        return len(self._players)
