"""JSON file storage for player snapshots.

Each player is one self-describing JSON document. There is no database —
reads and writes go through plain helper methods.

Directory layout:

    {base}/
      players/
        {player_id}.json      ← full Player snapshot
"""

from __future__ import annotations

import logging
from pathlib import Path
from uuid import UUID

from pydantic import BaseModel, Field, ValidationError

from nihilism.models import Player

logger = logging.getLogger(__name__)


class PlayerDataError(ValueError):
    """Raised when a stored player document cannot be turned back into a Player."""


class AutoSave(BaseModel):
    enabled: bool = True
    interval_choices: int = Field(default=3, ge=1)  # save every N choices

    def should_save(self, player: Player) -> bool:
        total = player.memory.total_choices
        return self.enabled and total > 0 and total % self.interval_choices == 0


class Storage:
    def __init__(self, base_path: Path) -> None:
        self._base = base_path
        self._players_root = base_path / "players"
        self._players_root.mkdir(parents=True, exist_ok=True)

    @property
    def base_path(self) -> Path:
        return self._base

    def _player_file(self, player_id: UUID) -> Path:
        return self._players_root / f"{player_id}.json"

    # ------------------------------------------------------------------
    # Players
    # ------------------------------------------------------------------

    def save_player(self, player: Player) -> None:
        path = self._player_file(player.id)
        path.write_text(player.model_dump_json(indent=2))
        logger.debug("Saved player %s to %s", player.id, path)

    def load_player(self, player_id: UUID) -> Player | None:
        """Return the stored player, None if there is no save file.

        Raises PlayerDataError if the file exists but does not hold a valid
        player document.
        """
        path = self._player_file(player_id)
        if not path.exists():
            return None
        try:
            player = Player.model_validate_json(path.read_bytes())
        except ValidationError as e:
            raise PlayerDataError(f"Malformed save file for player {player_id}: {e}") from e
        logger.debug("Loaded player %s from %s", player_id, path)
        return player

    def delete_player(self, player_id: UUID) -> bool:
        path = self._player_file(player_id)
        if not path.exists():
            return False
        path.unlink()
        logger.debug("Deleted player %s save file", player_id)
        return True

    def list_players(self) -> list[UUID]:
        """Ids of all saved players. Files not named after a UUID are skipped."""
        ids: list[UUID] = []
        for path in sorted(self._players_root.glob("*.json")):
            try:
                ids.append(UUID(path.stem))
            except ValueError:
                continue
        return ids
