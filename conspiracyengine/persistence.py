from __future__ import annotations

import copy
import json
import logging
import os
import shutil
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from conspiracyengine.config import SAVE_SLOTS
from conspiracyengine.state import GameState

logger = logging.getLogger(__name__)

# Raised by GameState.from_dict on a malformed payload.
_SHAPE_ERRORS = (KeyError, TypeError, ValueError, AttributeError)


@dataclass(frozen=True)
class SlotInfo:
    """Summary of one save slot for a slot picker."""

    slot: int
    exists: bool
    total_evidence: float = 0.0
    ascension_count: int = 0
    playtime: float = 0.0
    last_played: float | None = None


def check_slot(slot: int) -> None:
    if slot not in SAVE_SLOTS:
        raise ValueError(f"Invalid save slot {slot!r}; expected one of {SAVE_SLOTS}")


def slot_info_for(slot: int, state: GameState | None) -> SlotInfo:
    if state is None:
        return SlotInfo(slot=slot, exists=False)
    return SlotInfo(
        slot=slot,
        exists=True,
        total_evidence=state.total_evidence_earned,
        ascension_count=state.times_ascended,
        playtime=state.total_play_time_seconds,
        last_played=state.last_save_time or None,
    )


class PersistenceAdapter(ABC):
    """Stores whole GameState snapshots in numbered slots."""

    @abstractmethod
    def load(self, slot: int) -> GameState | None:
        """Return the saved state, or None when missing or unreadable."""

    @abstractmethod
    def save(self, slot: int, state: GameState) -> None: ...

    @abstractmethod
    def delete(self, slot: int) -> None: ...

    def list_slot_info(self) -> list[SlotInfo]:
        return [slot_info_for(slot, self.load(slot)) for slot in SAVE_SLOTS]


class MemorySlotStore(PersistenceAdapter):
    """In-process slots, for tests and the simulator."""

    def __init__(self) -> None:
        self._slots: dict[int, dict[str, Any]] = {}

    def load(self, slot: int) -> GameState | None:
        check_slot(slot)
        data = self._slots.get(slot)
        if data is None:
            return None
        return GameState.from_dict(copy.deepcopy(data))

    def save(self, slot: int, state: GameState) -> None:
        check_slot(slot)
        self._slots[slot] = copy.deepcopy(state.to_dict())

    def delete(self, slot: int) -> None:
        check_slot(slot)
        self._slots.pop(slot, None)


class JsonSlotStore(PersistenceAdapter):
    """One JSON file per slot under *save_dir*.

    Each save first copies the previous file to ``<name>.bak``; a load
    that finds the main file corrupt falls back to that copy.
    """

    def __init__(self, save_dir: str | Path) -> None:
        self.save_dir = Path(save_dir)

    def path_for(self, slot: int) -> Path:
        check_slot(slot)
        return self.save_dir / f"slot{slot}.json"

    def backup_path_for(self, slot: int) -> Path:
        return self.path_for(slot).with_suffix(".json.bak")

    def load(self, slot: int) -> GameState | None:
        path = self.path_for(slot)
        if not path.exists():
            return None
        state = self._read(path)
        if state is not None:
            return state
        backup = self.backup_path_for(slot)
        if backup.exists():
            logger.warning("Falling back to backup save %s", backup)
            return self._read(backup)
        return None

    def save(self, slot: int, state: GameState) -> None:
        path = self.path_for(slot)
        self.save_dir.mkdir(parents=True, exist_ok=True)
        if path.exists():
            shutil.copyfile(path, self.backup_path_for(slot))
        tmp = path.with_suffix(".json.tmp")
        with open(tmp, "w") as f:
            json.dump(state.to_dict(), f, indent=2)
        os.replace(tmp, path)

    def delete(self, slot: int) -> None:
        for p in (self.path_for(slot), self.backup_path_for(slot)):
            if p.exists():
                p.unlink()

    def _read(self, path: Path) -> GameState | None:
        try:
            with open(path) as f:
                data = json.load(f)
            return GameState.from_dict(data)
        except OSError as exc:
            logger.warning("Could not read save %s: %s", path, exc)
        except json.JSONDecodeError as exc:
            logger.warning("Corrupt save %s: %s", path, exc)
        except _SHAPE_ERRORS as exc:
            logger.warning("Save %s has an unexpected shape: %r", path, exc)
        return None
