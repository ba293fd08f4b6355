"""Duty rotation engine - decides which two roster slots are on duty."""

from __future__ import annotations

from datetime import date
from typing import Optional, Tuple

from sqlalchemy.orm import Session

from dutyroster.domain.models import RosterState
from dutyroster.domain.repositories import RotationEventRepository
from dutyroster.services.calendar import day_key, is_weekday


SLOT_COUNT = 47
ROTATION_STEP = 2


def step_forward(pair: Tuple[int, int], slot_count: int = SLOT_COUNT, step: int = ROTATION_STEP) -> Tuple[int, int]:
    """Move both slots forward by ``step``, bumping the second slot by one while they coincide."""
    index1 = (pair[0] + step) % slot_count
    index2 = (pair[1] + step) % slot_count
    while index1 == index2:
        index2 = (index2 + 1) % slot_count
    return index1, index2


def step_backward(pair: Tuple[int, int], slot_count: int = SLOT_COUNT, step: int = ROTATION_STEP) -> Tuple[int, int]:
    """Move both slots back by ``step``. No collision correction."""
    return (pair[0] - step) % slot_count, (pair[1] - step) % slot_count


class DutyRotationEngine:
    """
    Owns the roster state and applies the daily-advance rule and manual overrides.

    Every mutation is persisted through ``store`` (anything with ``save(state)``)
    and, when a history session is given, recorded as a RotationEvent.
    The engine is synchronous and expects its callers to be serialized.
    """

    def __init__(
        self,
        state: RosterState | None = None,
        store=None,
        history: Optional[Session] = None,
        slot_count: int = SLOT_COUNT,
        step: int = ROTATION_STEP,
    ):
        """
        Initialize the engine.

        Args:
            state: Initial state (defaults to slots 0 and 1, never rotated)
            store: Persistence backend with a ``save(state)`` method, or None
            history: Optional database session for the rotation log
            slot_count: Number of roster slots (default: 47)
            step: Slots advanced per rotation (default: 2)
        """
        self._state = state if state is not None else RosterState()
        self.store = store
        self.history = history
        self.slot_count = slot_count
        self.step = step

    @property
    def state(self) -> RosterState:
        """Snapshot of the current state."""
        return self._state.copy()

    def advance_if_due(self, today: date) -> bool:
        """
        Rotate once per weekday.

        Args:
            today: Current calendar date from the clock provider

        Returns:
            True if a rotation happened, False on weekends or if today was already handled
        """
        if not is_weekday(today):
            return False

        key = day_key(today)
        if self._state.last_update == key:
            return False

        s = self._state
        s.index1, s.index2 = step_forward(s.pair, self.slot_count, self.step)
        s.last_update = key
        s.origin_index1, s.origin_index2 = s.index1, s.index2

        print(f"[INFO] Duty rotated for {key}: {self.current_pair()}")
        self._commit("auto")
        return True

    def advance_manually(self) -> None:
        """Next duty pair, without touching the last update date or origin snapshot."""
        s = self._state
        s.index1, s.index2 = step_forward(s.pair, self.slot_count, self.step)
        print(f"[INFO] Manual advance: {self.current_pair()}")
        self._commit("next")

    def rewind_manually(self) -> None:
        """Previous duty pair, without touching the last update date or origin snapshot."""
        s = self._state
        s.index1, s.index2 = step_backward(s.pair, self.slot_count, self.step)
        if s.index1 == s.index2:
            print(f"[WARN] Rewind produced identical slots: {self.current_pair()}")
        else:
            print(f"[INFO] Manual rewind: {self.current_pair()}")
        self._commit("previous")

    def restore_to_origin(self) -> None:
        """Undo manual drift back to the pair of the last automatic rotation."""
        s = self._state
        s.index1, s.index2 = s.origin_index1, s.origin_index2
        print(f"[INFO] Restored to origin: {self.current_pair()}")
        self._commit("restore")

    def current_pair(self) -> Tuple[int, int]:
        """1-based slot numbers for display."""
        return self._state.index1 + 1, self._state.index2 + 1

    def save(self) -> None:
        """Persist the current state (startup defaults, shutdown)."""
        if self.store is not None:
            self.store.save(self._state)

    def _commit(self, action: str) -> None:
        self.save()
        if self.history is not None:
            RotationEventRepository.record(self.history, action, self._state)
