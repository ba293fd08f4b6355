"""Rotation engine, forecasting and visibility policy."""

from .base import CallablePresenceSignal, PresenceSignal, StaticPresenceSignal
from .rotation import ROTATION_STEP, SLOT_COUNT, DutyRotationEngine, step_backward, step_forward
from .forecast import forecast_rotations
from .visibility import VisibilityPolicy

__all__ = [
    "PresenceSignal",
    "StaticPresenceSignal",
    "CallablePresenceSignal",
    "DutyRotationEngine",
    "SLOT_COUNT",
    "ROTATION_STEP",
    "step_forward",
    "step_backward",
    "forecast_rotations",
    "VisibilityPolicy",
]
