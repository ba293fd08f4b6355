"""Domain models and data access layer."""

from .models import Base, RosterState, RotationEvent
from .repositories import RotationEventRepository

__all__ = [
    "Base",
    "RosterState",
    "RotationEvent",
    "RotationEventRepository",
]
