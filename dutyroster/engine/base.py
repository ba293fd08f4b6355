"""Presence signal interface that full-screen detectors must implement."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable


class PresenceSignal(ABC):
    """
    Abstract source of the "full-screen content is active" signal.

    One implementation per platform (window manager query, presentation
    detection, ...). The visibility policy only consumes the boolean.
    """

    name: str | None = None  # Override in subclasses

    @abstractmethod
    def is_fullscreen_active(self) -> bool:
        """Return True while full-screen content (e.g. a slide show) is showing."""
        pass

    def get_name(self) -> str:
        return self.name or type(self).__name__


class StaticPresenceSignal(PresenceSignal):
    """Signal with a value set by the caller. Headless default."""

    name = "static"

    def __init__(self, active: bool = False):
        self.active = active

    def set(self, active: bool) -> None:
        self.active = active

    def is_fullscreen_active(self) -> bool:
        return self.active


class CallablePresenceSignal(PresenceSignal):
    """Adapts any zero-argument predicate."""

    name = "callable"

    def __init__(self, predicate: Callable[[], bool]):
        self.predicate = predicate

    def is_fullscreen_active(self) -> bool:
        return bool(self.predicate())
