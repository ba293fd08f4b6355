"""Headless host - wires clock, engine, presence signal and notifications.

Stands in for the desktop widget: runs the startup check, dispatches the
recurring duty and presence checks, and exposes the tray-menu commands.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from dutyroster.engine.base import PresenceSignal, StaticPresenceSignal
from dutyroster.engine.rotation import DutyRotationEngine
from dutyroster.engine.visibility import VisibilityPolicy
from dutyroster.services.calendar import describe_day


def console_notifier(title: str, message: str) -> None:
    print(f"[NOTICE] {title}: {message}")


def console_display(pair: Tuple[int, int], visible: bool) -> None:
    state = "shown" if visible else "hidden"
    print(f"[DISPLAY] On duty: {pair[0]} & {pair[1]} ({state})")


@dataclass
class RecurringTask:
    """Callback due every ``interval`` seconds of the host's monotonic clock."""

    name: str
    interval: float
    callback: Callable[[], object]
    next_due: float = 0.0

    def run_if_due(self, now: float) -> bool:
        if now < self.next_due:
            return False
        self.callback()
        self.next_due = now + self.interval
        return True


class DutyRosterHost:
    """Event-loop host for the rotation engine."""

    def __init__(
        self,
        engine: DutyRotationEngine,
        clock,
        presence: PresenceSignal | None = None,
        notifier: Callable[[str, str], None] = console_notifier,
        display: Callable[[Tuple[int, int], bool], None] = console_display,
        check_interval_minutes: float = 30.0,
        presence_interval_seconds: float = 1.5,
    ):
        self.engine = engine
        self.clock = clock
        self.presence = presence or StaticPresenceSignal()
        self.notifier = notifier
        self.display = display
        self.visibility = VisibilityPolicy()
        self.running = False
        self.tasks: List[RecurringTask] = [
            RecurringTask("duty-check", check_interval_minutes * 60.0, self.check_duty),
            RecurringTask("presence-check", presence_interval_seconds, self.check_presence),
        ]

    def start(self, now: float = 0.0) -> bool:
        """Startup check. Returns True if the roster rotated."""
        rotated = self.engine.advance_if_due(self.clock.today())
        self.refresh_display()
        for task in self.tasks:
            task.next_due = now + task.interval
        self.running = True
        return rotated

    def refresh_display(self) -> None:
        self.display(self.engine.current_pair(), self.visibility.visible)

    # Recurring tasks

    def check_duty(self) -> bool:
        rotated = self.engine.advance_if_due(self.clock.today())
        if rotated:
            self.refresh_display()
        return rotated

    def check_presence(self) -> bool:
        before = self.visibility.visible
        visible = self.visibility.update(self.presence.is_fullscreen_active())
        if visible != before:
            self.refresh_display()
        return visible

    def tick(self, now: float) -> List[str]:
        """Run every due task. Returns names of the tasks that ran."""
        return [task.name for task in self.tasks if task.run_if_due(now)]

    # Menu commands

    def refresh(self) -> bool:
        """Manual check with user feedback."""
        today = self.clock.today()
        rotated = self.engine.advance_if_due(today)
        if rotated:
            self.notifier("Duty updated", f"Today is {describe_day(today)}, duty roster updated.")
            self.refresh_display()
        else:
            self.notifier("Notice", "Today's duty is already arranged or it is the weekend.")
        return rotated

    def previous(self) -> None:
        self.engine.rewind_manually()
        self.refresh_display()

    def next(self) -> None:
        self.engine.advance_manually()
        self.refresh_display()

    def restore(self) -> None:
        self.engine.restore_to_origin()
        self.refresh_display()

    def toggle_visibility(self) -> bool:
        visible = self.visibility.toggle()
        self.refresh_display()
        return visible

    def quit(self) -> None:
        self.engine.save()
        self.running = False
        print("[INFO] Duty roster stopped")

    def run(
        self,
        max_ticks: Optional[int] = None,
        sleep: Optional[Callable[[float], None]] = None,
        monotonic: Optional[Callable[[], float]] = None,
    ) -> int:
        """
        Loop until ``quit`` or ``max_ticks`` iterations.

        Returns:
            Number of loop iterations
        """
        sleep = sleep or time.sleep
        monotonic = monotonic or time.monotonic
        if not self.running:
            self.start(monotonic())
        poll = min(task.interval for task in self.tasks)
        ticks = 0
        try:
            while self.running and (max_ticks is None or ticks < max_ticks):
                self.tick(monotonic())
                ticks += 1
                sleep(poll)
        except KeyboardInterrupt:
            print("[INFO] Interrupted")
        finally:
            if self.running:
                self.quit()
        return ticks
