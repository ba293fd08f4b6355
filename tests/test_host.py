"""Tests for the headless host: startup, recurring checks and menu commands."""

from datetime import date

import pytest

from dutyroster.domain.models import RosterState
from dutyroster.engine.base import StaticPresenceSignal
from dutyroster.engine.rotation import DutyRotationEngine
from dutyroster.host import DutyRosterHost, RecurringTask
from dutyroster.io.state_store import IniStateStore
from dutyroster.services.clock import FixedClock


@pytest.fixture
def store(tmp_path):
    return IniStateStore(tmp_path / "duty_config.ini")


@pytest.fixture
def host_parts(store):
    clock = FixedClock(date(2024, 1, 3))
    presence = StaticPresenceSignal()
    notices = []
    displays = []
    engine = DutyRotationEngine(store.load(), store=store)
    host = DutyRosterHost(
        engine,
        clock,
        presence=presence,
        notifier=lambda title, message: notices.append((title, message)),
        display=lambda pair, visible: displays.append((pair, visible)),
        check_interval_minutes=30,
        presence_interval_seconds=1.5,
    )
    return host, clock, presence, notices, displays


def test_startup_rotates_once_on_weekday(host_parts, store):
    host, clock, presence, notices, displays = host_parts

    assert host.start() is True
    assert displays[-1] == ((3, 4), True)
    assert store.load().last_update == "20240103"

    assert host.check_duty() is False


def test_startup_on_weekend_does_not_rotate(host_parts):
    host, clock, presence, notices, displays = host_parts
    clock.set(date(2024, 1, 6))

    assert host.start() is False
    assert displays[-1] == ((1, 2), True)


def test_periodic_check_rotates_next_day(host_parts):
    host, clock, presence, notices, displays = host_parts
    host.start(now=0.0)
    clock.set(date(2024, 1, 4))

    ran = host.tick(now=30 * 60.0)

    assert "duty-check" in ran
    assert host.engine.current_pair() == (5, 6)


def test_tick_only_runs_due_tasks(host_parts):
    host, clock, presence, notices, displays = host_parts
    host.start(now=0.0)

    assert host.tick(now=1.0) == []
    assert host.tick(now=1.5) == ["presence-check"]
    assert host.tick(now=2.0) == []


def test_presence_check_hides_and_restores(host_parts):
    host, clock, presence, notices, displays = host_parts
    host.start()

    presence.set(True)
    assert host.check_presence() is False
    assert displays[-1][1] is False

    presence.set(False)
    assert host.check_presence() is True
    assert displays[-1][1] is True


def test_refresh_notifies_both_outcomes(host_parts):
    host, clock, presence, notices, displays = host_parts

    assert host.refresh() is True
    assert notices[-1][0] == "Duty updated"
    assert "2024-01-03 Wednesday" in notices[-1][1]

    assert host.refresh() is False
    assert notices[-1][0] == "Notice"


def test_menu_commands_persist(host_parts, store):
    host, clock, presence, notices, displays = host_parts
    host.start()

    host.next()
    assert store.load().pair == (4, 5)
    host.previous()
    host.previous()
    assert store.load().pair == (0, 1)
    host.restore()
    assert store.load().pair == (2, 3)
    assert displays[-1] == ((3, 4), True)


def test_toggle_visibility(host_parts):
    host, clock, presence, notices, displays = host_parts
    host.start()

    assert host.toggle_visibility() is False
    assert host.toggle_visibility() is True


def test_run_loop_with_fake_time(host_parts, store):
    host, clock, presence, notices, displays = host_parts
    now = [0.0]
    sleeps = []

    def fake_sleep(seconds):
        sleeps.append(seconds)
        now[0] += seconds

    ticks = host.run(max_ticks=4, sleep=fake_sleep, monotonic=lambda: now[0])

    assert ticks == 4
    assert sleeps == [1.5] * 4
    assert host.running is False
    assert store.load().last_update == "20240103"


def test_quit_stops_loop(host_parts):
    host, clock, presence, notices, displays = host_parts
    host.start()
    host.quit()
    assert host.running is False


def test_recurring_task():
    calls = []
    task = RecurringTask("t", 10.0, lambda: calls.append(1), next_due=5.0)

    assert task.run_if_due(4.0) is False
    assert task.run_if_due(5.0) is True
    assert task.next_due == 15.0
    assert calls == [1]
