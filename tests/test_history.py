"""Tests for rotation history recording and export."""

from datetime import date

import pandas as pd

from dutyroster.domain.models import RosterState
from dutyroster.domain.repositories import RotationEventRepository
from dutyroster.engine.rotation import DutyRotationEngine
from dutyroster.io.export_csv import export_history_csv, history_frame


def test_engine_records_each_mutation(db_session):
    engine = DutyRotationEngine(RosterState(), history=db_session)

    engine.advance_if_due(date(2024, 1, 3))
    engine.advance_if_due(date(2024, 1, 3))  # no-op, not recorded
    engine.advance_manually()
    engine.rewind_manually()
    engine.restore_to_origin()

    events = RotationEventRepository.get_all(db_session)
    assert [e.action for e in events] == ["auto", "next", "previous", "restore"]
    assert (events[0].index1, events[0].index2) == (2, 3)
    assert events[0].day_key == "20240103"
    assert (events[1].index1, events[1].index2) == (4, 5)


def test_get_by_action_and_latest(db_session):
    RotationEventRepository.record(db_session, "auto", RosterState(index1=2, index2=3, last_update="20240103"))
    RotationEventRepository.record(db_session, "next", RosterState(index1=4, index2=5, last_update="20240103"))

    autos = RotationEventRepository.get_by_action(db_session, "auto")
    assert len(autos) == 1
    assert RotationEventRepository.get_latest(db_session).action == "next"


def test_delete_all(db_session):
    RotationEventRepository.record(db_session, "auto", RosterState())
    assert RotationEventRepository.delete_all(db_session) == 1
    assert RotationEventRepository.get_latest(db_session) is None


def test_history_frame_is_one_based(db_session):
    RotationEventRepository.record(db_session, "auto", RosterState(index1=0, index2=46, last_update="20240103"))

    df = history_frame(db_session)

    assert list(df.columns) == ["id", "occurred_at", "action", "day_key", "duty1", "duty2"]
    assert (df.iloc[0]["duty1"], df.iloc[0]["duty2"]) == (1, 47)


def test_history_frame_empty(db_session):
    df = history_frame(db_session)
    assert df.empty
    assert "duty1" in df.columns


def test_export_history_csv(db_session, tmp_path):
    engine = DutyRotationEngine(RosterState(), history=db_session)
    engine.advance_if_due(date(2024, 1, 3))
    engine.advance_manually()
    out = tmp_path / "history.csv"

    count = export_history_csv(db_session, out, action="next")

    assert count == 1
    written = pd.read_csv(out)
    assert written.iloc[0]["action"] == "next"
    assert written.iloc[0]["duty1"] == 5
