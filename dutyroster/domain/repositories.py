"""Repository classes for data access."""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy.orm import Session

from .models import RosterState, RotationEvent


class RotationEventRepository:
    """Repository for rotation history access."""

    @staticmethod
    def get_all(session: Session) -> List[RotationEvent]:
        """Get all events, oldest first."""
        return session.query(RotationEvent).order_by(RotationEvent.id).all()

    @staticmethod
    def get_by_action(session: Session, action: str) -> List[RotationEvent]:
        """Get all events of one kind (auto, next, previous, restore)."""
        return (
            session.query(RotationEvent)
            .filter(RotationEvent.action == action)
            .order_by(RotationEvent.id)
            .all()
        )

    @staticmethod
    def get_latest(session: Session) -> Optional[RotationEvent]:
        """Get the most recent event."""
        return session.query(RotationEvent).order_by(RotationEvent.id.desc()).first()

    @staticmethod
    def record(session: Session, action: str, state: RosterState) -> RotationEvent:
        """Record the state reached by an action."""
        event = RotationEvent(
            action=action,
            day_key=state.last_update,
            index1=state.index1,
            index2=state.index2,
        )
        session.add(event)
        session.commit()
        session.refresh(event)
        return event

    @staticmethod
    def delete_all(session: Session) -> int:
        """Delete the whole history. Returns number of deleted rows."""
        count = session.query(RotationEvent).delete(synchronize_session=False)
        session.commit()
        return count
