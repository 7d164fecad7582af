"""
Audit Service — Records who did what to which entity.
"""
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from idv.models.audit import AuditLog


class AuditService:
    """Creates append-only audit log entries."""

    @staticmethod
    def log_action(
        db: Session,
        user_id: str,
        action: str,
        entity_type: str,
        entity_id: Optional[str] = None,
        details: Optional[str] = None,
        ip_address: Optional[str] = None,
    ) -> AuditLog:
        """Create an audit log entry.

        Args:
            db: Database session.
            user_id: Acting user.
            action: Action label (e.g. "Client Registration").
            entity_type: Kind of entity touched (Client, ClientProduct, ...).
            entity_id: Identifier of the entity, if any.
            details: Human-readable description.
            ip_address: Client IP.

        Returns:
            The created AuditLog entry.
        """
        entry = AuditLog(
            user_id=user_id,
            action=action,
            entity_type=entity_type,
            entity_id=entity_id,
            details=details,
            ip_address=ip_address,
            timestamp=datetime.utcnow(),
        )

        db.add(entry)
        db.commit()
        db.refresh(entry)

        return entry

    @staticmethod
    def get_trail(
        db: Session,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        user_id: Optional[str] = None,
    ) -> list[AuditLog]:
        """Audit entries filtered by date range or user, newest first."""
        query = db.query(AuditLog)
        if start_date and end_date:
            query = query.filter(AuditLog.timestamp >= start_date, AuditLog.timestamp <= end_date)
        elif user_id:
            query = query.filter(AuditLog.user_id == user_id)
        return query.order_by(AuditLog.timestamp.desc()).all()

    @staticmethod
    def recent(db: Session, limit: int = 10) -> list[AuditLog]:
        return db.query(AuditLog).order_by(AuditLog.timestamp.desc()).limit(limit).all()
