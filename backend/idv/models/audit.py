"""
Audit Log Model — Immutable trail of user actions (registration, updates, ...).
"""
import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, ForeignKey, Text
from sqlalchemy.orm import relationship

from idv.database import Base


class AuditLog(Base):
    __tablename__ = "audit_logs"

    audit_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.user_id"), nullable=False, index=True)

    action = Column(String(100), nullable=False)
    # Actions: Client Registration, Client Update, Client Deletion,
    #          Product Attached, Product Removed, Login

    entity_type = Column(String(100), nullable=False)
    entity_id = Column(String(36), nullable=True)
    details = Column(Text, nullable=True)
    ip_address = Column(String(50))

    timestamp = Column(DateTime, default=datetime.utcnow)

    user = relationship("User")
