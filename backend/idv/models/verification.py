"""
Verification Attempt Model — Append-only audit row, one per verification call.
"""
import uuid
from datetime import datetime
from sqlalchemy import Column, String, Integer, DateTime, ForeignKey

from idv.database import Base


class VerificationAttempt(Base):
    __tablename__ = "verification_attempts"

    attempt_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.user_id"), nullable=False, index=True)
    id_number = Column(String(50), nullable=False, index=True)

    search_timestamp = Column(DateTime, default=datetime.utcnow)
    result_status = Column(String(50), nullable=False)   # Found | NotFound | Multiple | Error
    result_count = Column(Integer, default=0)
    response_time_ms = Column(Integer, default=0)
    source_system = Column(String(100), default="")
