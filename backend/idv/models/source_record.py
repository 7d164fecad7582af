"""
Source Record Model — Identity records held by the mock external sources
(national registry, revenue authority, mobile operators, banks, ...).
Read-only once seeded.
"""
import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Boolean

from idv.database import Base


class SourceRecord(Base):
    __tablename__ = "id_source_clients"

    record_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    id_type = Column(String(50), nullable=False)     # NationalID | Passport | DriversLicense
    # One record per ID number across all sources, even though lookups are per source.
    id_number = Column(String(50), nullable=False, unique=True, index=True)

    full_name = Column(String(200), nullable=False)
    date_of_birth = Column(DateTime)
    gender = Column(String(20), default="")
    mobile_number = Column(String(20), default="")
    province = Column(String(100), default="")
    district = Column(String(100), default="")
    postal_code = Column(String(20), default="")

    source = Column(String(100), nullable=False, index=True)  # e.g. INRIS, ZRA, MNO_AIRTEL
    is_verified = Column(Boolean, default=True)

    created_at = Column(DateTime, default=datetime.utcnow)
