"""
Registered Client Models — People who completed registration, and the
insurance products attached to them.
"""
import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, ForeignKey, Numeric, Text
from sqlalchemy.orm import relationship

from idv.database import Base


class RegisteredClient(Base):
    __tablename__ = "registered_clients"

    registration_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    client_id = Column(String(36), ForeignKey("id_source_clients.record_id"), nullable=True)

    id_number = Column(String(50), unique=True, nullable=False, index=True)
    full_name = Column(String(200), nullable=False)
    date_of_birth = Column(DateTime)
    gender = Column(String(20), default="")
    mobile_number = Column(String(20), default="")
    email = Column(String(100), default="")
    province = Column(String(100), default="")
    district = Column(String(100), default="")
    postal_code = Column(String(20), default="")

    registered_by_user_id = Column(String(36), ForeignKey("users.user_id"), nullable=False, index=True)
    registration_date = Column(DateTime, default=datetime.utcnow)

    status = Column(String(50), default="Active")   # Active | Pending | Suspended
    notes = Column(Text, nullable=True)

    registered_by = relationship("User")
    products = relationship(
        "ClientProduct",
        back_populates="client",
        cascade="all, delete-orphan",
    )


class ClientProduct(Base):
    __tablename__ = "client_products"

    client_product_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    registration_id = Column(String(36), ForeignKey("registered_clients.registration_id"), nullable=False, index=True)
    product_id = Column(String(36), ForeignKey("products.product_id"), nullable=False, index=True)

    enrollment_date = Column(DateTime, default=datetime.utcnow)
    status = Column(String(50), default="Active")   # Active | Lapsed | Cancelled
    premium_amount = Column(Numeric(18, 2), default=0)
    policy_number = Column(String(100), default="")

    start_date = Column(DateTime, default=datetime.utcnow)
    end_date = Column(DateTime, nullable=True)
    notes = Column(Text, nullable=True)

    client = relationship("RegisteredClient", back_populates="products")
    product = relationship("Product")
