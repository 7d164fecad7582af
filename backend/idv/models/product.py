"""
Product Model — Insurance products offered to registered clients.
"""
import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Boolean, Numeric, Text

from idv.database import Base


class Product(Base):
    __tablename__ = "products"

    product_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    product_code = Column(String(50), unique=True, nullable=False)
    product_name = Column(String(200), nullable=False)
    category = Column(String(100), nullable=False)   # Life Insurance | Savings & Investment | Health | Pension | Asset
    description = Column(Text)

    premium_amount = Column(Numeric(18, 2), default=0)
    currency = Column(String(10), default="ZMW")

    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)
