# backend/modules/tax/models/tax_models.py

from sqlalchemy import (
    Column, String, Numeric, Boolean, DateTime, JSON, CheckConstraint, Index
)
from sqlalchemy.sql import func
import uuid

from core.database import Base


class TaxConfiguration(Base):
    """Tax rule records maintained by the admin tool; the engine only reads them"""
    __tablename__ = "tax_configurations"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(200), nullable=False, unique=True)

    # PERCENTAGE, FIXED_AMOUNT, GST, STATE_TAX, CITY_TAX
    type = Column(String(50), nullable=False)
    rate = Column(Numeric(12, 4), nullable=False)

    # Order amount thresholds (inclusive)
    min_amount = Column(Numeric(12, 2), nullable=True)
    max_amount = Column(Numeric(12, 2), nullable=True)

    # Region tokens (state, city or postal-code prefixes) and product categories
    applicable_in = Column(JSON, nullable=False, default=list)
    product_types = Column(JSON, nullable=False, default=list)

    is_active = Column(Boolean, default=True, nullable=False)

    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)

    __table_args__ = (
        CheckConstraint("rate >= 0", name="check_tax_configuration_rate_non_negative"),
        Index("idx_tax_configuration_active_type", "is_active", "type"),
    )
