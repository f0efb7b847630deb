import uuid

from sqlalchemy import CheckConstraint, Column, Integer, Numeric, String, TIMESTAMP
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.sql import func

from loyalty_ledger.db import Base, utcnow


class LoyaltyLevel(Base):
    __tablename__ = "loyalty_levels"

    __table_args__ = (CheckConstraint("bonus_multiplier > 0", name="ck_loyalty_levels_multiplier_positive"),)

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)

    name = Column(String(50), nullable=False, unique=True)
    description = Column(String(255))

    # informational: nothing in this service moves users between levels
    min_points = Column(Integer, nullable=False, default=0)
    bonus_multiplier = Column(Numeric(5, 2), nullable=False, default=1)

    created_at = Column(TIMESTAMP, default=utcnow, server_default=func.now())
