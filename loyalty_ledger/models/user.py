from sqlalchemy import CheckConstraint, Column, ForeignKey, Integer, String, TIMESTAMP
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from loyalty_ledger.db import Base, utcnow


class User(Base):
    __tablename__ = "users"

    __table_args__ = (CheckConstraint("points >= 0", name="ck_users_points_non_negative"),)

    # same value as the identity provider's subject, never generated here
    id = Column(UUID(as_uuid=True), primary_key=True)

    email = Column(String(255))
    full_name = Column(String(200))

    # running balance, always equal to the sum of the user's transactions
    points = Column(Integer, nullable=False, default=0)

    loyalty_level_id = Column(UUID(as_uuid=True), ForeignKey("loyalty_levels.id"), nullable=True)
    loyalty_level = relationship("LoyaltyLevel")

    created_at = Column(TIMESTAMP, default=utcnow, server_default=func.now())
    updated_at = Column(TIMESTAMP, default=utcnow, server_default=func.now(), onupdate=utcnow)
