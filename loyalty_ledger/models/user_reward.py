import uuid
from sqlalchemy import Column, ForeignKey, Index, String, TIMESTAMP
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from loyalty_ledger.db import Base, utcnow


class UserReward(Base):
    __tablename__ = "user_rewards"

    __table_args__ = (Index("ix_user_rewards_user_redeemed", "user_id", "redeemed_at"),)

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)

    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id"), nullable=False)
    reward_id = Column(UUID(as_uuid=True), ForeignKey("rewards.id"), nullable=False)

    status = Column(String(20), nullable=False, default="pending")
    # pending | fulfilled | cancelled (transitions handled outside this service)

    redeemed_at = Column(TIMESTAMP, default=utcnow, server_default=func.now())

    reward = relationship("Reward")
