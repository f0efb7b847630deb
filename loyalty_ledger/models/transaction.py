import uuid

from sqlalchemy import CheckConstraint, Column, ForeignKey, Index, Integer, String, TIMESTAMP
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.sql import func

from loyalty_ledger.db import Base, utcnow


TRANSACTION_TYPES = ("earned", "spent", "expired")


class Transaction(Base):
    __tablename__ = "transactions"

    __table_args__ = (
        Index("ix_transactions_user_created", "user_id", "created_at"),
        CheckConstraint("type IN ('earned', 'spent', 'expired')", name="ck_transactions_type"),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)

    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id"), nullable=False)

    type = Column(String(20), nullable=False)  # earned / spent / expired
    amount = Column(Integer, nullable=False)  # > 0 earned, < 0 spent
    description = Column(String(255))

    created_at = Column(TIMESTAMP, nullable=False, default=utcnow, server_default=func.now())
