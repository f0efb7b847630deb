import uuid
from sqlalchemy import Column, String, Integer, Boolean, TIMESTAMP
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.sql import func

from loyalty_ledger.db import Base, utcnow


class Campaign(Base):
    __tablename__ = "campaigns"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)

    name = Column(String(100), nullable=False)
    description = Column(String(255))

    # display only, never added to earned points
    bonus_points = Column(Integer, nullable=False, default=0)

    is_active = Column(Boolean, default=True)

    start_date = Column(TIMESTAMP)
    end_date = Column(TIMESTAMP)

    created_at = Column(TIMESTAMP, default=utcnow, server_default=func.now())
