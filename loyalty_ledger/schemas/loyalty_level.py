from datetime import datetime
from typing import Optional

from uuid import UUID

from pydantic import BaseModel


class LoyaltyLevelOut(BaseModel):
    id: UUID

    name: str
    description: Optional[str] = None

    min_points: int
    bonus_multiplier: float

    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class LoyaltyLevelList(BaseModel):
    data: list[LoyaltyLevelOut]
