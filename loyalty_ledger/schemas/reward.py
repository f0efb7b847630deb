from datetime import datetime
from typing import Optional

from uuid import UUID

from pydantic import BaseModel


class RewardOut(BaseModel):
    id: UUID
    name: str
    description: Optional[str] = None
    image_url: Optional[str] = None
    points_cost: int
    is_available: bool
    stock: Optional[int] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class RewardSummary(BaseModel):
    name: str
    description: Optional[str] = None
    points_cost: int
    image_url: Optional[str] = None

    class Config:
        from_attributes = True


class RewardList(BaseModel):
    data: list[RewardOut]


class RedeemRequest(BaseModel):
    reward_id: Optional[str] = None
