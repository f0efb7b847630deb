from datetime import datetime
from typing import Optional

from uuid import UUID

from pydantic import BaseModel


class CampaignOut(BaseModel):
    id: UUID
    name: str
    description: Optional[str] = None
    bonus_points: int

    is_active: bool

    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None

    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class CampaignList(BaseModel):
    data: list[CampaignOut]


class CampaignResponse(BaseModel):
    data: CampaignOut
