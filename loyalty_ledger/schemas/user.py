from datetime import datetime
from typing import Optional

from uuid import UUID

from pydantic import BaseModel

from loyalty_ledger.schemas.loyalty_level import LoyaltyLevelOut


class UserRegister(BaseModel):
    full_name: Optional[str] = None
    email: Optional[str] = None


class UserUpdate(BaseModel):
    full_name: Optional[str] = None


class UserOut(BaseModel):
    id: UUID
    email: Optional[str] = None
    full_name: Optional[str] = None

    points: int
    loyalty_level_id: Optional[UUID] = None

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class UserProfileOut(UserOut):
    loyalty_level: Optional[LoyaltyLevelOut] = None


class UserProfileResponse(BaseModel):
    data: Optional[UserProfileOut] = None


class UserResponse(BaseModel):
    data: UserOut
