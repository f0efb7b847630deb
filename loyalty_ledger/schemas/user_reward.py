from datetime import datetime
from typing import Optional

from uuid import UUID

from pydantic import BaseModel

from loyalty_ledger.schemas.reward import RewardSummary
from loyalty_ledger.schemas.transaction import TransactionOut
from loyalty_ledger.schemas.user import UserOut


class UserRewardOut(BaseModel):
    id: UUID
    user_id: UUID
    reward_id: UUID

    status: str

    redeemed_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class UserRewardWithReward(UserRewardOut):
    reward: Optional[RewardSummary] = None


class UserRewardList(BaseModel):
    data: list[UserRewardWithReward]


class RedeemResult(BaseModel):
    userReward: UserRewardOut
    transaction: TransactionOut
    user: UserOut
