from datetime import datetime
from typing import Optional, Union

from uuid import UUID

from pydantic import BaseModel

from loyalty_ledger.schemas.user import UserOut


class EarnRequest(BaseModel):
    # purchase amount, must be a positive whole number (checked by the ledger)
    amount: Optional[Union[int, float]] = None
    description: Optional[str] = None


class TransactionOut(BaseModel):
    id: UUID
    user_id: UUID

    type: str
    amount: int
    description: Optional[str] = None

    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class TransactionPage(BaseModel):
    data: list[TransactionOut]
    count: int


class EarnResult(BaseModel):
    transaction: TransactionOut
    user: UserOut
