from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from loyalty_ledger.db import get_db
from loyalty_ledger.deps.auth import Caller, get_caller
from loyalty_ledger.schemas.reward import RedeemRequest, RewardList
from loyalty_ledger.schemas.user_reward import RedeemResult, UserRewardList
from loyalty_ledger.services.redemption_service import (
    list_available_rewards,
    list_my_rewards,
    redeem_reward,
)


router = APIRouter(prefix="/rewards-api", tags=["rewards"])


@router.get("", response_model=RewardList)
def list_rewards(
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_db),
):
    return {"data": list_available_rewards(db)}


@router.post("/redeem", response_model=RedeemResult, status_code=201)
def redeem(
    payload: RedeemRequest,
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_db),
):
    user_reward, transaction, user = redeem_reward(db, caller, payload.reward_id)
    return {"userReward": user_reward, "transaction": transaction, "user": user}


@router.get("/my-rewards", response_model=UserRewardList)
def my_rewards(
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_db),
):
    return {"data": list_my_rewards(db, caller)}
