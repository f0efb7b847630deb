from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from loyalty_ledger.db import get_db
from loyalty_ledger.deps.auth import Caller, get_caller
from loyalty_ledger.schemas.loyalty_level import LoyaltyLevelList
from loyalty_ledger.services.level_service import list_levels


router = APIRouter(prefix="/loyalty-levels-api", tags=["loyalty-levels"])


@router.get("", response_model=LoyaltyLevelList)
def list_loyalty_levels(
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_db),
):
    return {"data": list_levels(db)}
