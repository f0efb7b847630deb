from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from loyalty_ledger.db import get_db
from loyalty_ledger.deps.auth import Caller, get_caller
from loyalty_ledger.schemas.transaction import EarnRequest, EarnResult, TransactionPage
from loyalty_ledger.services.ledger_service import DEFAULT_PAGE_SIZE, earn_points, list_transactions


router = APIRouter(prefix="/transactions-api", tags=["transactions"])


@router.get("", response_model=TransactionPage)
def read_transactions(
    limit: int = DEFAULT_PAGE_SIZE,
    offset: int = 0,
    type: str | None = None,
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_db),
):
    rows, count = list_transactions(db, caller, limit=limit, offset=offset, type=type)
    return {"data": rows, "count": count}


@router.post("/earn", response_model=EarnResult, status_code=201)
def earn(
    payload: EarnRequest,
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_db),
):
    transaction, user = earn_points(db, caller, payload.amount, payload.description)
    return {"transaction": transaction, "user": user}
