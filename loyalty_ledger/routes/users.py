from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from loyalty_ledger.db import get_db
from loyalty_ledger.deps.auth import Caller, get_caller
from loyalty_ledger.schemas.user import UserProfileResponse, UserRegister, UserResponse, UserUpdate
from loyalty_ledger.services.user_service import get_profile, register, update_profile


router = APIRouter(prefix="/users-api", tags=["users"])


@router.get("", response_model=UserProfileResponse)
def read_profile(
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_db),
):
    return {"data": get_profile(db, caller)}


@router.put("", response_model=UserResponse)
def edit_profile(
    payload: UserUpdate,
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_db),
):
    return {"data": update_profile(db, caller, payload.full_name)}


@router.post("/register", response_model=UserResponse, status_code=201)
def register_profile(
    payload: UserRegister,
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_db),
):
    return {"data": register(db, caller, payload.full_name, payload.email)}
