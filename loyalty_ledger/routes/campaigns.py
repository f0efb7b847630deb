from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from loyalty_ledger.db import get_db
from loyalty_ledger.deps.auth import Caller, get_caller
from loyalty_ledger.schemas.campaign import CampaignList, CampaignResponse
from loyalty_ledger.services.campaign_service import get_campaign, list_active_campaigns


router = APIRouter(prefix="/campaigns-api", tags=["campaigns"])


@router.get("", response_model=CampaignList)
def list_campaigns(
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_db),
):
    return {"data": list_active_campaigns(db)}


@router.get("/{campaign_id}", response_model=CampaignResponse)
def read_campaign(
    campaign_id: str,
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_db),
):
    return {"data": get_campaign(db, campaign_id)}
