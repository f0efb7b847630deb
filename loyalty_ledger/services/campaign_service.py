from datetime import datetime
from sqlalchemy.orm import Session

from loyalty_ledger.db import utcnow
from loyalty_ledger.errors import NotFound
from loyalty_ledger.models.campaign import Campaign
from loyalty_ledger.utils import parse_uuid


def list_active_campaigns(db: Session, now: datetime | None = None):
    now = now or utcnow()

    return (
        db.query(Campaign)
        .filter(
            Campaign.is_active.is_(True),
            Campaign.start_date <= now,
            Campaign.end_date >= now,
        )
        .order_by(Campaign.start_date.desc())
        .all()
    )


def get_campaign(db: Session, campaign_id) -> Campaign:
    campaign_uuid = parse_uuid(campaign_id)
    campaign = None
    if campaign_uuid is not None:
        campaign = (
            db.query(Campaign)
            .filter(Campaign.id == campaign_uuid)
            .filter(Campaign.is_active.is_(True))
            .first()
        )

    if not campaign:
        raise NotFound("Campaign not found")
    return campaign
