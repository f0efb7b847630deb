import logging
import os
from decimal import Decimal

from sqlalchemy.orm import Session

from loyalty_ledger.models.loyalty_level import LoyaltyLevel


logger = logging.getLogger(__name__)


DEFAULT_LOYALTY_LEVEL = os.getenv("DEFAULT_LOYALTY_LEVEL", "Bronze")

DEFAULT_MULTIPLIER = Decimal("1.0")

# (name, min_points, bonus_multiplier, description)
DEFAULT_LEVELS = [
    ("Bronze", 0, "1.00", "Entry level for every new member"),
    ("Silver", 1000, "1.25", "25% more points on every purchase"),
    ("Gold", 5000, "1.50", "50% more points on every purchase"),
    ("Platinum", 15000, "2.00", "Double points on every purchase"),
]


def get_bonus_multiplier(level: LoyaltyLevel | None) -> Decimal:
    if level is None or level.bonus_multiplier is None:
        return DEFAULT_MULTIPLIER

    multiplier = Decimal(str(level.bonus_multiplier))
    if multiplier <= 0:
        return DEFAULT_MULTIPLIER
    return multiplier


def list_levels(db: Session):
    return db.query(LoyaltyLevel).order_by(LoyaltyLevel.min_points.asc(), LoyaltyLevel.name.asc()).all()


def get_default_level(db: Session) -> LoyaltyLevel | None:
    return db.query(LoyaltyLevel).filter(LoyaltyLevel.name == DEFAULT_LOYALTY_LEVEL).first()


def ensure_default_levels(db: Session) -> int:
    """Seed the level catalog when it is empty. Returns the number of levels added."""
    if db.query(LoyaltyLevel.id).first() is not None:
        return 0

    for name, min_points, multiplier, description in DEFAULT_LEVELS:
        db.add(
            LoyaltyLevel(
                name=name,
                min_points=min_points,
                bonus_multiplier=Decimal(multiplier),
                description=description,
            )
        )
    db.commit()

    logger.info("seeded %s default loyalty levels", len(DEFAULT_LEVELS))
    return len(DEFAULT_LEVELS)
