import logging

from sqlalchemy.orm import Session, joinedload

from loyalty_ledger.errors import InvalidInput, NotFound
from loyalty_ledger.models.user import User
from loyalty_ledger.services.level_service import get_default_level


logger = logging.getLogger(__name__)


def get_profile(db: Session, caller) -> User | None:
    return (
        db.query(User)
        .options(joinedload(User.loyalty_level))
        .filter(User.id == caller.id)
        .first()
    )


def update_profile(db: Session, caller, full_name: str | None) -> User:
    user = db.query(User).filter(User.id == caller.id).first()
    if not user:
        raise NotFound("User profile not found")

    # only the display name is editable here, points belong to the ledger
    if full_name is not None:
        user.full_name = full_name

    db.commit()
    db.refresh(user)
    return user


def register(db: Session, caller, full_name: str | None, email: str | None) -> User:
    existing = db.query(User.id).filter(User.id == caller.id).first()
    if existing:
        raise InvalidInput("User already registered")

    level = get_default_level(db)
    if level is None:
        logger.warning("default loyalty level not found, registering %s without level", caller.id)

    user = User(
        id=caller.id,
        full_name=full_name,
        email=email or caller.email,
        loyalty_level_id=level.id if level else None,
        points=0,
    )
    db.add(user)
    db.commit()
    db.refresh(user)

    logger.info("registered user %s", user.id)
    return user
