import logging

from sqlalchemy.orm import Session, joinedload

from loyalty_ledger.errors import InvalidInput, NotFound, Rejected
from loyalty_ledger.models.reward import Reward
from loyalty_ledger.models.user_reward import UserReward
from loyalty_ledger.services.ledger_service import (
    check_ledger_consistency,
    load_user_for_update,
    spend,
)
from loyalty_ledger.utils import parse_uuid


logger = logging.getLogger(__name__)


def list_available_rewards(db: Session):
    return (
        db.query(Reward)
        .filter(Reward.is_available.is_(True))
        .order_by(Reward.points_cost.asc(), Reward.name.asc())
        .all()
    )


def list_my_rewards(db: Session, caller):
    return (
        db.query(UserReward)
        .options(joinedload(UserReward.reward))
        .filter(UserReward.user_id == caller.id)
        .order_by(UserReward.redeemed_at.desc(), UserReward.id.desc())
        .all()
    )


def _take_one_from_stock(db: Session, reward_id) -> bool:
    updated = (
        db.query(Reward)
        .filter(Reward.id == reward_id, Reward.stock > 0)
        .update({Reward.stock: Reward.stock - 1}, synchronize_session=False)
    )
    return updated == 1


# ============================================================
# REDEEM REWARD
# ============================================================
def redeem_reward(db: Session, caller, reward_id):
    """
    Exchange the caller's points for one unit of a reward.

    Checks run cheapest first (availability, stock, balance) and nothing is
    written until all of them pass. The pending UserReward, the debit and the
    stock decrement are committed together or not at all.
    """
    if not reward_id:
        raise InvalidInput("Reward ID is required")

    reward_uuid = parse_uuid(reward_id)
    reward = None
    if reward_uuid is not None:
        reward = db.query(Reward).filter(Reward.id == reward_uuid).first()

    if not reward:
        raise NotFound("Reward not found")

    if not reward.is_available:
        raise Rejected(Rejected.UNAVAILABLE, "Reward is not available")

    if reward.stock is not None and reward.stock <= 0:
        raise Rejected(Rejected.OUT_OF_STOCK, "Reward is out of stock")

    try:
        user = load_user_for_update(db, caller.id)
        if not user or user.points < reward.points_cost:
            raise Rejected(Rejected.INSUFFICIENT_POINTS, "Insufficient points")

        user_reward = UserReward(
            user_id=user.id,
            reward_id=reward.id,
            status="pending",
        )
        db.add(user_reward)
        db.flush()

        transaction = spend(db, user, reward.points_cost, f"Redeemed: {reward.name}")

        if reward.stock is not None and not _take_one_from_stock(db, reward.id):
            # the last unit went to a concurrent redemption
            raise Rejected(Rejected.OUT_OF_STOCK, "Reward is out of stock")

        check_ledger_consistency(db, user)
        db.commit()
    except Rejected as e:
        db.rollback()
        logger.info("redemption of reward %s by %s rejected: %s", reward_uuid, caller.id, e.reason)
        raise
    except Exception:
        db.rollback()
        raise

    logger.info("user %s redeemed reward %s for %s points", user.id, reward.id, reward.points_cost)

    return user_reward, transaction, user
