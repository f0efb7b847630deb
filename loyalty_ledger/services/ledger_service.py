import logging
from decimal import Decimal, InvalidOperation, ROUND_FLOOR

from sqlalchemy import func
from sqlalchemy.orm import Session

from loyalty_ledger.errors import InvalidInput, NotFound, Rejected
from loyalty_ledger.models.transaction import Transaction, TRANSACTION_TYPES
from loyalty_ledger.models.user import User
from loyalty_ledger.services.level_service import get_bonus_multiplier


logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 200

# upper bound of the INTEGER balance and amount columns
MAX_POINTS = 2**31 - 1


# ============================================================
# LEDGER READS
# ============================================================

def get_ledger_balance(db: Session, user_id) -> int:
    balance = (
        db.query(func.coalesce(func.sum(Transaction.amount), 0))
        .filter(Transaction.user_id == user_id)
        .scalar()
    )

    return int(balance or 0)


def check_ledger_consistency(db: Session, user: User) -> bool:
    ledger_balance = get_ledger_balance(db, user.id)
    if ledger_balance != user.points:
        logger.warning(
            "ledger drift for user %s: points=%s ledger=%s",
            user.id,
            user.points,
            ledger_balance,
        )
        return False
    return True


def load_user_for_update(db: Session, user_id) -> User | None:
    return db.query(User).filter(User.id == user_id).with_for_update().first()


def list_transactions(
    db: Session,
    caller,
    *,
    limit: int = DEFAULT_PAGE_SIZE,
    offset: int = 0,
    type: str | None = None,
):
    q = db.query(Transaction).filter(Transaction.user_id == caller.id)
    if type in TRANSACTION_TYPES:
        q = q.filter(Transaction.type == type)

    limit = max(1, min(limit, MAX_PAGE_SIZE))
    offset = max(0, offset)

    count = q.count()
    rows = (
        q.order_by(Transaction.created_at.desc(), Transaction.id.desc())
        .offset(offset)
        .limit(limit)
        .all()
    )
    return rows, count


# ============================================================
# LEDGER WRITES
# ============================================================

def parse_purchase_amount(amount) -> int:
    if amount is None or isinstance(amount, bool):
        raise InvalidInput("Invalid amount")

    try:
        value = Decimal(str(amount))
    except (InvalidOperation, ValueError):
        raise InvalidInput("Invalid amount")

    if not value.is_finite() or value <= 0 or value != value.to_integral_value():
        raise InvalidInput("Invalid amount")

    if value > MAX_POINTS:
        raise InvalidInput("Invalid amount")

    return int(value)


def compute_earned_points(raw_amount: int, multiplier) -> int:
    # points are whole numbers: always round down
    earned = Decimal(raw_amount) * Decimal(str(multiplier))
    return int(earned.to_integral_value(rounding=ROUND_FLOOR))


def _apply_balance_delta(db: Session, user_id, delta: int) -> bool:
    q = db.query(User).filter(User.id == user_id)
    if delta < 0:
        # compare-and-set: the debit only lands if the balance still covers it
        q = q.filter(User.points >= -delta)

    updated = q.update({User.points: User.points + delta}, synchronize_session=False)
    return updated == 1


def _record(db: Session, user: User, type: str, amount: int, description: str) -> Transaction:
    transaction = Transaction(
        user_id=user.id,
        type=type,
        amount=amount,
        description=description,
    )
    db.add(transaction)
    db.flush()
    db.refresh(user)
    return transaction


def earn(db: Session, user: User, raw_amount: int, description: str | None = None) -> Transaction:
    """
    Credit `user` for a purchase of `raw_amount`, scaled by the user's level.
    Flushes only: the caller owns the commit.
    """
    multiplier = get_bonus_multiplier(user.loyalty_level)
    earned_points = compute_earned_points(raw_amount, multiplier)
    # a purchase too small for a whole point is still recorded, as a 0 point entry
    if (user.points or 0) + earned_points > MAX_POINTS:
        raise InvalidInput("Invalid amount")

    if not _apply_balance_delta(db, user.id, earned_points):
        raise NotFound("User profile not found")

    return _record(
        db,
        user,
        "earned",
        earned_points,
        description or f"Purchase of {raw_amount}",
    )


def spend(db: Session, user: User, amount: int, description: str) -> Transaction:
    """
    Debit `amount` points from `user`.
    Flushes only: the caller owns the commit.
    """
    if amount is None or amount <= 0:
        raise InvalidInput("Invalid amount")

    if (user.points or 0) < amount:
        raise Rejected(Rejected.INSUFFICIENT_POINTS, "Insufficient points")

    if not _apply_balance_delta(db, user.id, -amount):
        # balance moved since it was read
        raise Rejected(Rejected.INSUFFICIENT_POINTS, "Insufficient points")

    return _record(db, user, "spent", -amount, description)


def earn_points(db: Session, caller, amount, description: str | None = None):
    raw_amount = parse_purchase_amount(amount)

    try:
        user = load_user_for_update(db, caller.id)
        if not user:
            raise NotFound("User profile not found")

        transaction = earn(db, user, raw_amount, description)
        check_ledger_consistency(db, user)
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info("user %s earned %s points (purchase %s)", user.id, transaction.amount, raw_amount)

    return transaction, user
