import uuid
from decimal import Decimal

import pytest
from sqlalchemy.exc import IntegrityError

from loyalty_ledger.models.loyalty_level import LoyaltyLevel
from loyalty_ledger.models.reward import Reward
from loyalty_ledger.models.transaction import Transaction
from loyalty_ledger.models.user import User


class TestSchemaConstraints:

    def _insert(self, db, row):
        db.add(row)
        with pytest.raises(IntegrityError):
            db.commit()
        db.rollback()

    def test_negative_balance(self, db):
        self._insert(db, User(id=uuid.uuid4(), points=-1))

    @pytest.mark.parametrize("points_cost", [0, -10])
    def test_reward_cost_must_be_positive(self, db, points_cost):
        self._insert(db, Reward(name="Free", points_cost=points_cost))

    def test_reward_stock_cannot_go_negative(self, db):
        self._insert(db, Reward(name="Mug", points_cost=10, stock=-1))

    def test_unknown_transaction_type(self, db, make_user):
        user = make_user()
        self._insert(db, Transaction(user_id=user.id, type="refund", amount=5))

    def test_multiplier_must_be_positive(self, db):
        self._insert(db, LoyaltyLevel(name="Broken", min_points=0, bonus_multiplier=Decimal("0")))

    def test_valid_rows_are_accepted(self, db, make_user):
        user = make_user()
        db.add(Reward(name="Mug", points_cost=10, stock=0))
        db.add(Reward(name="Gift card", points_cost=10, stock=None))
        db.add(Transaction(user_id=user.id, type="expired", amount=0))
        db.commit()

        assert db.query(Reward).count() == 2
