"""Tests for Database interface returning domain models."""

from datetime import date
from decimal import Decimal

from sqlalchemy.exc import OperationalError

from groupsplit.database.sqlalchemy_db import SQLAlchemyDatabase
from groupsplit.domain import entities
from groupsplit.domain.entities import SplitMethod


def _group_with_members(db, *names):
    group_id = db.create_group(name="Trip")
    user_ids = []
    for name in names:
        user_id = db.create_user(user_name=name)
        db.add_group_member(group_id, user_id)
        user_ids.append(user_id)
    return group_id, user_ids


class TestDatabaseInterface:
    """Tests to verify Database interface returns domain models."""

    def test_get_user_returns_member(self, temp_db):
        user_id = temp_db.create_user(user_name="alice", email="alice@example.com")

        member = temp_db.get_user(user_id)

        assert isinstance(member, entities.Member)
        assert member.user_id == user_id
        assert member.email == "alice@example.com"
        assert temp_db.get_user_by_name("alice") == member
        assert temp_db.get_user(9999) is None

    def test_get_group_returns_domain_model(self, temp_db):
        group_id = temp_db.create_group(name="Trip", goal_budget=Decimal("500.00"))

        group = temp_db.get_group(group_id)

        assert isinstance(group, entities.Group)
        assert group.name == "Trip"
        assert group.goal_budget == Decimal("500.00")

    def test_group_members_in_join_order(self, temp_db):
        group_id, user_ids = _group_with_members(temp_db, "zoe", "adam", "mia")

        members = temp_db.list_group_members(group_id)

        assert [m.user_id for m in members] == user_ids
        assert temp_db.is_group_member(group_id, user_ids[0])
        assert not temp_db.is_group_member(group_id, 9999)

    def test_create_expense_writes_shares(self, temp_db):
        group_id, (alice, bob) = _group_with_members(temp_db, "alice", "bob")

        expense_id = temp_db.create_expense(
            group_id=group_id,
            created_by_id=alice,
            amount=Decimal("30.00"),
            split_method=SplitMethod.CUSTOM,
            shares={alice: Decimal("10.00"), bob: Decimal("20.00")},
            date=date(2024, 5, 1),
            description="Taxi",
        )

        expense = temp_db.get_expense(expense_id)
        assert isinstance(expense, entities.Expense)
        assert expense.amount == Decimal("30.00")
        assert expense.split_method is SplitMethod.CUSTOM
        shares = temp_db.get_expense_shares(expense_id)
        assert {s.user_id: s.share for s in shares} == {
            alice: Decimal("10.00"),
            bob: Decimal("20.00"),
        }

    def test_list_expenses_newest_first_with_date_filter(self, temp_db):
        group_id, (alice,) = _group_with_members(temp_db, "alice")
        for day in (1, 15, 28):
            temp_db.create_expense(
                group_id=group_id,
                created_by_id=alice,
                amount=Decimal("1.00"),
                split_method=SplitMethod.EVEN,
                shares={alice: Decimal("1.00")},
                date=date(2024, 2, day),
            )

        expenses = temp_db.list_expenses(group_id)
        assert [e.date.day for e in expenses] == [28, 15, 1]

        filtered = temp_db.list_expenses(
            group_id, start_date=date(2024, 2, 10), end_date=date(2024, 2, 20)
        )
        assert [e.date.day for e in filtered] == [15]

    def test_list_expense_shares_is_scoped_to_group(self, temp_db):
        group_a, (alice,) = _group_with_members(temp_db, "alice")
        group_b = temp_db.create_group(name="Other")
        temp_db.add_group_member(group_b, alice)
        for group_id in (group_a, group_b):
            temp_db.create_expense(
                group_id=group_id,
                created_by_id=alice,
                amount=Decimal("4.00"),
                split_method=SplitMethod.EVEN,
                shares={alice: Decimal("4.00")},
                date=date(2024, 1, 1),
            )

        assert len(temp_db.list_expense_shares(group_a)) == 1

    def test_settlement_filters_and_mark_settled(self, temp_db):
        group_id, (alice, bob) = _group_with_members(temp_db, "alice", "bob")
        first = temp_db.create_settlement(group_id, bob, alice, Decimal("5.00"))
        second = temp_db.create_settlement(group_id, alice, bob, Decimal("7.00"))

        assert [s.id for s in temp_db.list_settlements(group_id)] == [first, second]
        assert [s.id for s in temp_db.list_settlements(group_id, from_user_id=bob)] == [first]
        assert [s.id for s in temp_db.list_settlements(group_id, to_user_id=bob)] == [second]

        # Only the debtor filter that matches updates the record
        assert temp_db.mark_settlement_settled(first, from_user_id=alice) == 0
        assert temp_db.mark_settlement_settled(first, from_user_id=bob) == 1
        assert temp_db.mark_settlement_settled(first, from_user_id=bob) == 0

        assert temp_db.get_settlement(first).settled is True
        assert [s.id for s in temp_db.list_settlements(group_id, settled=False)] == [second]
        assert [s.id for s in temp_db.list_settlements(group_id, settled=True)] == [first]

    def test_delete_settlements(self, temp_db):
        group_id, (alice, bob) = _group_with_members(temp_db, "alice", "bob")
        temp_db.create_settlement(group_id, bob, alice, Decimal("5.00"))
        temp_db.create_settlement(group_id, bob, alice, Decimal("6.00"))

        assert temp_db.delete_settlements(group_id) == 2
        assert temp_db.list_settlements(group_id) == []

    def test_load_balance_inputs(self, temp_db):
        group_id, (alice, bob) = _group_with_members(temp_db, "alice", "bob")
        temp_db.create_expense(
            group_id=group_id,
            created_by_id=alice,
            amount=Decimal("10.00"),
            split_method=SplitMethod.EVEN,
            shares={alice: Decimal("5.00"), bob: Decimal("5.00")},
            date=date(2024, 1, 1),
        )
        temp_db.create_settlement(group_id, bob, alice, Decimal("2.00"))

        inputs = temp_db.load_balance_inputs(group_id)

        assert isinstance(inputs, entities.BalanceInputs)
        assert [m.user_id for m in inputs.members] == [alice, bob]
        assert len(inputs.expenses) == 1
        assert len(inputs.expense_shares) == 2
        assert len(inputs.settlements) == 1


def test_load_balance_inputs_is_one_snapshot(temp_db, monkeypatch):
    """A write from another connection between the reads must not leak in."""
    group_id, user_ids = _group_with_members(temp_db, "alice", "bob", "carol")
    other = SQLAlchemyDatabase(f"sqlite:///{temp_db.database_path}?timeout=0.2")
    list_expenses = temp_db.list_expenses

    def list_expenses_then_write(*args, **kwargs):
        expenses = list_expenses(*args, **kwargs)
        try:
            other.create_expense(
                group_id=group_id,
                created_by_id=user_ids[0],
                amount=Decimal("30.00"),
                split_method=SplitMethod.EVEN,
                shares=dict.fromkeys(user_ids, Decimal("10.00")),
                date=date(2024, 1, 1),
            )
        except OperationalError:
            # Blocked by the open read transaction
            pass
        return expenses

    monkeypatch.setattr(temp_db, "list_expenses", list_expenses_then_write)
    try:
        inputs = temp_db.load_balance_inputs(group_id)
    finally:
        other.disconnect()

    expense_ids = {e.id for e in inputs.expenses}
    assert inputs.expenses == ()
    assert all(s.expense_id in expense_ids for s in inputs.expense_shares)
    assert inputs.expense_shares == ()
