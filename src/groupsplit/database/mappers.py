"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so the balance engine never sees
ORM rows or lazily loaded relationships.
"""

from groupsplit.domain import entities as domain
from groupsplit.database.models import (
    User as ORMUser,
    Group as ORMGroup,
    Expense as ORMExpense,
    ExpenseShare as ORMExpenseShare,
    Settlement as ORMSettlement,
)


def user_to_member(orm_user: ORMUser) -> domain.Member:
    """Convert SQLAlchemy User model to domain Member entity."""
    return domain.Member(
        user_id=orm_user.id,
        user_name=orm_user.user_name,
        email=orm_user.email,
        image_url=orm_user.image_url,
    )


def group_to_domain(orm_group: ORMGroup) -> domain.Group:
    """Convert SQLAlchemy Group model to domain Group entity."""
    return domain.Group(
        id=orm_group.id,
        name=orm_group.name,
        description=orm_group.description,
        goal_budget=orm_group.goal_budget,
        created_at=orm_group.created_at,
    )


def expense_to_domain(orm_expense: ORMExpense) -> domain.Expense:
    """Convert SQLAlchemy Expense model to domain Expense entity."""
    return domain.Expense(
        id=orm_expense.id,
        group_id=orm_expense.group_id,
        created_by_id=orm_expense.created_by_id,
        amount=orm_expense.amount,
        split_method=domain.SplitMethod(orm_expense.split_method),
        date=orm_expense.date,
        description=orm_expense.description,
    )


def expense_share_to_domain(orm_share: ORMExpenseShare) -> domain.ExpenseShare:
    """Convert SQLAlchemy ExpenseShare model to domain ExpenseShare entity."""
    return domain.ExpenseShare(
        expense_id=orm_share.expense_id,
        user_id=orm_share.user_id,
        share=orm_share.share,
    )


def settlement_to_domain(orm_settlement: ORMSettlement) -> domain.Settlement:
    """Convert SQLAlchemy Settlement model to domain Settlement entity."""
    return domain.Settlement(
        id=orm_settlement.id,
        group_id=orm_settlement.group_id,
        from_user_id=orm_settlement.from_user_id,
        to_user_id=orm_settlement.to_user_id,
        amount=orm_settlement.amount,
        settled=bool(orm_settlement.settled),
        created_at=orm_settlement.created_at,
    )
