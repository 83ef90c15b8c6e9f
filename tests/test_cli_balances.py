"""Tests for balances, settle-up and report commands."""

from datetime import date
from decimal import Decimal

import pytest

from groupsplit.cli.main import cli


def _invoke(cli_runner, temp_db, *args):
    return cli_runner.invoke(cli, ["--db-path", temp_db.database_path, *args])


@pytest.fixture
def dinner(expense_service, sample_group, sample_users):
    """alice pays 90 for dinner, split evenly."""
    return expense_service.create_expense(
        sample_group.id,
        sample_users["alice"],
        Decimal("90"),
        "EVEN",
        description="Dinner",
        date=date(2024, 2, 14),
    )


def test_balances(cli_runner, temp_db, sample_group, dinner):
    result = _invoke(cli_runner, temp_db, "balances", str(sample_group.id))

    assert result.exit_code == 0
    assert "Balances for 'Ski trip'" in result.output
    assert "Total spent: $90.00" in result.output
    assert "$60.00" in result.output
    assert "-$30.00" in result.output
    assert "Warning" not in result.output


def test_balances_all_settlements(
    cli_runner, temp_db, sample_group, sample_users, settlement_service
):
    settlement_id = settlement_service.record_debt(
        sample_group.id, sample_users["bob"], sample_users["alice"], Decimal("8")
    )
    settlement_service.mark_settled(settlement_id, sample_users["bob"])

    current = _invoke(cli_runner, temp_db, "balances", str(sample_group.id))
    history = _invoke(cli_runner, temp_db, "balances", str(sample_group.id), "--all-settlements")

    assert "$8.00" not in current.output
    assert "-$8.00" in history.output


def test_balances_unknown_group(cli_runner, temp_db):
    result = _invoke(cli_runner, temp_db, "balances", "7")

    assert result.exit_code == 1
    assert "Group 7 not found" in result.output


def test_settle_up(cli_runner, temp_db, sample_group, dinner):
    result = _invoke(cli_runner, temp_db, "settle-up", str(sample_group.id))

    assert result.exit_code == 0
    assert "bob pays alice $30.00" in result.output
    assert "carol pays alice $30.00" in result.output


def test_settle_up_nothing_owed(cli_runner, temp_db, sample_group):
    result = _invoke(cli_runner, temp_db, "settle-up", str(sample_group.id))

    assert result.exit_code == 0
    assert "All balances are settled!" in result.output


def test_report(cli_runner, temp_db, sample_group, dinner):
    result = _invoke(cli_runner, temp_db, "report", str(sample_group.id), "--period", "month")

    assert result.exit_code == 0
    assert "Spending by month" in result.output
    assert "2024-02" in result.output
    assert "alice" in result.output
    assert "$90.00" in result.output


def test_report_empty(cli_runner, temp_db, sample_group):
    result = _invoke(cli_runner, temp_db, "report", str(sample_group.id), "--period", "year")

    assert result.exit_code == 0
    assert "No expenses found" in result.output


def test_help_does_not_need_database(cli_runner, tmp_path):
    result = cli_runner.invoke(cli, ["--db-path", str(tmp_path / "unused.db"), "--help"])

    assert result.exit_code == 0
    assert "settle-up" in result.output
    assert not (tmp_path / "unused.db").exists()
