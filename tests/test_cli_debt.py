"""Tests for debt commands."""

from decimal import Decimal

from groupsplit.cli.main import cli


def _invoke(cli_runner, temp_db, *args, **kwargs):
    return cli_runner.invoke(cli, ["--db-path", temp_db.database_path, *args], **kwargs)


def test_debt_add(cli_runner, temp_db, sample_group, sample_users):
    result = _invoke(
        cli_runner,
        temp_db,
        "debt",
        "add",
        str(sample_group.id),
        "--from",
        "bob",
        "--to",
        "alice",
        "--amount",
        "25",
    )

    assert result.exit_code == 0
    assert "Recorded debt" in result.output
    assert "$25.00" in result.output

    settlements = temp_db.list_settlements(sample_group.id)
    assert [(s.from_user_id, s.to_user_id) for s in settlements] == [
        (sample_users["bob"], sample_users["alice"])
    ]


def test_debt_add_to_self(cli_runner, temp_db, sample_group):
    result = _invoke(
        cli_runner,
        temp_db,
        "debt",
        "add",
        str(sample_group.id),
        "--from",
        "bob",
        "--to",
        "bob",
        "--amount",
        "25",
    )

    assert result.exit_code == 1
    assert "themselves" in result.output


def test_dues_and_owed(cli_runner, temp_db, sample_group, sample_users, settlement_service):
    settlement_service.record_debt(
        sample_group.id, sample_users["bob"], sample_users["alice"], Decimal("25")
    )

    dues = _invoke(cli_runner, temp_db, "debt", "dues", str(sample_group.id), "bob")
    owed = _invoke(cli_runner, temp_db, "debt", "owed", str(sample_group.id), "alice")

    assert dues.exit_code == 0
    assert "Owed to" in dues.output
    assert "alice" in dues.output
    assert owed.exit_code == 0
    assert "Owed by" in owed.output
    assert "bob" in owed.output


def test_dues_empty(cli_runner, temp_db, sample_group):
    dues = _invoke(cli_runner, temp_db, "debt", "dues", str(sample_group.id), "carol")
    owed = _invoke(cli_runner, temp_db, "debt", "owed", str(sample_group.id), "carol")

    assert "No open dues" in dues.output
    assert "Nobody owes you anything" in owed.output


def test_settle_as_debtor_and_creditor(
    cli_runner, temp_db, sample_group, sample_users, settlement_service
):
    first = settlement_service.record_debt(
        sample_group.id, sample_users["bob"], sample_users["alice"], Decimal("5")
    )
    second = settlement_service.record_debt(
        sample_group.id, sample_users["carol"], sample_users["alice"], Decimal("7")
    )

    result = _invoke(cli_runner, temp_db, "debt", "settle", str(first), "--user", "bob")
    assert result.exit_code == 0
    assert f"Marked debt {first} as settled" in result.output

    result = _invoke(
        cli_runner, temp_db, "debt", "settle", str(second), "--user", "alice", "--as-creditor"
    )
    assert result.exit_code == 0

    assert temp_db.list_settlements(sample_group.id, settled=False) == []


def test_settle_wrong_user(cli_runner, temp_db, sample_group, sample_users, settlement_service):
    settlement_id = settlement_service.record_debt(
        sample_group.id, sample_users["bob"], sample_users["alice"], Decimal("5")
    )

    result = _invoke(cli_runner, temp_db, "debt", "settle", str(settlement_id), "--user", "carol")

    assert result.exit_code == 1
    assert "No matching settlement" in result.output


def test_clear_requires_confirmation(
    cli_runner, temp_db, sample_group, sample_users, settlement_service
):
    settlement_service.record_debt(
        sample_group.id, sample_users["bob"], sample_users["alice"], Decimal("5")
    )

    result = _invoke(cli_runner, temp_db, "debt", "clear", str(sample_group.id), input="n\n")
    assert "Clear cancelled" in result.output
    assert len(temp_db.list_settlements(sample_group.id)) == 1

    result = _invoke(cli_runner, temp_db, "debt", "clear", str(sample_group.id), "--yes")
    assert result.exit_code == 0
    assert "Deleted 1 debt record" in result.output
    assert temp_db.list_settlements(sample_group.id) == []
