"""Integration tests for end-to-end workflows."""

from groupsplit.cli.main import cli


def _extract_id(output):
    # Output like "Created group 'Trip' (ID: 1)"
    for line in output.split("\n"):
        if "ID:" in line:
            return line.split("ID:")[1].strip().rstrip(")")
    return None


def test_full_workflow(cli_runner, temp_db):
    """Test complete workflow: users → group → expenses → debt → balances → settle-up."""
    db_args = ["--db-path", temp_db.database_path]

    # Step 1: Create users
    for name in ("alice", "bob", "carol"):
        result = cli_runner.invoke(cli, [*db_args, "user", "add", name])
        assert result.exit_code == 0

    # Step 2: Create group with members
    result = cli_runner.invoke(
        cli,
        [
            *db_args,
            "group",
            "create",
            "Road trip",
            "--member",
            "alice",
            "--member",
            "bob",
            "--member",
            "carol",
        ],
    )
    assert result.exit_code == 0
    group_id = _extract_id(result.output)
    assert group_id is not None

    # Step 3: alice pays fuel (even), bob pays the hotel (custom)
    result = cli_runner.invoke(
        cli,
        [*db_args, "expense", "add", group_id, "--paid-by", "alice", "--amount", "120",
         "--description", "Fuel", "--date", "2024-06-01"],
    )
    assert result.exit_code == 0

    result = cli_runner.invoke(
        cli,
        [*db_args, "expense", "add", group_id, "--paid-by", "bob", "--amount", "60",
         "--split", "CUSTOM", "--share", "alice=20", "--share", "bob=20", "--share", "carol=20",
         "--date", "2024-06-02"],
    )
    assert result.exit_code == 0

    # Step 4: Balances: alice +60, bob 0, carol -60
    result = cli_runner.invoke(cli, [*db_args, "balances", group_id])
    assert result.exit_code == 0
    assert "Total spent: $180.00" in result.output
    assert "-$60.00" in result.output

    # Step 5: Settle-up plan
    result = cli_runner.invoke(cli, [*db_args, "settle-up", group_id])
    assert result.exit_code == 0
    assert "carol pays alice $60.00" in result.output
    assert "bob pays" not in result.output

    # Step 6: carol records an IOU to bob, then settles it
    result = cli_runner.invoke(
        cli, [*db_args, "debt", "add", group_id, "--from", "carol", "--to", "bob", "--amount", "5"]
    )
    assert result.exit_code == 0
    settlement = temp_db.list_settlements(int(group_id))[0]

    result = cli_runner.invoke(cli, [*db_args, "settle-up", group_id])
    assert "carol pays alice $60.00" in result.output
    assert "carol pays bob $5.00" in result.output

    result = cli_runner.invoke(
        cli, [*db_args, "debt", "settle", str(settlement.id), "--user", "carol"]
    )
    assert result.exit_code == 0

    result = cli_runner.invoke(cli, [*db_args, "settle-up", group_id])
    assert "carol pays bob" not in result.output

    # Step 7: Report
    result = cli_runner.invoke(cli, [*db_args, "report", group_id, "--period", "week"])
    assert result.exit_code == 0
    assert "2024-W22" in result.output
