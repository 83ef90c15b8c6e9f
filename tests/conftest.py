"""Shared pytest fixtures for groupsplit tests."""

import tempfile
import os
import pytest

from groupsplit.database.factories import create_sqlite_database
from groupsplit.domain.expense import ExpenseService
from groupsplit.domain.group import GroupService
from groupsplit.domain.settlement import SettlementService
from groupsplit.domain.summary import GroupSummaryService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def group_service(temp_db):
    """Create a GroupService with a temporary database."""
    return GroupService(temp_db)


@pytest.fixture
def expense_service(temp_db):
    """Create an ExpenseService with a temporary database."""
    return ExpenseService(temp_db)


@pytest.fixture
def settlement_service(temp_db):
    """Create a SettlementService with a temporary database."""
    return SettlementService(temp_db)


@pytest.fixture
def summary_service(temp_db):
    """Create a GroupSummaryService with a temporary database."""
    return GroupSummaryService(temp_db)


@pytest.fixture
def sample_users(group_service):
    """Create alice, bob and carol; return a name -> user ID mapping."""
    return {
        name: group_service.create_user(user_name=name, email=f"{name}@example.com")
        for name in ("alice", "bob", "carol")
    }


@pytest.fixture
def sample_group(group_service, sample_users):
    """Create a group with alice, bob and carol as members (in that order)."""
    group_id = group_service.create_group(name="Ski trip", description="Alps 2024")
    for user_id in sample_users.values():
        group_service.add_member(group_id, user_id)
    return group_service.get_group(group_id)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
