"""
Tests for the DatabaseManager lifecycle.
"""

import pytest

from teamup.db import DatabaseManager
from teamup.models import User


@pytest.fixture
def manager():
    instance = DatabaseManager()
    instance.initialize("sqlite://")
    instance.create_all_tables()
    yield instance
    instance.dispose()


def test_session_commits_on_success(manager):
    with manager.session() as session:
        session.add(User(name="Ada", email="ada@example.com"))

    with manager.session() as session:
        assert session.query(User).filter_by(email="ada@example.com").count() == 1


def test_session_rolls_back_on_error(manager):
    with pytest.raises(RuntimeError):
        with manager.session() as session:
            session.add(User(name="Bob", email="bob@example.com"))
            session.flush()
            raise RuntimeError("boom")

    with manager.session() as session:
        assert session.query(User).count() == 0


def test_health_check(manager):
    result = manager.health_check()
    assert result["healthy"] is True
    assert result["error"] is None


def test_dispose_resets_manager(manager):
    manager.dispose()

    assert manager.health_check()["healthy"] is False
    with pytest.raises(RuntimeError):
        with manager.session():
            pass


def test_uninitialized_manager_refuses_sessions():
    with pytest.raises(RuntimeError):
        with DatabaseManager().session():
            pass
