import pytest

from teamup.repositories import ProjectRepository, UserRepository


def test_count_unknown_filter_key_raises(test_session):
    repo = UserRepository(test_session)

    with pytest.raises(ValueError, match="Unknown filter key"):
        repo.count(typo_key=5)


def test_exists_where_unknown_filter_key_raises(test_session):
    repo = ProjectRepository(test_session)

    with pytest.raises(ValueError, match="Unknown filter key"):
        repo.exists_where(state="open")


def test_count_and_exists(seed, test_session):
    alice = seed.user("Alice")
    seed.user("Bob")
    repo = UserRepository(test_session)

    assert repo.count() == 2
    assert repo.count(name="Bob") == 1
    assert repo.exists(alice.id)
    assert not repo.exists(999)
    assert repo.exists_where(email=alice.email)


def test_delete(seed, test_session):
    user = seed.user("Carol")
    repo = UserRepository(test_session)

    assert repo.delete(user.id) is True
    assert repo.delete(user.id) is False
