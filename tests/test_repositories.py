"""
Tests for the skill, project and chat repositories.
"""

from sqlalchemy import inspect

from teamup.constants import PROJECT_STATUS_IN_PROGRESS, PROJECT_STATUS_OPEN
from teamup.repositories import ChatMessageRepository, ProjectRepository, SkillRepository


class TestSkillRepository:
    def test_upsert_creates_with_default_category(self, test_session):
        skill = SkillRepository(test_session).upsert("React")
        assert skill.id is not None
        assert skill.category == "General"

    def test_upsert_reuses_existing(self, test_session):
        repo = SkillRepository(test_session)
        first = repo.upsert("React", "Frontend")
        second = repo.upsert("React")

        assert first.id == second.id
        assert second.category == "Frontend"

    def test_upsert_reassigns_explicit_category(self, test_session):
        repo = SkillRepository(test_session)
        repo.upsert("Docker", "General")
        assert repo.upsert("Docker", "DevOps").category == "DevOps"

    def test_get_user_skills(self, seed, test_session):
        user = seed.user(skills={"React": 4, "Python": 2})
        assert SkillRepository(test_session).get_user_skills(user.id) == {"React": 4, "Python": 2}

    def test_get_user_skills_empty(self, seed, test_session):
        user = seed.user()
        assert SkillRepository(test_session).get_user_skills(user.id) == {}

    def test_user_skill_rows_load_skill(self, seed, test_session):
        user = seed.user(skills={"React": 4, "Python": 2})
        test_session.expunge_all()

        rows = SkillRepository(test_session).list_user_skill_rows(user.id)

        assert all("skill" not in inspect(row).unloaded for row in rows)
        assert [(row.skill.name, row.proficiency) for row in rows] == [("React", 4), ("Python", 2)]

    def test_replace_user_skills(self, seed, test_session):
        user = seed.user(skills={"React": 4, "Python": 2})
        repo = SkillRepository(test_session)

        repo.replace_user_skills(user.id, [("Go", "Backend", 3), ("Python", None, 5), ("Go", None, 1)])
        test_session.commit()

        assert repo.get_user_skills(user.id) == {"Go": 1, "Python": 5}


class TestProjectRepository:
    def test_open_projects_exclude_member_and_closed(self, seed, test_session):
        alice = seed.user("Alice")
        bob = seed.user("Bob")
        joined = seed.project(bob, "Joined", members=(alice,))
        closed = seed.project(bob, "Closed", status=PROJECT_STATUS_IN_PROGRESS)
        candidate = seed.project(bob, "Candidate")

        projects = ProjectRepository(test_session).list_open_excluding_member(alice.id)

        ids = [p.id for p in projects]
        assert candidate.id in ids
        assert joined.id not in ids
        assert closed.id not in ids

    def test_open_projects_newest_first(self, seed, test_session):
        owner = seed.user("Owner")
        older = seed.project(owner, "Older")
        newer = seed.project(owner, "Newer")
        viewer = seed.user("Viewer")

        projects = ProjectRepository(test_session).list_open_excluding_member(viewer.id)
        assert [p.id for p in projects] == [newer.id, older.id]

    def test_list_projects_filters(self, seed, test_session):
        owner = seed.user("Owner")
        seed.project(owner, "Chat App", skills={"React": 3})
        seed.project(owner, "Data Pipeline", skills={"Python": 4})
        seed.project(owner, "Old Thing", status=PROJECT_STATUS_IN_PROGRESS)
        repo = ProjectRepository(test_session)

        assert [p.title for p in repo.list_projects(search="chat")] == ["Chat App"]
        assert [p.title for p in repo.list_projects(skill="python")] == ["Data Pipeline"]
        assert {p.title for p in repo.list_projects(status=PROJECT_STATUS_OPEN)} == {
            "Chat App",
            "Data Pipeline",
        }
        assert len(repo.list_projects(status="all")) == 3

    def test_membership_helpers(self, seed, test_session):
        owner = seed.user("Owner")
        other = seed.user("Other")
        project = seed.project(owner)
        repo = ProjectRepository(test_session)

        assert repo.member_count(project.id) == 1
        assert repo.is_member(project.id, owner.id)
        assert not repo.is_member(project.id, other.id)

        repo.add_member(project.id, other.id)
        assert repo.member_count(project.id) == 2
        assert [m.user_id for m in repo.list_members(project.id)] == [owner.id, other.id]


class TestChatMessageRepository:
    def test_list_recent_keeps_latest_oldest_first(self, seed, test_session):
        owner = seed.user("Owner")
        project = seed.project(owner)
        repo = ChatMessageRepository(test_session)
        for i in range(5):
            repo.create_message(project.id, owner.id, f"message {i}")
        test_session.commit()

        recent = repo.list_recent(project.id, limit=3)
        assert [m.content for m in recent] == ["message 2", "message 3", "message 4"]

    def test_to_dict_includes_author(self, seed, test_session):
        owner = seed.user("Owner")
        project = seed.project(owner)
        message = ChatMessageRepository(test_session).create_message(project.id, owner.id, "hi")

        data = message.to_dict()
        assert data["content"] == "hi"
        assert data["user"] == {"id": owner.id, "name": "Owner", "avatar_url": None}
        assert data["created_at"] is not None
