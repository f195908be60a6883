"""
Tests for project matchmaking scores.
"""

import pytest

from teamup.constants import NO_SKILLS_REASON
from teamup.matching import (
    CandidateProject,
    RequiredSkill,
    calculate_skill_score,
    calculate_urgency_bonus,
    rank_recommendations,
    recommend,
    round_half_up,
    score_project,
    skill_contribution,
)


def make_project(project_id=1, team_size=4, members=1, **levels) -> CandidateProject:
    return CandidateProject(
        project_id=project_id,
        title=f"Project {project_id}",
        team_size=team_size,
        member_count=members,
        required_skills=tuple(RequiredSkill(name, level) for name, level in levels.items()),
    )


class TestSkillContribution:
    def test_meets_requirement(self):
        assert skill_contribution(3, 3) == 100.0

    def test_exceeding_gives_no_extra_credit(self):
        assert skill_contribution(5, 2) == 100.0

    def test_partial(self):
        assert skill_contribution(2, 4) == 50.0

    def test_non_positive_level_rejected(self):
        with pytest.raises(ValueError):
            skill_contribution(3, 0)


class TestUrgencyBonus:
    def test_ten_points_per_open_seat(self):
        assert calculate_urgency_bonus(5, 3) == 20.0

    def test_full_team_gets_nothing(self):
        assert calculate_urgency_bonus(4, 4) == 0.0

    def test_over_capacity_clamped_to_zero(self):
        assert calculate_urgency_bonus(2, 5) == 0.0

    def test_not_capped(self):
        assert calculate_urgency_bonus(20, 1) == 190.0


class TestCalculateSkillScore:
    def test_missing_skills_count_as_zero(self):
        project = make_project(React=3, Python=5)
        raw, matched = calculate_skill_score({"React": 4, "Node.js": 2}, project)

        assert raw == 50.0
        assert [m.skill for m in matched] == ["React"]
        assert matched[0].match_percentage == 100

    def test_no_required_skills(self):
        raw, matched = calculate_skill_score({"React": 4}, make_project())
        assert raw == 0.0
        assert matched == []

    def test_names_match_exactly(self):
        raw, _ = calculate_skill_score({"react": 5}, make_project(React=3))
        assert raw == 0.0


class TestScoreProject:
    def test_worked_example(self):
        """React 4 / Node 2 against React 3 + Python 5, team 5 with 3 members."""
        project = make_project(team_size=5, members=3, React=3, Python=5)
        rec = score_project({"React": 4, "Node.js": 2}, project)

        assert rec.raw_skill_score == 50.0
        assert rec.urgency_bonus == 20.0
        assert rec.match_score == 70
        assert rec.urgency_score == 2

    def test_zero_requirements_scores_urgency_only(self):
        rec = score_project({"Go": 3}, make_project(team_size=4, members=1))
        assert rec.match_score == 30
        assert rec.matched_skills == []

    def test_half_rounds_up_for_display(self):
        project = make_project(team_size=1, members=1, A=4, B=4)
        rec = score_project({"A": 1}, project)

        assert rec.score == 12.5
        assert rec.match_score == 13

    def test_negative_urgency_score_reported(self):
        rec = score_project({"A": 1}, make_project(team_size=2, members=3, A=1))
        assert rec.urgency_score == -1
        assert rec.urgency_bonus == 0.0


class TestRanking:
    def test_sorted_by_unrounded_score(self):
        low = score_project({"A": 1}, make_project(1, team_size=1, members=1, A=4, B=4, C=4))
        high = score_project({"A": 1}, make_project(2, team_size=1, members=1, A=4, B=4))
        ranked = rank_recommendations([low, high])
        assert [r.project.project_id for r in ranked] == [2, 1]

    def test_equal_scores_keep_retrieval_order(self):
        candidates = [make_project(i, team_size=3, members=1, A=2) for i in (9, 4, 7)]
        result = recommend({"A": 2}, candidates)
        assert [r.project.project_id for r in result.recommendations] == [9, 4, 7]

    def test_truncated_to_ten(self):
        candidates = [make_project(i, team_size=i + 1, members=1) for i in range(1, 16)]
        result = recommend({"A": 1}, candidates)

        assert len(result.recommendations) == 10
        assert result.recommendations[0].project.project_id == 15

    def test_fewer_than_ten_all_returned(self):
        result = recommend({"A": 1}, [make_project(1), make_project(2)])
        assert len(result.recommendations) == 2


class TestRecommend:
    def test_no_skills_result(self):
        result = recommend({}, [make_project(1, A=1)])

        assert result.recommendations == []
        assert result.reason == NO_SKILLS_REASON
        assert not result.has_skills

    def test_no_candidates_is_not_an_error(self):
        result = recommend({"A": 3}, [])

        assert result.recommendations == []
        assert result.reason is None
        assert result.user_skills == {"A": 3}

    def test_scores_are_recomputed_on_each_call(self):
        project = make_project(1, team_size=5, members=1, A=5)
        first = recommend({"A": 5}, [project]).recommendations[0].match_score
        fuller = make_project(1, team_size=5, members=4, A=5)
        second = recommend({"A": 5}, [fuller]).recommendations[0].match_score
        assert (first, second) == (140, 110)


@pytest.mark.parametrize(
    ("value", "expected"),
    [(62.5, 63), (62.4999, 62), (0.5, 1), (70.0, 70)],
)
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected
