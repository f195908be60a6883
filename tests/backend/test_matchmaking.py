from teamup.constants import NO_SKILLS_REASON

URL = "/api/v1/matchmaking"


def test_recommendations_ranked(client, seed):
    owner = seed.user("Owner")
    a = seed.user("A")
    b = seed.user("B")
    dev = seed.user("Dev", skills={"React": 4, "Node.js": 2})
    p1 = seed.project(owner, "P1", team_size=5, skills={"React": 3, "Python": 5}, members=(a, b))
    p2 = seed.project(owner, "P2", team_size=2, skills={"React": 3})

    resp = client.get(URL, params={"user_id": dev.id})

    assert resp.status_code == 200
    data = resp.json()
    assert [r["project_id"] for r in data["recommendations"]] == [p2.id, p1.id]
    top, second = data["recommendations"]
    assert top["match_score"] == 110
    assert second["match_score"] == 70
    assert second["matched_skills"] == [
        {"skill": "React", "user_proficiency": 4, "required_level": 3, "match_percentage": 100}
    ]
    assert second["urgency_score"] == 2
    assert data["user_skills"] == {"React": 4, "Node.js": 2}
    assert data["message"] is None


def test_user_without_skills(client, seed):
    user = seed.user("Newcomer")

    resp = client.get(URL, params={"user_id": user.id})

    assert resp.status_code == 200
    assert resp.json() == {"recommendations": [], "user_skills": {}, "message": NO_SKILLS_REASON}


def test_missing_user_id(client):
    resp = client.get(URL)
    assert resp.status_code == 400
    assert resp.json()["detail"] == "User ID is required"


def test_unknown_user(client):
    resp = client.get(URL, params={"user_id": 12345})
    assert resp.status_code == 404


def test_at_most_ten(client, seed):
    owner = seed.user("Owner")
    dev = seed.user("Dev", skills={"Go": 3})
    for i in range(12):
        seed.project(owner, f"P{i}", skills={"Go": 3})

    resp = client.get(URL, params={"user_id": dev.id})
    assert len(resp.json()["recommendations"]) == 10
