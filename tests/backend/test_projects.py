URL = "/api/v1/projects"


def test_create_project(client, seed):
    owner = seed.user("Owner")

    resp = client.post(
        URL,
        json={
            "title": "TeamUp",
            "description": "Find teammates",
            "team_size": 3,
            "owner_id": owner.id,
            "required_skills": [{"name": "React", "level": 4}, {"name": "SQL"}],
        },
    )

    assert resp.status_code == 201
    data = resp.json()
    assert data["status"] == "open"
    assert data["member_count"] == 1
    assert data["open_seats"] == 2
    assert data["members"][0]["role"] == "owner"
    assert {s["skill"]: s["level"] for s in data["required_skills"]} == {"React": 4, "SQL": 3}


def test_create_project_rejects_zero_team(client, seed):
    owner = seed.user("Owner")
    resp = client.post(
        URL, json={"title": "T", "description": "D", "team_size": 0, "owner_id": owner.id}
    )
    assert resp.status_code == 422


def test_list_projects_filters(client, seed):
    owner = seed.user("Owner")
    seed.project(owner, "Chat App", skills={"React": 3})
    seed.project(owner, "Data Pipeline", skills={"Python": 3})

    resp = client.get(URL, params={"skill": "react"})
    assert [p["title"] for p in resp.json()["projects"]] == ["Chat App"]

    resp = client.get(URL, params={"search": "pipe"})
    assert [p["title"] for p in resp.json()["projects"]] == ["Data Pipeline"]

    assert client.get(URL, params={"status": "archived"}).status_code == 400


def test_project_detail_and_members(client, seed):
    owner = seed.user("Owner")
    member = seed.user("Member")
    project = seed.project(owner, members=(member,))

    detail = client.get(f"{URL}/{project.id}").json()
    assert detail["member_count"] == 2

    members = client.get(f"{URL}/{project.id}/members").json()
    assert [m["name"] for m in members] == ["Owner", "Member"]

    assert client.get(f"{URL}/999").status_code == 404


def test_join_project(client, seed):
    owner = seed.user("Owner")
    dev = seed.user("Dev")
    project = seed.project(owner, team_size=3)

    resp = client.post(f"{URL}/join", json={"project_id": project.id, "user_id": dev.id})

    assert resp.status_code == 200
    body = resp.json()
    assert body["message"] == "Successfully joined project"
    assert body["project"]["member_count"] == 2


def test_join_fills_team_and_closes_recommendations(client, seed):
    owner = seed.user("Owner")
    dev = seed.user("Dev", skills={"Go": 3})
    other = seed.user("Other", skills={"Go": 3})
    project = seed.project(owner, team_size=2, skills={"Go": 3})

    resp = client.post(f"{URL}/join", json={"project_id": project.id, "user_id": dev.id})
    assert resp.json()["project"]["status"] == "in_progress"

    recs = client.get("/api/v1/matchmaking", params={"user_id": other.id}).json()
    assert recs["recommendations"] == []


def test_join_conflicts(client, seed):
    owner = seed.user("Owner")
    dev = seed.user("Dev")
    project = seed.project(owner, team_size=5)
    payload = {"project_id": project.id, "user_id": dev.id}

    assert client.post(f"{URL}/join", json=payload).status_code == 200
    resp = client.post(f"{URL}/join", json=payload)
    assert resp.status_code == 400
    assert resp.json()["detail"] == "User is already a member of this project"


def test_join_unknown_project(client, seed):
    dev = seed.user("Dev")
    resp = client.post(f"{URL}/join", json={"project_id": 999, "user_id": dev.id})
    assert resp.status_code == 404
