def test_get_profile_returns_data(client, seed):
    owner = seed.user("Owner", skills={"React": 4})
    project = seed.project(owner, "Mine")

    resp = client.get(f"/api/v1/profile/{owner.id}")

    assert resp.status_code == 200
    data = resp.json()
    assert data["user"]["name"] == "Owner"
    assert data["skills"] == [{"name": "React", "category": "General", "proficiency": 4}]
    assert data["projects"] == [
        {"project_id": project.id, "title": "Mine", "status": "open", "role": "owner"}
    ]


def test_update_profile_replaces_skills(client, seed):
    user = seed.user("Dev", skills={"React": 4, "CSS": 2})

    resp = client.put(
        f"/api/v1/profile/{user.id}",
        json={
            "bio": "Backend person",
            "skills": [
                {"name": "Python", "proficiency": 5, "category": "Backend"},
                {"name": "React", "proficiency": 2},
            ],
        },
    )

    assert resp.status_code == 200
    data = resp.json()
    assert data["user"]["bio"] == "Backend person"
    assert {s["name"]: s["proficiency"] for s in data["skills"]} == {"Python": 5, "React": 2}


def test_update_profile_rejects_bad_proficiency(client, seed):
    user = seed.user("Dev")
    resp = client.put(
        f"/api/v1/profile/{user.id}", json={"skills": [{"name": "Go", "proficiency": 9}]}
    )
    assert resp.status_code == 422


def test_profile_unknown_user(client):
    assert client.get("/api/v1/profile/404").status_code == 404
