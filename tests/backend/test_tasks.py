URL = "/api/v1/tasks"


def _team(seed):
    owner = seed.user("Owner")
    member = seed.user("Member")
    project = seed.project(owner, members=(member,))
    return owner, member, project


def test_create_and_list_board(client, seed):
    owner, member, project = _team(seed)

    resp = client.post(
        URL,
        json={
            "title": "Design schema",
            "project_id": project.id,
            "creator_id": member.id,
            "assignee_id": owner.id,
            "priority": "high",
        },
    )
    assert resp.status_code == 201
    body = resp.json()
    assert body["message"] == "Task created successfully"
    assert body["task"]["status"] == "todo"
    assert body["task"]["assignee"]["name"] == "Owner"

    board = client.get(URL, params={"project_id": project.id}).json()["tasks"]
    assert set(board) == {"todo", "in_progress", "review", "done"}
    assert [t["title"] for t in board["todo"]] == ["Design schema"]


def test_list_requires_project(client):
    resp = client.get(URL)
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Project ID is required"


def test_non_member_cannot_create(client, seed):
    _, _, project = _team(seed)
    outsider = seed.user("Outsider")

    resp = client.post(URL, json={"title": "T", "project_id": project.id, "creator_id": outsider.id})
    assert resp.status_code == 403


def test_unknown_priority_rejected_at_boundary(client, seed):
    owner, _, project = _team(seed)
    resp = client.post(
        URL, json={"title": "T", "project_id": project.id, "creator_id": owner.id, "priority": "asap"}
    )
    assert resp.status_code == 422


def test_only_owner_marks_done(client, seed):
    owner, member, project = _team(seed)
    task_id = client.post(
        URL, json={"title": "T", "project_id": project.id, "creator_id": member.id}
    ).json()["task"]["id"]

    resp = client.put(f"{URL}/update", json={"task_id": task_id, "user_id": member.id, "status": "done"})
    assert resp.status_code == 403

    resp = client.put(f"{URL}/update", json={"task_id": task_id, "user_id": member.id, "status": "review"})
    assert resp.status_code == 200
    assert resp.json()["task"]["status"] == "review"

    resp = client.put(f"{URL}/update", json={"task_id": task_id, "user_id": owner.id, "status": "done"})
    assert resp.status_code == 200
    assert resp.json()["task"]["status"] == "done"


def test_update_assignee_only_when_sent(client, seed):
    owner, member, project = _team(seed)
    task_id = client.post(
        URL,
        json={"title": "T", "project_id": project.id, "creator_id": owner.id, "assignee_id": member.id},
    ).json()["task"]["id"]

    resp = client.put(f"{URL}/update", json={"task_id": task_id, "user_id": owner.id, "status": "in_progress"})
    assert resp.json()["task"]["assignee"]["id"] == member.id

    resp = client.put(f"{URL}/update", json={"task_id": task_id, "user_id": owner.id, "assignee_id": None})
    assert resp.json()["task"]["assignee"] is None
    assert resp.json()["task"]["status"] == "in_progress"


def test_update_unknown_task(client, seed):
    owner, _, _ = _team(seed)
    resp = client.put(f"{URL}/update", json={"task_id": 9999, "user_id": owner.id, "status": "todo"})
    assert resp.status_code == 404
