URL = "/api/v1/chat"


def test_member_posts_and_reads(client, seed):
    owner = seed.user("Owner")
    project = seed.project(owner)

    resp = client.post(URL, json={"project_id": project.id, "user_id": owner.id, "content": "hello"})
    assert resp.status_code == 201
    message = resp.json()
    assert message["content"] == "hello"
    assert message["user"]["name"] == "Owner"

    history = client.get(URL, params={"project_id": project.id}).json()["messages"]
    assert [m["id"] for m in history] == [message["id"]]


def test_history_oldest_first_with_limit(client, seed):
    owner = seed.user("Owner")
    project = seed.project(owner)
    for i in range(5):
        client.post(URL, json={"project_id": project.id, "user_id": owner.id, "content": f"m{i}"})

    history = client.get(URL, params={"project_id": project.id, "limit": 2}).json()["messages"]
    assert [m["content"] for m in history] == ["m3", "m4"]


def test_non_member_forbidden(client, seed):
    owner = seed.user("Owner")
    stranger = seed.user("Stranger")
    project = seed.project(owner)

    resp = client.post(URL, json={"project_id": project.id, "user_id": stranger.id, "content": "hi"})
    assert resp.status_code == 403


def test_history_requires_project(client):
    resp = client.get(URL)
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Project ID is required"


def test_post_reaches_socket_subscribers(client, seed):
    owner = seed.user("Owner")
    project = seed.project(owner)

    with client.websocket_connect("/ws") as ws:
        ws.send_json({"type": "join_project", "projectId": project.id})
        assert ws.receive_json() == {"type": "joined", "projectId": project.id}

        resp = client.post(URL, json={"project_id": project.id, "user_id": owner.id, "content": "ping"})
        assert resp.status_code == 201

        frame = ws.receive_json()
        assert frame["type"] == "new_message"
        assert frame["message"]["id"] == resp.json()["id"]
