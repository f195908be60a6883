import json


def test_join_and_send_over_socket(client, seed):
    owner = seed.user("Owner")
    project = seed.project(owner)

    with client.websocket_connect("/ws") as ws:
        ws.send_json({"type": "join_project", "projectId": project.id})
        assert ws.receive_json()["type"] == "joined"

        ws.send_json(
            {"type": "send_message", "projectId": project.id, "userId": owner.id, "content": "hi"}
        )
        frame = ws.receive_json()

    assert frame["type"] == "new_message"
    assert frame["message"]["content"] == "hi"

    history = client.get("/api/v1/chat", params={"project_id": project.id}).json()["messages"]
    assert [m["content"] for m in history] == ["hi"]


def test_messages_stay_in_their_room(client, seed):
    owner = seed.user("Owner")
    p1 = seed.project(owner, "P1")
    p2 = seed.project(owner, "P2")

    with client.websocket_connect("/ws") as ws1, client.websocket_connect("/ws") as ws2:
        ws1.send_json({"type": "join_project", "projectId": p1.id})
        ws1.receive_json()
        ws2.send_json({"type": "join_project", "projectId": p2.id})
        ws2.receive_json()

        client.post("/api/v1/chat", json={"project_id": p2.id, "user_id": owner.id, "content": "p2 only"})
        client.post("/api/v1/chat", json={"project_id": p1.id, "user_id": owner.id, "content": "p1 only"})

        assert ws1.receive_json()["message"]["content"] == "p1 only"
        assert ws2.receive_json()["message"]["content"] == "p2 only"


def test_non_member_send_gets_error_frame(client, seed):
    owner = seed.user("Owner")
    stranger = seed.user("Stranger")
    project = seed.project(owner)

    with client.websocket_connect("/ws") as ws:
        ws.send_json(
            {"type": "send_message", "projectId": project.id, "userId": stranger.id, "content": "hi"}
        )
        frame = ws.receive_json()

    assert frame == {"type": "error", "detail": "User is not a member of this project"}


def test_malformed_frame_keeps_socket_open(client):
    with client.websocket_connect("/ws") as ws:
        ws.send_text("{broken")
        assert ws.receive_json()["type"] == "error"

        ws.send_json({"type": "join_project", "projectId": 1})
        assert ws.receive_json() == {"type": "joined", "projectId": 1}


def test_binary_frames_are_accepted(client, seed):
    owner = seed.user("Owner")
    project = seed.project(owner)

    with client.websocket_connect("/ws") as ws:
        ws.send_bytes(json.dumps({"type": "join_project", "projectId": project.id}).encode())
        assert ws.receive_json() == {"type": "joined", "projectId": project.id}

        ws.send_bytes(b"\xff\xfe not json")
        assert ws.receive_json()["type"] == "error"

        ws.send_json({"type": "join_project", "projectId": project.id})
        assert ws.receive_json() == {"type": "joined", "projectId": project.id}
