def test_connect_receives_greeting(client):
    with client.websocket_connect("/ws") as ws:
        greeting = ws.receive_json()

    assert greeting["event"] == "connected"
    data = greeting["data"]
    assert data["message"] == "Connected to file transfer server"
    assert data["serverId"]
    assert data["serverIP"]
    assert data["timestamp"].endswith("Z")


def test_ping_gets_pong(client):
    with client.websocket_connect("/ws") as ws:
        ws.receive_json()
        ws.send_json({"event": "ping", "data": {"timestamp": 1234}})
        pong = ws.receive_json()

    assert pong["event"] == "pong"
    assert pong["data"]["timestamp"] == 1234
    assert isinstance(pong["data"]["serverTime"], int)


def test_unknown_and_malformed_messages_are_ignored(client):
    with client.websocket_connect("/ws") as ws:
        ws.receive_json()
        ws.send_text("not json")
        ws.send_json({"event": "whatever"})
        ws.send_json({"event": "ping"})

        assert ws.receive_json()["event"] == "pong"


def test_passive_client_sees_uploads_and_deletes(client, upload):
    with client.websocket_connect("/ws") as watcher:
        watcher.receive_json()

        stored = upload("a.txt", b"0123456789").json()["filePath"]
        uploaded = watcher.receive_json()

        assert uploaded["event"] == "fileUploaded"
        assert uploaded["data"] == stored
        listed = client.get("/api/files").json()
        assert [f["name"] for f in listed] == [uploaded["data"]["name"]]

        client.delete(f"/api/delete/{stored['name']}")
        deleted = watcher.receive_json()

        assert deleted == {"event": "fileDeleted", "data": {"filename": stored["name"]}}


def test_batch_and_delete_all_events(client):
    with client.websocket_connect("/ws") as watcher:
        watcher.receive_json()

        client.post(
            "/api/upload-multiple",
            files=[("files", ("a.txt", b"a", "text/plain")), ("files", ("b.txt", b"b", "text/plain"))],
        )
        batch = watcher.receive_json()
        assert batch["event"] == "filesUploaded"
        assert [f["originalName"] for f in batch["data"]] == ["a.txt", "b.txt"]

        client.delete("/api/delete-all")
        assert watcher.receive_json() == {"event": "allFilesDeleted", "data": {"deletedCount": 2}}


def test_every_client_gets_the_event(client, upload):
    with client.websocket_connect("/ws") as first, client.websocket_connect("/ws") as second:
        first.receive_json()
        second.receive_json()

        upload("a.txt", b"x")

        assert first.receive_json()["event"] == "fileUploaded"
        assert second.receive_json()["event"] == "fileUploaded"


def test_failed_upload_sends_no_event(client, upload):
    with client.websocket_connect("/ws") as watcher:
        watcher.receive_json()

        assert upload("big.bin", b"x" * 2048).status_code == 413
        watcher.send_json({"event": "ping", "data": {"timestamp": 1}})

        # the pong is the next frame, nothing was queued before it
        assert watcher.receive_json()["event"] == "pong"


def test_binary_frames_are_ignored(client):
    with client.websocket_connect("/ws") as ws:
        ws.receive_json()
        ws.send_bytes(b"\x00\x01")
        ws.send_json({"event": "ping", "data": {"timestamp": 7}})

        pong = ws.receive_json()

    assert pong["event"] == "pong"
    assert pong["data"]["timestamp"] == 7


def test_client_disconnect_leaves_the_registry(client):
    with client.websocket_connect("/ws") as ws:
        ws.receive_json()
        assert client.get("/api/server-info").json()["connectedClients"] == 1

    assert client.get("/api/server-info").json()["connectedClients"] == 0
