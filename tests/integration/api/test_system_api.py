from pathlib import Path


def test_health(client):
    res = client.get("/api/health")

    assert res.status_code == 200
    body = res.json()
    assert body["status"] == "OK"
    assert body["timestamp"].endswith("Z")


def test_server_info(client, app_settings):
    body = client.get("/api/server-info").json()

    assert body["port"] == app_settings.PORT
    assert body["environment"] == "development"
    assert body["uptime"] >= 0
    assert body["corsOrigins"] == ["*"]
    assert body["connectedClients"] == 0
    assert body["networkAccess"]["local"] == f"http://localhost:{app_settings.PORT}"
    assert body["networkAccess"]["network"] == f"http://{body['localIP']}:{app_settings.PORT}"
    assert body["storage"]["directory"] == str(Path(app_settings.FILE_STORAGE_DIR).resolve())
    assert body["storage"]["maxUploadBytes"] == 1024
    assert "hasNetwork" in body["networkStatus"]


def test_server_info_counts_websocket_clients(client):
    with client.websocket_connect("/ws") as ws:
        ws.receive_json()
        assert client.get("/api/server-info").json()["connectedClients"] == 1


def test_network_test(client):
    body = client.get("/api/network-test", headers={"Origin": "http://192.168.1.30:3000"}).json()

    assert body["detectedIP"]
    assert isinstance(body["allInterfaces"], list)
    assert body["requestInfo"]["origin"] == "http://192.168.1.30:3000"


def test_cors_allows_lan_origins(client):
    res = client.get("/api/health", headers={"Origin": "http://192.168.1.30:3000"})
    assert res.headers["access-control-allow-origin"] == "http://192.168.1.30:3000"


def test_storage_directory_is_created_on_startup(client, app_settings):
    assert Path(app_settings.FILE_STORAGE_DIR).is_dir()
