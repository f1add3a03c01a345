from tests.conftest import make_client


def test_create_and_list_folders(client, alice, bob):
    first = client.post("/api/folders", json={"name": "Docs", "userId": alice["id"]})
    client.post("/api/folders", json={"name": "Docs", "userId": alice["id"]})
    client.post("/api/folders", json={"name": "Music", "userId": bob["id"]})

    assert first.status_code == 201
    assert first.json()["name"] == "Docs"

    folders = client.get(f"/api/folders/{alice['id']}").json()
    assert [f["name"] for f in folders] == ["Docs", "Docs"]
    assert folders[0]["id"] == first.json()["id"]


def test_list_folders_for_unknown_user_is_empty(client):
    assert client.get("/api/folders/999").json() == []


def test_files_derive_type_from_name(client, alice):
    for name in ("report.v2.tar.gz", "README"):
        client.post("/api/files", json={"name": name, "size": 10, "userId": alice["id"], "content": "x"})

    files = {f["name"]: f for f in client.get(f"/api/files/{alice['id']}").json()}
    assert files["report.v2.tar.gz"]["type"] == "gz"
    assert files["README"]["type"] == "file"


def test_create_file_with_folder_metadata(client, alice):
    resp = client.post("/api/files", json={
        "name": "notes.txt",
        "size": "2048",
        "userId": alice["id"],
        "folderId": 42,
        "folderName": "Ghost folder",
        "content": "hello",
    })
    assert resp.status_code == 201

    (f,) = client.get(f"/api/files/{alice['id']}").json()
    assert f == {
        "id": resp.json()["id"],
        "name": "notes.txt",
        "size": 2048,
        "folderId": 42,
        "folderName": "Ghost folder",
        "content": "hello",
        "type": "txt",
    }


def test_update_file_round_trip(client, alice):
    file_id = client.post("/api/files", json={
        "name": "draft.md", "size": 5, "userId": alice["id"], "content": "hello",
    }).json()["id"]

    resp = client.put(f"/api/files/{file_id}", json={"content": "hello world", "size": 11})
    assert resp.json() == {"success": True}

    (f,) = client.get(f"/api/files/{alice['id']}").json()
    assert f["content"] == "hello world"
    assert f["size"] == 11


def test_update_file_ignores_owner(client, alice, bob):
    file_id = client.post("/api/files", json={"name": "a.txt", "size": 1, "userId": alice["id"], "content": "a"}).json()["id"]

    # nothing ties the caller to the file owner
    client.put(f"/api/files/{file_id}", json={"content": "bob was here", "size": 11})

    (f,) = client.get(f"/api/files/{alice['id']}").json()
    assert f["content"] == "bob was here"


def test_create_file_rejects_bad_size(client, alice):
    resp = client.post("/api/files", json={"name": "a.txt", "size": "big", "userId": alice["id"]})
    assert resp.status_code == 400
    assert "size" in resp.json()["error"]


def test_ping(client):
    assert client.get("/ping").json() == {"status": "backend ok"}


def test_unexpected_errors_are_json(settings, engine):
    client = make_client(settings, engine, raise_server_exceptions=False)

    # too large for an SQLite INTEGER
    resp = client.get("/api/files/99999999999999999999999")

    assert resp.status_code == 500
    assert resp.headers["content-type"].startswith("application/json")
    assert resp.json() == {"error": "Internal server error"}
