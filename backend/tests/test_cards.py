from dataclasses import replace

import pytest

from kanban.core.config import get_settings


def make_list(client, headers, board_name="Cards board", title="Todo", **board_body):
    board = client.post("/api/board", headers=headers, json={"name": board_name, **board_body}).json()
    board_list = client.post(f"/api/board/{board['id']}/lists", headers=headers, json={"title": title}).json()
    return board, board_list


def add_card(client, headers, list_id, **body):
    payload = {"title": "Task"}
    payload.update(body)
    return client.post(f"/api/cards/list/{list_id}", headers=headers, json=payload)


@pytest.fixture
def upload_settings(tmp_path, monkeypatch):
    settings = replace(get_settings(), upload_dir=str(tmp_path), max_upload_bytes=16, max_upload_files=2)
    monkeypatch.setattr("kanban.services.uploads.get_settings", lambda: settings)
    return settings


def test_create_card_defaults_and_order(client, users, auth_headers):
    headers = auth_headers("alice")
    _, board_list = make_list(client, headers)

    first = add_card(client, headers, board_list["id"], assignedTo=users["bob"])
    assert first.status_code == 201
    data = first.json()
    assert data["order"] == 0
    assert data["priority"] == "medium"
    assert data["status"] == "active"
    assert data["description"] == ""
    assert data["assignedTo"]["name"] == "Bob"
    assert data["createdBy"]["name"] == "Alice"

    second = add_card(client, headers, board_list["id"], title="Second", priority="urgent").json()
    assert second["order"] == 1
    assert second["priority"] == "urgent"


def test_create_card_checks(client, auth_headers):
    headers = auth_headers("alice")
    _, board_list = make_list(client, headers)

    missing_title = add_card(client, headers, board_list["id"], title="")
    assert missing_title.status_code == 400
    assert add_card(client, headers, 9999).status_code == 404
    assert add_card(client, auth_headers("bob"), board_list["id"]).status_code == 403


def test_list_cards_sorted_by_order(client, auth_headers):
    headers = auth_headers("alice")
    _, board_list = make_list(client, headers)
    a = add_card(client, headers, board_list["id"], title="A").json()
    add_card(client, headers, board_list["id"], title="B")
    client.put(f"/api/cards/{a['id']}/move", headers=headers, json={"newListId": board_list["id"], "newOrder": 5})

    cards = client.get(f"/api/cards/list/{board_list['id']}", headers=auth_headers("bob")).json()
    assert [card["title"] for card in cards] == ["B", "A"]


def test_update_card_applies_only_present_fields(client, users, auth_headers):
    headers = auth_headers("alice")
    _, board_list = make_list(client, headers)
    card = add_card(
        client,
        headers,
        board_list["id"],
        description="keep me",
        dueDate="2026-11-01T00:00:00Z",
        assignedTo=users["bob"],
    ).json()

    response = client.put(
        f"/api/cards/{card['id']}",
        headers=headers,
        json={"title": "Renamed", "labels": [{"name": "bug", "color": "#f00"}], "assignedTo": None},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["title"] == "Renamed"
    assert data["description"] == "keep me"
    assert data["dueDate"].startswith("2026-11-01")
    assert data["labels"] == [{"name": "bug", "color": "#f00"}]
    assert data["assignedTo"] is None
    assert data["assignedToId"] is None

    cleared = client.put(f"/api/cards/{card['id']}", headers=headers, json={"dueDate": None, "status": "completed"})
    assert cleared.json()["dueDate"] is None
    assert cleared.json()["status"] == "completed"
    assert cleared.json()["title"] == "Renamed"


def test_update_card_requires_edit(client, auth_headers):
    headers = auth_headers("alice")
    _, board_list = make_list(client, headers)
    card = add_card(client, headers, board_list["id"]).json()

    assert client.put(f"/api/cards/{card['id']}", headers=auth_headers("bob"), json={"title": "x"}).status_code == 403
    assert client.put("/api/cards/9999", headers=headers, json={"title": "x"}).status_code == 404


def test_move_card_between_lists_keeps_other_orders(client, auth_headers):
    headers = auth_headers("alice")
    board, source = make_list(client, headers)
    target = client.post(f"/api/board/{board['id']}/lists", headers=headers, json={"title": "Done"}).json()
    cards = [add_card(client, headers, source["id"], title=title).json() for title in ("A", "B", "C")]

    moved = client.put(f"/api/cards/{cards[0]['id']}/move", headers=headers, json={"newListId": target["id"]})
    assert moved.status_code == 200
    assert moved.json()["listId"] == target["id"]
    assert moved.json()["order"] == 0

    in_source = client.get(f"/api/cards/list/{source['id']}", headers=headers).json()
    in_target = client.get(f"/api/cards/list/{target['id']}", headers=headers).json()
    assert [(card["title"], card["order"]) for card in in_source] == [("B", 1), ("C", 2)]
    assert [card["id"] for card in in_target] == [cards[0]["id"]]


def test_move_checks_only_destination_board(client, auth_headers):
    alice, bob = auth_headers("alice"), auth_headers("bob")
    _, alice_list = make_list(client, alice, board_name="Alice", visibility="private")
    _, bob_list = make_list(client, bob, board_name="Bob")
    card = add_card(client, alice, alice_list["id"]).json()

    # Bob cannot edit Alice's board but owns the destination.
    response = client.put(f"/api/cards/{card['id']}/move", headers=bob, json={"newListId": bob_list["id"]})
    assert response.status_code == 200
    assert response.json()["listId"] == bob_list["id"]

    back = client.put(f"/api/cards/{card['id']}/move", headers=bob, json={"newListId": alice_list["id"]})
    assert back.status_code == 403


def test_move_reports_missing_card_and_list(client, auth_headers):
    headers = auth_headers("alice")
    _, board_list = make_list(client, headers)
    card = add_card(client, headers, board_list["id"]).json()

    assert client.put("/api/cards/9999/move", headers=headers, json={"newListId": board_list["id"]}).status_code == 404
    missing = client.put(f"/api/cards/{card['id']}/move", headers=headers, json={"newListId": 9999})
    assert missing.status_code == 404
    assert missing.json()["message"] == "New list not found"


def test_delete_card(client, auth_headers):
    headers = auth_headers("alice")
    _, board_list = make_list(client, headers)
    card = add_card(client, headers, board_list["id"]).json()

    assert client.delete(f"/api/cards/{card['id']}", headers=auth_headers("bob")).status_code == 403
    assert client.delete(f"/api/cards/{card['id']}", headers=headers).status_code == 200
    assert client.get(f"/api/cards/list/{board_list['id']}", headers=headers).json() == []


def test_upload_and_delete_attachment(client, auth_headers, upload_settings, tmp_path):
    headers = auth_headers("alice")
    _, board_list = make_list(client, headers)
    card = add_card(client, headers, board_list["id"]).json()

    uploaded = client.post(
        f"/api/cards/{card['id']}/attachment",
        headers=headers,
        files={"file": ("notes.txt", b"hello", "text/plain")},
    )
    assert uploaded.status_code == 200
    body = uploaded.json()
    attachment = body["attachment"]
    assert body["message"] == "File uploaded successfully"
    assert attachment["originalName"] == "notes.txt"
    assert attachment["size"] == 5
    assert attachment["mimetype"] == "text/plain"
    assert attachment["url"] == f"/uploads/{attachment['filename']}"
    assert attachment["uploadedBy"]["name"] == "Alice"
    assert (tmp_path / attachment["filename"]).read_bytes() == b"hello"
    assert len(body["card"]["attachments"]) == 1

    missing = client.delete(f"/api/cards/{card['id']}/attachment/9999", headers=headers)
    assert missing.status_code == 404
    assert missing.json()["message"] == "Attachment not found"

    deleted = client.delete(f"/api/cards/{card['id']}/attachment/{attachment['id']}", headers=headers)
    assert deleted.status_code == 200
    assert deleted.json()["card"]["attachments"] == []


def test_upload_limits(client, auth_headers, upload_settings, tmp_path):
    headers = auth_headers("alice")
    _, board_list = make_list(client, headers)
    card = add_card(client, headers, board_list["id"]).json()
    url = f"/api/cards/{card['id']}/attachment"

    too_large = client.post(url, headers=headers, files={"file": ("big.bin", b"x" * 17, "application/octet-stream")})
    assert too_large.status_code == 400
    assert too_large.json()["message"].startswith("File too large")

    too_many = client.post(
        url,
        headers=headers,
        files=[("file", (f"f{i}.txt", b"a", "text/plain")) for i in range(3)],
    )
    assert too_many.status_code == 400
    assert too_many.json()["message"] == "Too many files. Maximum 2 files allowed."

    assert list(tmp_path.iterdir()) == []
    cards = client.get(f"/api/cards/list/{board_list['id']}", headers=headers).json()
    assert cards[0]["attachments"] == []


def test_upload_requires_file_and_edit(client, auth_headers, upload_settings):
    headers = auth_headers("alice")
    _, board_list = make_list(client, headers)
    card = add_card(client, headers, board_list["id"]).json()

    no_file = client.post(f"/api/cards/{card['id']}/attachment", headers=headers)
    assert no_file.status_code == 400
    assert no_file.json()["message"] == "No file uploaded"

    forbidden = client.post(
        f"/api/cards/{card['id']}/attachment",
        headers=auth_headers("bob"),
        files={"file": ("notes.txt", b"hello", "text/plain")},
    )
    assert forbidden.status_code == 403
