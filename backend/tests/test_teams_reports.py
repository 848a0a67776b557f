def test_create_and_list_teams(client, users, auth_headers):
    headers = auth_headers("alice")
    created = client.post("/api/teams", headers=headers, json={"name": "Core", "members": [users["bob"], users["carol"]]})
    assert created.status_code == 201
    assert sorted(member["name"] for member in created.json()["members"]) == ["Bob", "Carol"]
    assert created.json()["createdById"] == users["alice"]

    assert [team["name"] for team in client.get("/api/teams", headers=headers).json()] == ["Core"]
    assert client.get("/api/teams", headers=auth_headers("bob")).json() == []


def test_create_team_requires_name(client, auth_headers):
    response = client.post("/api/teams", headers=auth_headers("alice"), json={"members": []})
    assert response.status_code == 400
    assert response.json()["message"] == "Team name is required"


def seed_cards(client, headers, users):
    board = client.post("/api/board", headers=headers, json={"name": "Reports"}).json()
    board_list = client.post(f"/api/board/{board['id']}/lists", headers=headers, json={"title": "Todo"}).json()
    url = f"/api/cards/list/{board_list['id']}"
    done = client.post(url, headers=headers, json={"title": "Done", "assignedTo": users["bob"], "priority": "high"}).json()
    client.put(f"/api/cards/{done['id']}", headers=headers, json={"status": "completed"})
    client.post(url, headers=headers, json={"title": "Open", "assignedTo": users["bob"]})
    client.post(url, headers=headers, json={"title": "Loose"})
    return board


def test_task_status_counts(client, users, auth_headers):
    headers = auth_headers("alice")
    board = seed_cards(client, headers, users)

    report = client.get("/api/reports/task-status", headers=headers).json()
    assert report["total"] == 3
    assert report["byStatus"] == {"active": 2, "archived": 0, "completed": 1}
    assert report["byPriority"]["high"] == 1
    assert report["byPriority"]["medium"] == 2

    scoped = client.get(f"/api/reports/task-status?boardId={board['id']}", headers=auth_headers("bob")).json()
    assert scoped["total"] == 3

    # Bob is on no board, so his unscoped report is empty.
    assert client.get("/api/reports/task-status", headers=auth_headers("bob")).json()["total"] == 0


def test_task_status_respects_board_visibility(client, users, auth_headers):
    headers = auth_headers("alice")
    board = seed_cards(client, headers, users)
    client.put(f"/api/board/{board['id']}", headers=headers, json={"visibility": "private"})

    response = client.get(f"/api/reports/task-status?boardId={board['id']}", headers=auth_headers("bob"))
    assert response.status_code == 403


def test_tasks_per_user(client, users, auth_headers):
    headers = auth_headers("alice")
    seed_cards(client, headers, users)

    rows = client.get("/api/reports/tasks-per-user", headers=headers).json()
    assert rows == [
        {"userId": users["bob"], "name": "Bob", "tasks": 2, "completed": 1, "pending": 1},
        {"userId": None, "name": "Unassigned", "tasks": 1, "completed": 0, "pending": 1},
    ]
