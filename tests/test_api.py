# tests/test_api.py

from __future__ import annotations

from datetime import timedelta

from fastapi.testclient import TestClient

from .factories import TODAY


def quick_add(client: TestClient, title: str, **body) -> list[dict]:
    response = client.post("/api/tasks/quick", json={"title": title, **body})
    assert response.status_code == 200, response.text
    return response.json()


def test_health(client: TestClient) -> None:
    response = client.get("/api/health/")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_quick_add_returns_camel_case_list(client: TestClient) -> None:
    tasks = quick_add(client, "Buy milk")

    assert len(tasks) == 1
    task = tasks[0]
    assert task["title"] == "Buy milk"
    assert task["priority"] == "medium"
    assert task["recurrence"] == "none"
    assert task["completedAt"] is None
    assert task["projectId"] is None
    assert "dueDate" in task and "createdAt" in task


def test_create_and_list(client: TestClient) -> None:
    response = client.post("/api/tasks", json={
        "title": "Write report",
        "priority": "high",
        "dueDate": "",
        "recurrence": "weekly",
    })
    assert response.status_code == 200, response.text

    tasks = client.get("/api/tasks").json()
    assert [t["title"] for t in tasks] == ["Write report"]
    assert tasks[0]["dueDate"] == ""


def test_create_rejects_blank_title(client: TestClient) -> None:
    response = client.post("/api/tasks", json={"title": "  "})
    assert response.status_code == 422


def test_toggle_sets_and_clears_completed_at(client: TestClient) -> None:
    task_id = quick_add(client, "x")[0]["id"]

    tasks = client.post(f"/api/tasks/{task_id}/toggle").json()
    assert tasks[0]["status"] == "done"
    assert tasks[0]["completedAt"] is not None

    stats = client.get("/api/stats").json()
    assert sum(s["count"] for s in stats) == 1

    tasks = client.post(f"/api/tasks/{task_id}/status", json={"status": "todo"}).json()
    assert tasks[0]["completedAt"] is None


def test_replace_task(client: TestClient) -> None:
    task = quick_add(client, "x")[0]
    task["title"] = "renamed"

    response = client.put("/api/tasks", json=task)
    assert response.status_code == 200
    assert response.json()[0]["title"] == "renamed"


def test_replace_unknown_task_is_404(client: TestClient) -> None:
    task = quick_add(client, "x")[0]
    task["id"] = "0000-0000-0000-0000"

    assert client.put("/api/tasks", json=task).status_code == 404


def test_delete_and_restore(client: TestClient) -> None:
    first = quick_add(client, "a")[0]["id"]
    second = quick_add(client, "b")[-1]["id"]

    assert client.delete("/api/tasks").status_code == 400
    assert client.delete("/api/tasks", params={"id": "nope"}).status_code == 404

    client.delete("/api/tasks", params={"id": first})
    client.delete("/api/tasks", params={"id": second})
    tasks = client.post("/api/tasks/restore").json()

    assert [t["id"] for t in tasks] == [second]


def test_bulk_and_reorder(client: TestClient) -> None:
    quick_add(client, "a")
    tasks = quick_add(client, "b")
    ids = [t["id"] for t in tasks]

    response = client.post("/api/tasks/bulk", json={"ids": ids, "action": "set_priority", "priority": "low"})
    assert [t["priority"] for t in response.json()] == ["low", "low"]

    response = client.post("/api/tasks/reorder", json={"ids": list(reversed(ids))})
    assert {t["id"]: t["order"] for t in response.json()} == {ids[1]: 0, ids[0]: 1}

    response = client.post("/api/tasks/bulk", json={"ids": ["nope"], "action": "delete"})
    assert response.status_code == 404


def test_subtask_routes(client: TestClient) -> None:
    task_id = quick_add(client, "parent")[0]["id"]

    tasks = client.post(f"/api/tasks/{task_id}/subtasks", json={"title": "child"}).json()
    subtask_id = tasks[0]["subtasks"][0]["id"]

    tasks = client.post(f"/api/tasks/{task_id}/subtasks/{subtask_id}/toggle").json()
    assert tasks[0]["subtasks"][0]["completed"] is True

    tasks = client.put(
        f"/api/tasks/{task_id}/subtasks/{subtask_id}/priority", json={"priority": "high"}
    ).json()
    assert tasks[0]["subtasks"][0]["priority"] == "high"

    tasks = client.delete(f"/api/tasks/{task_id}/subtasks/{subtask_id}").json()
    assert tasks[0]["subtasks"] == []


def test_project_routes(client: TestClient) -> None:
    projects = client.post("/api/projects", json={"name": "Home"}).json()
    project_id = projects[0]["id"]
    task_id = quick_add(client, "x", projectId=project_id)[0]["id"]

    response = client.delete("/api/projects", params={"id": project_id})
    assert response.status_code == 200
    assert response.json() == []

    task = next(t for t in client.get("/api/tasks").json() if t["id"] == task_id)
    assert task["projectId"] is None


def test_stats_actions_and_summary(client: TestClient) -> None:
    client.post("/api/stats", json={"action": "record"})
    client.post("/api/stats", json={"action": "record"})
    stats = client.post("/api/stats", json={"action": "decrement"}).json()
    assert [s["count"] for s in stats] == [1]

    summary = client.get("/api/stats/summary").json()
    # no task is actually done today, so the live count wins
    assert summary["today"] == 0
    assert len(summary["lastDays"]) == 7


def test_views(client: TestClient) -> None:
    tomorrow = (TODAY + timedelta(days=1)).isoformat()
    client.post("/api/tasks", json={"title": "due", "dueDate": TODAY.isoformat(), "priority": "high"})
    client.post("/api/tasks", json={"title": "later", "dueDate": tomorrow})
    params = {"today": TODAY.isoformat()}

    result = client.get("/api/views/today", params=params).json()
    assert [t["title"] for t in result["tasks"]] == ["due"]
    assert [g["key"] for g in result["groups"]] == ["high"]

    result = client.get("/api/views/inbox", params={**params, "search": "LAT"}).json()
    assert [t["title"] for t in result["tasks"]] == ["later"]

    counts = client.get("/api/views/counts", params=params).json()
    assert counts["nav"]["today"] == 1 and counts["nav"]["tomorrow"] == 1

    week = client.get("/api/views/week", params=params).json()
    assert len(week) == 7

    month = client.get("/api/views/month", params={**params, "year": 2024, "month": 2}).json()
    assert len(month) % 7 == 0

    assert client.get("/api/views/someday").status_code == 422
    assert client.get("/api/views/month", params={"year": 2024}).status_code == 400


def test_calendar_views_apply_filters(client: TestClient) -> None:
    client.post("/api/tasks", json={"title": "alpha", "dueDate": TODAY.isoformat(), "priority": "high"})
    client.post("/api/tasks", json={"title": "beta", "dueDate": TODAY.isoformat(), "priority": "low"})
    params = {"today": TODAY.isoformat()}

    def titles_on_today(cells: list[dict]) -> list[str]:
        cell = next(c for c in cells if c["date"] == TODAY.isoformat())
        return [t["title"] for t in cell["tasks"]]

    week = client.get("/api/views/week", params=params).json()
    assert sorted(titles_on_today(week)) == ["alpha", "beta"]

    week = client.get("/api/views/week", params={**params, "priority": "high"}).json()
    assert titles_on_today(week) == ["alpha"]

    month = client.get("/api/views/month", params={**params, "search": "alp"}).json()
    assert titles_on_today(month) == ["alpha"]

    month = client.get("/api/views/month", params={**params, "dateFilter": "overdue"}).json()
    assert all(c["tasks"] == [] for c in month)


def test_today_view_marks_subtasks_in_view(client: TestClient) -> None:
    response = client.post("/api/tasks", json={
        "title": "parent",
        "dueDate": TODAY.isoformat(),
        "subtasks": [
            {"id": "s1", "title": "dated", "dueDate": TODAY.isoformat()},
            {"id": "s2", "title": "undated"},
        ],
    })
    task_id = response.json()[0]["id"]

    result = client.get("/api/views/today", params={"today": TODAY.isoformat()}).json()
    assert result["subtasksInView"] == {task_id: ["s1"]}


def test_labels(client: TestClient) -> None:
    labels = client.get("/api/meta/labels").json()

    assert labels["priorities"] == {"low": "Low", "medium": "Medium", "high": "High"}
    assert labels["statuses"]["in_progress"] == "In progress"
    assert labels["recurrences"]["daily"] == "Every day"
    assert labels["projectColors"][0] == "#6366f1"
    assert labels["projectIcons"]


def test_blank_names_are_rejected(client: TestClient) -> None:
    project = client.post("/api/projects", json={"name": "Home"}).json()[0]
    response = client.put("/api/projects", json={**project, "name": "   "})
    assert response.status_code == 422
    assert client.get("/api/projects").json()[0]["name"] == "Home"

    response = client.post("/api/tasks", json={"title": "x", "subtasks": [{"title": "  "}]})
    assert response.status_code == 422
    assert client.get("/api/tasks").json() == []
