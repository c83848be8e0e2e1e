def _activity(client):
    return client.get("/api/projects/activity/recent").json()


def test_projects_require_auth(client):
    assert client.get("/api/projects").status_code == 401
    assert client.post("/api/projects", json={"title": "x"}).status_code == 401


def test_create_applies_defaults(admin_client):
    r = admin_client.post("/api/projects", json={"title": "Paint fence", "priority": "high"})
    assert r.status_code == 201
    p = r.json()
    assert p["title"] == "Paint fence"
    assert p["priority"] == "high"
    assert p["status"] == "not_started"
    assert p["estimatedBudget"] == 0
    assert p["spentBudget"] == 0
    assert p["description"] == ""
    assert p["spaceId"] is None
    assert p["tags"] == [] and p["photos"] == [] and p["comments"] == []
    assert p["creatorName"] == "Alex Admin"
    assert p["creatorColor"] == "#C2603A"

    log = _activity(admin_client)
    assert len(log) == 1
    assert log[0]["action"] == "created"
    assert log[0]["details"] == 'Created project "Paint fence"'
    assert log[0]["projectTitle"] == "Paint fence"
    assert log[0]["userName"] == "Alex Admin"


def test_create_with_everything(admin_client, member):
    r = admin_client.post(
        "/api/projects",
        json={
            "title": "Bathroom refresh",
            "description": "New vanity and mirror",
            "spaceId": "sp_bathroom",
            "priority": "urgent",
            "status": "planning",
            "assignedTo": member["id"],
            "estimatedBudget": 1250.5,
            "timeEstimate": "weekend",
            "dueDate": "2026-12-01",
            "tags": ["plumbing", "paint"],
        },
    )
    assert r.status_code == 201
    p = r.json()
    assert p["spaceName"] == "Bathroom"
    assert p["spaceIcon"] == "bath"
    assert p["assigneeName"] == "Sam Member"
    assert p["assigneeColor"] == "#7D8B55"
    assert p["estimatedBudget"] == 1250.5
    assert p["timeEstimate"] == "weekend"
    assert p["dueDate"] == "2026-12-01"
    assert sorted(p["tags"]) == ["paint", "plumbing"]


def test_create_accepts_snake_case_keys(admin_client):
    r = admin_client.post("/api/projects", json={"title": "Shed", "space_id": "sp_outdoor"})
    assert r.json()["spaceId"] == "sp_outdoor"


def test_create_validation(admin_client):
    bad = [
        {},
        {"title": ""},
        {"title": "X", "priority": "whenever"},
        {"title": "X", "status": "done"},
        {"title": "X", "estimatedBudget": -5},
        {"title": "X", "spaceId": "no-such-space"},
        {"title": "X", "assignedTo": "no-such-user"},
    ]
    for payload in bad:
        r = admin_client.post("/api/projects", json=payload)
        assert r.status_code == 400, payload
        assert "error" in r.json()
    assert admin_client.get("/api/projects").json() == []


def test_get_unknown_project(admin_client):
    r = admin_client.get("/api/projects/nope")
    assert r.status_code == 404
    assert r.json() == {"error": "Project not found"}


def test_status_update_logs_once_and_keeps_other_fields(admin_client):
    p = admin_client.post("/api/projects", json={"title": "Paint fence", "priority": "high"}).json()
    before = len(_activity(admin_client))

    r = admin_client.put(f"/api/projects/{p['id']}", json={"status": "complete"})
    assert r.status_code == 200
    updated = r.json()
    assert updated["status"] == "complete"
    assert updated["title"] == "Paint fence"
    assert updated["priority"] == "high"
    assert updated["updatedAt"] != p["updatedAt"]

    log = _activity(admin_client)
    assert len(log) == before + 1
    assert log[0]["action"] == "updated"
    assert "complete" in log[0]["details"]


def test_update_without_tracked_changes_does_not_log(admin_client, project):
    before = len(_activity(admin_client))
    admin_client.put(f"/api/projects/{project['id']}", json={"description": "Subway tile", "status": "not_started"})
    assert len(_activity(admin_client)) == before


def test_update_describes_all_changes(admin_client, project, member):
    admin_client.put(
        f"/api/projects/{project['id']}",
        json={"status": "in_progress", "priority": "urgent", "assignedTo": member["id"]},
    )
    details = _activity(admin_client)[0]["details"]
    assert details == 'Changed status to "in_progress", priority to "urgent", assignment'


def test_update_unknown_project(admin_client):
    assert admin_client.put("/api/projects/nope", json={"title": "X"}).status_code == 404


def test_omitted_and_null_fields_keep_values(admin_client):
    p = admin_client.post(
        "/api/projects",
        json={"title": "Deck", "description": "Stain", "estimatedBudget": 300, "spaceId": "sp_outdoor"},
    ).json()
    r = admin_client.put(
        f"/api/projects/{p['id']}",
        json={"title": None, "description": None, "estimatedBudget": None, "priority": ""},
    ).json()
    assert r["title"] == "Deck"
    assert r["description"] == "Stain"
    assert r["estimatedBudget"] == 300
    assert r["priority"] == "medium"
    assert r["spaceId"] == "sp_outdoor"


def test_empty_and_zero_values_are_applied_where_meaningful(admin_client):
    p = admin_client.post(
        "/api/projects", json={"title": "Deck", "description": "Stain", "estimatedBudget": 300}
    ).json()
    r = admin_client.put(f"/api/projects/{p['id']}", json={"description": "", "estimatedBudget": 0}).json()
    assert r["description"] == ""
    assert r["estimatedBudget"] == 0


def test_nullable_references_clear_on_null(admin_client, member):
    p = admin_client.post(
        "/api/projects",
        json={"title": "Fence", "spaceId": "sp_outdoor", "assignedTo": member["id"], "dueDate": "2026-11-01"},
    ).json()

    kept = admin_client.put(f"/api/projects/{p['id']}", json={"title": "Fence v2"}).json()
    assert kept["spaceId"] == "sp_outdoor"
    assert kept["assignedTo"] == member["id"]
    assert kept["dueDate"] == "2026-11-01"

    cleared = admin_client.put(
        f"/api/projects/{p['id']}", json={"spaceId": None, "assignedTo": None, "dueDate": None}
    ).json()
    assert cleared["spaceId"] is None
    assert cleared["assignedTo"] is None
    assert cleared["dueDate"] is None
    assert cleared["title"] == "Fence v2"


def test_tags_are_replaced_not_merged(admin_client):
    p = admin_client.post("/api/projects", json={"title": "Garage shelves", "tags": ["wood", "diy"]}).json()
    admin_client.put(f"/api/projects/{p['id']}", json={"tags": ["metal"]})
    assert admin_client.get(f"/api/projects/{p['id']}").json()["tags"] == ["metal"]

    admin_client.put(f"/api/projects/{p['id']}", json={"title": "Garage racks"})
    assert admin_client.get(f"/api/projects/{p['id']}").json()["tags"] == ["metal"]

    admin_client.put(f"/api/projects/{p['id']}", json={"tags": []})
    assert admin_client.get(f"/api/projects/{p['id']}").json()["tags"] == []


def test_status_filter_is_exact(admin_client):
    for title, status in [("A", "complete"), ("B", "almost_done"), ("C", "complete"), ("D", "planning")]:
        admin_client.post("/api/projects", json={"title": title, "status": status})
    rows = admin_client.get("/api/projects", params={"status": "complete"}).json()
    assert sorted(r["title"] for r in rows) == ["A", "C"]
    assert all(r["status"] == "complete" for r in rows)


def test_filters_intersect(admin_client, member):
    admin_client.post("/api/projects", json={"title": "A", "status": "complete", "priority": "high"})
    admin_client.post("/api/projects", json={"title": "B", "status": "complete", "priority": "low"})
    admin_client.post("/api/projects", json={"title": "C", "status": "planning", "priority": "high"})
    admin_client.post(
        "/api/projects",
        json={"title": "D", "status": "planning", "priority": "high", "spaceId": "sp_garage", "assignedTo": member["id"]},
    )

    rows = admin_client.get("/api/projects", params={"status": "complete", "priority": "high"}).json()
    assert [r["title"] for r in rows] == ["A"]

    rows = admin_client.get("/api/projects", params={"space_id": "sp_garage", "assigned_to": member["id"]}).json()
    assert [r["title"] for r in rows] == ["D"]


def test_invalid_filter_value(admin_client):
    assert admin_client.get("/api/projects", params={"status": "bogus"}).status_code == 400


def test_list_is_ordered_by_recent_update(admin_client):
    first = admin_client.post("/api/projects", json={"title": "First"}).json()
    admin_client.post("/api/projects", json={"title": "Second"})
    assert [r["title"] for r in admin_client.get("/api/projects").json()] == ["Second", "First"]

    admin_client.post(f"/api/projects/{first['id']}/comments", json={"text": "bump"})
    assert [r["title"] for r in admin_client.get("/api/projects").json()] == ["First", "Second"]


def test_list_rows_are_enriched(admin_client, project):
    admin_client.post(f"/api/projects/{project['id']}/design-board/note", json={"content": "Herringbone?"})
    row = admin_client.get("/api/projects").json()[0]
    assert row["spaceName"] == "Kitchen"
    assert row["creatorName"] == "Alex Admin"
    assert row["photoCount"] == 0
    assert row["boardItemCount"] == 1
    assert "tags" not in row


def test_comments_are_chronological(admin_client, member_client, project):
    admin_client.post(f"/api/projects/{project['id']}/comments", json={"text": "Ordered tiles"})
    r = member_client.post(f"/api/projects/{project['id']}/comments", json={"text": "Grout is blue?"})
    assert r.status_code == 201
    assert r.json()["userName"] == "Sam Member"
    assert r.json()["text"] == "Grout is blue?"

    comments = admin_client.get(f"/api/projects/{project['id']}").json()["comments"]
    assert [c["text"] for c in comments] == ["Ordered tiles", "Grout is blue?"]
    assert comments[1]["avatarColor"] == "#7D8B55"


def test_comment_bumps_updated_at(admin_client, project):
    admin_client.post(f"/api/projects/{project['id']}/comments", json={"text": "hi"})
    assert admin_client.get(f"/api/projects/{project['id']}").json()["updatedAt"] != project["updatedAt"]


def test_comment_validation(admin_client, project):
    assert admin_client.post(f"/api/projects/{project['id']}/comments", json={"text": ""}).status_code == 400
    assert admin_client.post(f"/api/projects/{project['id']}/comments", json={}).status_code == 400
    assert admin_client.post("/api/projects/nope/comments", json={"text": "hi"}).status_code == 404


def test_delete_project_cascades(admin_client, project):
    pid = project["id"]
    admin_client.put(f"/api/projects/{pid}", json={"tags": ["tile"], "status": "planning"})
    admin_client.post(f"/api/projects/{pid}/comments", json={"text": "hi"})
    admin_client.post(f"/api/projects/{pid}/design-board/link", json={"url": "https://example.com"})

    assert admin_client.delete(f"/api/projects/{pid}").json() == {"ok": True}
    assert admin_client.get(f"/api/projects/{pid}").status_code == 404
    assert admin_client.get(f"/api/projects/{pid}/design-board").status_code == 404
    assert all(a["projectId"] != pid for a in _activity(admin_client))
    assert admin_client.delete(f"/api/projects/{pid}").status_code == 404


def test_recent_activity_is_capped_and_newest_first(admin_client):
    for i in range(55):
        admin_client.post("/api/projects", json={"title": f"P{i}"})
    log = _activity(admin_client)
    assert len(log) == 50
    assert log[0]["projectTitle"] == "P54"
    assert log[-1]["projectTitle"] == "P5"
