import pytest

pytestmark = pytest.mark.integration


def _create_category(client, headers, title="Benefits", target="EMPLOYEE"):
    r = client.post("/categories", json={"title": title, "target": target}, headers=headers)
    assert r.status_code == 201, r.text
    return r.json()["category"]


def _add_item(client, headers, category_id, title="Leave", description="Annual leave"):
    r = client.post(
        f"/categories/{category_id}/items",
        json={"title": title, "description": description},
        headers=headers,
    )
    assert r.status_code == 201, r.text
    return r.json()["item"]


def test_create_category(client, auth_headers):
    r = client.post("/categories", json={"title": "  Benefits ", "target": "EMPLOYEE"}, headers=auth_headers)
    assert r.status_code == 201
    body = r.json()
    assert body["success"] is True
    assert body["message"]
    category = body["category"]
    assert category["title"] == "Benefits"
    assert category["target"] == "EMPLOYEE"
    assert category["entries"] == []
    assert {"id", "created_at", "updated_at"} <= set(category)


def test_writes_require_token(client):
    assert client.post("/categories", json={"title": "x", "target": "EMPLOYEE"}).status_code == 401
    assert client.put("/categories/1", json={"title": "x"}).status_code == 401
    assert client.delete("/categories/1").status_code == 401
    assert client.post("/categories/1/items", json={"title": "x", "description": "y"}).status_code == 401


def test_create_rejects_invalid_target(client, auth_headers):
    r = client.post("/categories", json={"title": "x", "target": "ALUMNI"}, headers=auth_headers)
    assert r.status_code == 400
    assert r.json()["code"] == "INVALID_TARGET"
    assert "EMPLOYEE or STUDENT" in r.json()["message"]


def test_create_requires_fields(client, auth_headers):
    r = client.post("/categories", json={"title": "x"}, headers=auth_headers)
    assert r.status_code == 400
    assert r.json()["code"] == "MISSING_FIELDS"


def test_list_with_filter(client, auth_headers):
    _create_category(client, auth_headers, "A", "EMPLOYEE")
    _create_category(client, auth_headers, "B", "STUDENT")
    r = client.get("/categories", params={"target": "STUDENT"})
    assert r.status_code == 200
    body = r.json()
    assert [c["title"] for c in body["categories"]] == ["B"]
    assert body["filters"] == {"target": "STUDENT"}

    everything = client.get("/categories").json()
    assert len(everything["categories"]) == 2
    assert everything["filters"] == {"target": None}


def test_list_rejects_unknown_filter(client):
    r = client.get("/categories", params={"target": "employee"})
    assert r.status_code == 400
    assert r.json()["code"] == "INVALID_TARGET"


def test_get_category_with_entries(client, auth_headers):
    category = _create_category(client, auth_headers)
    _add_item(client, auth_headers, category["id"], "Leave")
    _add_item(client, auth_headers, category["id"], "Health")
    r = client.get(f"/categories/{category['id']}")
    assert r.status_code == 200
    entries = r.json()["category"]["entries"]
    assert [e["title"] for e in entries] == ["Leave", "Health"]
    assert set(entries[0]) == {"id", "title", "description"}


def test_get_missing_category(client):
    r = client.get("/categories/999")
    assert r.status_code == 404
    assert r.json()["error"] == "not_found"


def test_update_category(client, auth_headers):
    category = _create_category(client, auth_headers)
    r = client.put(f"/categories/{category['id']}", json={"target": "STUDENT"}, headers=auth_headers)
    assert r.status_code == 200
    assert r.json()["category"]["title"] == "Benefits"
    assert r.json()["category"]["target"] == "STUDENT"


def test_update_without_changes(client, auth_headers):
    category = _create_category(client, auth_headers)
    r = client.put(f"/categories/{category['id']}", json={}, headers=auth_headers)
    assert r.status_code == 400
    assert r.json()["code"] == "NO_UPDATE_DATA"


def test_update_missing_category(client, auth_headers):
    r = client.put("/categories/999", json={"title": "x"}, headers=auth_headers)
    assert r.status_code == 404


def test_delete_category_removes_items(client, auth_headers):
    category = _create_category(client, auth_headers)
    first = _add_item(client, auth_headers, category["id"], "Leave")
    second = _add_item(client, auth_headers, category["id"], "Health")

    r = client.delete(f"/categories/{category['id']}", headers=auth_headers)
    assert r.status_code == 200
    assert client.get(f"/categories/{category['id']}").status_code == 404
    for item in (first, second):
        r = client.put(
            f"/categories/{category['id']}/items/{item['id']}",
            json={"title": "x"},
            headers=auth_headers,
        )
        assert r.status_code == 404


def test_item_lifecycle(client, auth_headers):
    category = _create_category(client, auth_headers)
    item = _add_item(client, auth_headers, category["id"])
    assert item["category_id"] == category["id"]

    r = client.put(
        f"/categories/{category['id']}/items/{item['id']}",
        json={"description": "Thirty days"},
        headers=auth_headers,
    )
    assert r.status_code == 200
    assert r.json()["item"]["title"] == "Leave"
    assert r.json()["item"]["description"] == "Thirty days"

    r = client.delete(f"/categories/{category['id']}/items/{item['id']}", headers=auth_headers)
    assert r.status_code == 200
    assert client.get(f"/categories/{category['id']}").json()["category"]["entries"] == []


def test_add_item_to_missing_category(client, auth_headers):
    r = client.post("/categories/999/items", json={"title": "x", "description": "y"}, headers=auth_headers)
    assert r.status_code == 404
    assert r.json()["code"] == "CATEGORY_NOT_FOUND"


def test_item_from_other_category_is_refused(client, auth_headers):
    a = _create_category(client, auth_headers, "A")
    b = _create_category(client, auth_headers, "B")
    item = _add_item(client, auth_headers, a["id"])

    r = client.put(f"/categories/{b['id']}/items/{item['id']}", json={"title": "x"}, headers=auth_headers)
    assert r.status_code == 400
    assert r.json()["code"] == "CATEGORY_MISMATCH"
    r = client.delete(f"/categories/{b['id']}/items/{item['id']}", headers=auth_headers)
    assert r.status_code == 400
    assert len(client.get(f"/categories/{a['id']}").json()["category"]["entries"]) == 1


def test_empty_update_of_missing_category_is_404(client, auth_headers):
    r = client.put("/categories/999", json={}, headers=auth_headers)
    assert r.status_code == 404
    assert r.json()["code"] == "CATEGORY_NOT_FOUND"
