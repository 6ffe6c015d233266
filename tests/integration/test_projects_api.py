import pytest

from tests.conftest import png_file

pytestmark = pytest.mark.integration


def _create(client, headers, title="Mentoring", target="STUDENT"):
    r = client.post(
        "/projects",
        data={"title": title, "description": "Peer mentoring", "target": target},
        files={"image": png_file("cover.webp", b"RIFF....WEBP", "image/webp")},
        headers=headers,
    )
    assert r.status_code == 201, r.text
    return r.json()["project"]


def test_create_project(client, auth_headers):
    project = _create(client, auth_headers)
    assert project["target"] == "STUDENT"
    assert project["image_src"].startswith("/images/image-")
    assert project["image_src"].endswith(".webp")


def test_create_validates_target(client, auth_headers, media_root):
    r = client.post(
        "/projects",
        data={"title": "x", "description": "y", "target": "NOBODY"},
        files={"image": png_file()},
        headers=auth_headers,
    )
    assert r.status_code == 400
    assert r.json()["code"] == "INVALID_TARGET"
    assert list((media_root / "images").iterdir()) == []


def test_list_newest_first_with_filter(client, auth_headers):
    _create(client, auth_headers, "first", "STUDENT")
    _create(client, auth_headers, "second", "EMPLOYEE")
    _create(client, auth_headers, "third", "STUDENT")

    r = client.get("/projects")
    assert [p["title"] for p in r.json()["projects"]] == ["third", "second", "first"]

    r = client.get("/projects", params={"target": "STUDENT"})
    assert [p["title"] for p in r.json()["projects"]] == ["third", "first"]
    assert r.json()["filters"] == {"target": "STUDENT"}


def test_update_and_delete(client, auth_headers, media_root):
    project = _create(client, auth_headers)
    r = client.put(f"/projects/{project['id']}", data={"target": "EMPLOYEE"}, headers=auth_headers)
    assert r.status_code == 200
    assert r.json()["project"]["target"] == "EMPLOYEE"
    assert r.json()["project"]["title"] == "Mentoring"

    r = client.put(f"/projects/{project['id']}", data={"target": "nobody"}, headers=auth_headers)
    assert r.status_code == 400

    r = client.delete(f"/projects/{project['id']}", headers=auth_headers)
    assert r.status_code == 200
    assert not (media_root / project["image_src"].lstrip("/")).exists()
    r = client.get(f"/projects/{project['id']}")
    assert r.status_code == 404
    assert r.json()["code"] == "PROJECT_NOT_FOUND"


def test_update_missing_project(client, auth_headers):
    r = client.put("/projects/999", data={"title": "x"}, headers=auth_headers)
    assert r.status_code == 404


def test_empty_update_of_missing_project_is_404(client, auth_headers):
    r = client.put("/projects/999", data={}, headers=auth_headers)
    assert r.status_code == 404
    assert r.json()["code"] == "PROJECT_NOT_FOUND"
