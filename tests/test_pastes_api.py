"""Integration tests for the pastes HTTP API."""

import pytest
from fastapi.testclient import TestClient

from pasties.main import create_app


def _create(client: TestClient, **payload):
    payload.setdefault("content", "# Hello\n\nworld")
    return client.post("/api/pastes", json=payload)


def _delete(client: TestClient, slug: str, password: str):
    return client.request("DELETE", f"/api/pastes/{slug}", json={"password": password})


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_api_root_is_reserved(self, client):
        assert client.get("/api/").status_code == 200


class TestCreateAndFetch:
    def test_create_with_generated_slug(self, client):
        response = _create(client, password="pw")
        assert response.status_code == 201
        body = response.json()
        assert body["slug"]
        assert body["password"] is None

        fetched = client.get(f"/api/pastes/{body['slug']}")
        assert fetched.status_code == 200
        data = fetched.json()
        assert data["content"] == "# Hello\n\nworld"
        assert "<h1>Hello</h1>" in data["html"]
        assert "password_hash" not in data

    def test_blank_slug_means_generated(self, client):
        response = _create(client, slug="")
        assert response.status_code == 201
        assert response.json()["slug"]

    def test_custom_slug(self, client):
        response = _create(client, slug="my-paste")
        assert response.status_code == 201
        assert response.json()["slug"] == "my-paste"

    def test_custom_slug_taken(self, client):
        _create(client, slug="dup", content="first")
        response = _create(client, slug="dup", content="second")
        assert response.status_code == 409
        assert response.json() == {
            "detail": "A paste with this URL already exists",
            "code": "slug_taken",
        }
        assert client.get("/api/pastes/dup").json()["content"] == "first"

    @pytest.mark.parametrize("slug", ["api", "has space", "a.b"])
    def test_invalid_slug(self, client, slug):
        response = _create(client, slug=slug)
        assert response.status_code == 400
        assert response.json()["code"] == "invalid_slug"

    def test_empty_content(self, client):
        response = _create(client, content="")
        assert response.status_code == 400
        assert response.json()["code"] == "invalid_content"

    def test_missing_paste(self, client):
        response = client.get("/api/pastes/missing")
        assert response.status_code == 404
        assert response.json()["detail"] == "No paste with this URL has been found"

    def test_generated_password_is_returned_once(self, settings):
        settings.empty_password_policy = "generate"
        with TestClient(create_app(settings)) as client:
            body = _create(client).json()
            assert body["password"]
            assert "password" not in client.get(f"/api/pastes/{body['slug']}").json()
            assert _delete(client, body["slug"], body["password"]).status_code == 204


class TestUpdate:
    def test_wrong_password(self, client):
        slug = _create(client, password="pw").json()["slug"]
        response = client.put(f"/api/pastes/{slug}", json={"password": "bad", "content": "x"})
        assert response.status_code == 401
        assert response.json()["code"] == "unauthorized"
        assert client.get(f"/api/pastes/{slug}").json()["content"] == "# Hello\n\nworld"

    def test_update_content_and_slug(self, client):
        slug = _create(client, password="pw").json()["slug"]
        response = client.put(
            f"/api/pastes/{slug}",
            json={"password": "pw", "content": "**changed**", "new_slug": "renamed"},
        )
        assert response.status_code == 200
        assert response.json()["slug"] == "renamed"
        assert client.get(f"/api/pastes/{slug}").status_code == 404
        data = client.get("/api/pastes/renamed").json()
        assert "<strong>changed</strong>" in data["html"]

    def test_blank_fields_are_left_unchanged(self, client):
        slug = _create(client, password="pw", slug="keep").json()["slug"]
        response = client.put(
            f"/api/pastes/{slug}",
            json={"password": "pw", "content": "new", "new_slug": "", "new_password": ""},
        )
        assert response.status_code == 200
        assert response.json()["slug"] == "keep"
        assert _delete(client, "keep", "pw").status_code == 204

    def test_change_password(self, client):
        slug = _create(client, password="abc").json()["slug"]
        response = client.put(f"/api/pastes/{slug}", json={"password": "abc", "new_password": "xyz"})
        assert response.status_code == 200
        assert _delete(client, slug, "abc").status_code == 401
        assert _delete(client, slug, "xyz").status_code == 204

    def test_missing(self, client):
        response = client.put("/api/pastes/ghost", json={"password": "pw", "content": "x"})
        assert response.status_code == 404


class TestDelete:
    def test_delete_then_fetch(self, client):
        slug = _create(client, password="pw").json()["slug"]
        assert _delete(client, slug, "pw").status_code == 204
        assert client.get(f"/api/pastes/{slug}").status_code == 404
        assert _delete(client, slug, "pw").status_code == 404


class TestRenderPreview:
    def test_render(self, client):
        response = client.post("/api/render", json={"content": "# Preview"})
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert "<h1>Preview</h1>" in response.text

    def test_render_escapes_script(self, client):
        response = client.post("/api/render", json={"content": "<script>alert(1)</script>"})
        assert response.status_code == 200
        assert "<script>" not in response.text

    def test_render_empty(self, client):
        response = client.post("/api/render", json={})
        assert response.status_code == 200
        assert response.text == ""


class TestServerFaults:
    def test_allocation_exhausted_is_503(self, settings, monkeypatch):
        app = create_app(settings)
        with TestClient(app) as client:
            assert _create(client, slug="occupied").status_code == 201
            monkeypatch.setattr(app.state.paste_service.allocator, "generate", lambda: "occupied")

            response = _create(client, content="no room left")

            assert response.status_code == 503
            assert response.json()["code"] == "allocation_exhausted"
            assert client.get("/api/pastes/occupied").json()["content"] == "# Hello\n\nworld"
