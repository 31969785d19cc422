"""
Integration tests for task input validation and auth error responses.

Exercises the field rules end to end (title and description bounds, the
``completed`` type, path ids), the body-shape checks, and every failure
path of the auth gate against the running application.

Key SDET Concepts Demonstrated:
- Boundary-value analysis (empty, 1-char, max-length and over-length titles)
- Equivalence partitioning via @pytest.mark.parametrize
- Auth-failure scenarios (missing, malformed, expired, wrong-secret, oversized)
- Validation runs before the store is touched
"""

from __future__ import annotations

import json

import pytest

from tests.helpers import auth_headers, create_test_token

pytestmark = pytest.mark.integration


def _post(client, payload, headers):
    return client.post("/api/tasks", data=json.dumps(payload), headers=headers)


class TestTitleValidation:
    def test_empty_title_returns_400(self, client, task_store, api_headers):
        response = _post(client, {"title": ""}, api_headers)

        assert response.status_code == 400
        error = response.get_json()["error"]
        assert error["message"] == "Validation failed"
        assert error["validationErrors"][0]["param"] == "title"
        assert len(task_store) == 0

    def test_whitespace_only_title_returns_400(self, client, api_headers):
        assert _post(client, {"title": "   "}, api_headers).status_code == 400

    def test_single_character_title_is_accepted(self, client, api_headers):
        assert _post(client, {"title": "A"}, api_headers).status_code == 201

    def test_max_length_title_is_accepted(self, client, api_headers):
        """Test that a title at exactly 100 characters is accepted."""
        assert _post(client, {"title": "a" * 100}, api_headers).status_code == 201

    def test_title_exceeding_max_length_returns_400(self, client, api_headers):
        assert _post(client, {"title": "a" * 101}, api_headers).status_code == 400

    def test_title_is_stored_trimmed(self, client, api_headers):
        data = _post(client, {"title": "  padded  "}, api_headers).get_json()["data"]

        assert data["title"] == "padded"

    @pytest.mark.parametrize("title", [123, True, None, ["list"], {"k": "v"}])
    def test_non_string_title_returns_400(self, client, api_headers, title):
        assert _post(client, {"title": title}, api_headers).status_code == 400


class TestDescriptionValidation:
    def test_max_length_description_is_accepted(self, client, api_headers):
        response = _post(client, {"title": "Ok", "description": "d" * 500}, api_headers)

        assert response.status_code == 201

    def test_description_exceeding_max_length_returns_400(self, client, api_headers):
        response = _post(client, {"title": "Ok", "description": "d" * 501}, api_headers)

        assert response.status_code == 400
        assert response.get_json()["error"]["validationErrors"] == [
            {
                "msg": "Description must be at most 500 characters",
                "param": "description",
                "location": "body",
            }
        ]

    def test_update_with_oversized_description_returns_400(
        self, client, sample_task, api_headers
    ):
        response = client.put(
            f"/api/tasks/{sample_task.id}",
            data=json.dumps({"description": "d" * 501}),
            headers=api_headers,
        )

        assert response.status_code == 400


class TestCompletedValidation:
    @pytest.mark.parametrize("completed", ["true", 1, None, "done"])
    def test_non_boolean_completed_returns_400(self, client, sample_task, api_headers, completed):
        response = client.put(
            f"/api/tasks/{sample_task.id}",
            data=json.dumps({"completed": completed}),
            headers=api_headers,
        )

        assert response.status_code == 400

    def test_invalid_patch_does_not_modify_task(self, client, sample_task, task_store, api_headers):
        client.put(
            f"/api/tasks/{sample_task.id}",
            data=json.dumps({"title": "New title", "completed": "yes"}),
            headers=api_headers,
        )

        assert task_store.get(sample_task.id, "admin").title == "Sample Task"


class TestIdValidation:
    @pytest.mark.parametrize("method", ["get", "put", "delete"])
    def test_non_integer_id_returns_400(self, client, api_headers, method):
        kwargs = {"headers": api_headers}
        if method == "put":
            kwargs["data"] = json.dumps({"completed": True})

        response = getattr(client, method)("/api/tasks/abc", **kwargs)

        assert response.status_code == 400
        assert response.get_json()["error"]["validationErrors"][0]["msg"] == (
            "Task ID must be an integer"
        )

    def test_id_checked_after_authentication(self, client):
        """Test that an unauthenticated request is 401 even with a bad id."""
        assert client.get("/api/tasks/abc").status_code == 401


class TestBodyShape:
    @pytest.mark.parametrize("raw", ["not json", "[1, 2]", "\"title\"", "null"])
    def test_non_object_body_returns_400(self, client, api_headers, raw):
        response = client.post("/api/tasks", data=raw, headers=api_headers)

        assert response.status_code == 400
        assert response.get_json()["error"]["message"] == "Request body must be a JSON object"

    def test_oversized_body_returns_413(self, client, api_headers):
        payload = {"title": "Big", "description": "x" * (11 * 1024)}

        response = _post(client, payload, api_headers)

        assert response.status_code == 413
        assert response.get_json()["success"] is False


class TestAuthFailures:
    def test_missing_header_returns_401(self, client):
        response = client.get("/api/tasks")

        assert response.status_code == 401
        assert response.get_json() == {
            "success": False,
            "error": {"message": "No token, authorization denied"},
        }

    @pytest.mark.parametrize("header", ["Token abc", "Bearer", "Bearer ", "bearer abc", "abc"])
    def test_malformed_header_returns_401(self, client, header):
        response = client.get("/api/tasks", headers={"Authorization": header})

        assert response.status_code == 401

    def test_expired_token_returns_401(self, client, app):
        token = create_test_token(secret=app.config["JWT_SECRET"], expired=True)

        response = client.get("/api/tasks", headers=auth_headers(token))

        assert response.status_code == 401
        assert response.get_json()["error"]["message"] == "Token is not valid"

    def test_wrong_secret_returns_401(self, client):
        token = create_test_token(secret="an-entirely-different-secret-0123456789")

        response = client.get("/api/tasks", headers=auth_headers(token))

        assert response.status_code == 401

    def test_oversized_token_returns_431(self, client):
        response = client.get("/api/tasks", headers={"Authorization": "Bearer " + "x" * 9000})

        assert response.status_code == 431
        assert response.get_json()["error"]["message"] == "Token is too large"

    @pytest.mark.parametrize(
        ("method", "path"),
        [
            ("get", "/api/tasks"),
            ("post", "/api/tasks"),
            ("get", "/api/tasks/1"),
            ("put", "/api/tasks/1"),
            ("delete", "/api/tasks/1"),
        ],
    )
    def test_every_task_route_requires_auth(self, client, method, path):
        assert getattr(client, method)(path).status_code == 401
