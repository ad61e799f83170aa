from unittest.mock import patch

import pytest
from firebase_admin import auth


class TestBearerToken:
    def test_missing_header(self, client):
        response = client.get("/posts")

        assert response.status_code == 401
        assert response.json() == {"detail": "Invalid authorization header"}

    def test_wrong_scheme(self, client):
        response = client.get("/posts", headers={"Authorization": "Token abc"})

        assert response.status_code == 401

    def test_valid_token(self, client):
        with patch("dependencies.verify_id_token", return_value={"uid": "bob", "email": "bob@example.com"}) as verify:
            response = client.get("/auth", headers={"Authorization": "Bearer good-token"})

        assert response.status_code == 200
        assert response.json()["id"] == "bob"
        verify.assert_called_once_with("good-token", check_revoked=True, clock_skew_seconds=10)

    def test_rejected_token(self, client):
        with patch("dependencies.verify_id_token", side_effect=ValueError("expired")):
            response = client.get("/posts", headers={"Authorization": "Bearer stale"})

        assert response.status_code == 401
        assert response.json() == {"detail": "Invalid authentication token"}


class TestSession:
    def test_login_sets_session_cookie(self, client):
        with patch("routes.auth.auth.verify_id_token", return_value={"uid": "bob"}), \
                patch("routes.auth.auth.create_session_cookie", return_value="session-cookie"):
            response = client.post("/auth/login", json={"id_token": "good-token"})

        assert response.status_code == 200
        assert response.json() == {"success": True, "user_id": "bob"}
        assert response.cookies.get("session") == "session-cookie"

    def test_login_with_bad_token(self, client):
        with patch("routes.auth.auth.verify_id_token", side_effect=ValueError("bad token")):
            response = client.post("/auth/login", json={"id_token": "bad"})

        assert response.status_code == 401

    def test_verify_without_cookie(self, client):
        assert client.get("/auth/verify").status_code == 401

    @pytest.mark.parametrize("error, status", [
        (auth.InvalidSessionCookieError("invalid"), 401),
        (ValueError("revoked"), 401),
    ])
    def test_verify_rejected_cookie(self, client, error, status):
        client.cookies.set("session", "cookie")
        with patch("routes.auth.auth.verify_session_cookie", side_effect=error):
            response = client.get("/auth/verify")

        assert response.status_code == status

    def test_verify_valid_cookie(self, client):
        client.cookies.set("session", "cookie")
        claims = {"uid": "bob", "email": "bob@example.com"}
        with patch("routes.auth.auth.verify_session_cookie", return_value=claims):
            response = client.get("/auth/verify")

        assert response.json() == {"valid": True, "user": claims}

    def test_logout_clears_cookie(self, client):
        response = client.post("/auth/logout")

        assert response.status_code == 200
        assert 'session=""' in response.headers["set-cookie"]
