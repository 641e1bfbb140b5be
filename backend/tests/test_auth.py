"""
Tests for the admin login flow and the route gate
"""

import pytest

from pbi_access.core.sessions import SESSION_COOKIE_NAME

PASSWORD = "correct horse battery staple"


@pytest.fixture
def protected(make_client, groups):
    return make_client(ADMIN_PASSWORD=PASSWORD)


def login(client, password):
    return client.post("/login", data={"password": password}, follow_redirects=False)


class TestAuthDisabled:

    def test_routes_are_open(self, client):
        assert client.get("/", follow_redirects=False).status_code == 200
        assert client.get("/api/users", follow_redirects=False).status_code == 200

    @pytest.mark.parametrize("password", ["", "anything", PASSWORD])
    def test_login_always_succeeds(self, client, password):
        response = login(client, password)

        assert response.status_code == 303
        assert response.headers["location"] == "/"
        assert SESSION_COOKIE_NAME in response.cookies
        assert client.app.state.sessions.valid(response.cookies[SESSION_COOKIE_NAME])


class TestAuthEnabled:

    @pytest.mark.parametrize("path", ["/", "/settings", "/api/users", "/api/groups/search?q=x"])
    def test_requires_session(self, protected, path):
        response = protected.get(path, follow_redirects=False)

        assert response.status_code == 303
        assert response.headers["location"] == "/login"

    def test_unknown_session_cookie_redirects(self, protected):
        response = protected.get(
            "/api/users",
            headers={"Cookie": f"{SESSION_COOKIE_NAME}=forged-token"},
            follow_redirects=False,
        )

        assert response.status_code == 303
        assert response.headers["location"] == "/login"

    @pytest.mark.parametrize("path", ["/login", "/static/js/app.js", "/static/css/style.css", "/health"])
    def test_public_paths(self, protected, path):
        assert protected.get(path, follow_redirects=False).status_code == 200

    def test_wrong_password(self, protected):
        response = login(protected, "wrong")

        assert response.status_code == 303
        assert response.headers["location"] == "/login?error=invalid"
        assert SESSION_COOKIE_NAME not in response.cookies
        assert len(protected.app.state.sessions) == 0

    def test_login_page_shows_error(self, protected):
        response = protected.get("/login?error=invalid")

        assert response.status_code == 200
        assert "Invalid password" in response.text

    def test_correct_password(self, protected):
        response = login(protected, PASSWORD)

        assert response.status_code == 303
        assert response.headers["location"] == "/"
        cookie_header = response.headers["set-cookie"].lower()
        assert "httponly" in cookie_header
        assert "samesite=lax" in cookie_header
        assert "max-age=28800" in cookie_header
        assert f"{SESSION_COOKIE_NAME}=\"" not in cookie_header

        assert protected.get("/api/users", follow_redirects=False).status_code == 200

    def test_login_page_redirects_when_logged_in(self, protected):
        login(protected, PASSWORD)

        response = protected.get("/login", follow_redirects=False)

        assert response.status_code == 303
        assert response.headers["location"] == "/"

    def test_logout(self, protected):
        response = login(protected, PASSWORD)
        token = response.cookies[SESSION_COOKIE_NAME]
        assert protected.app.state.sessions.valid(token)

        response = protected.get("/logout", follow_redirects=False)

        assert response.status_code == 303
        assert response.headers["location"] == "/login"
        assert not protected.app.state.sessions.valid(token)
        assert protected.get("/api/users", follow_redirects=False).status_code == 303

    def test_logout_without_session(self, protected):
        response = protected.get("/logout", follow_redirects=False)

        assert response.status_code == 303
        assert response.headers["location"] == "/login"
