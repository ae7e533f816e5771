"""End-to-end tests for signup, sign-in, sign-out and OAuth flows."""

import pytest
from fastapi.testclient import TestClient

from passage.interface.api.app import create_app
from tests.di import build_test_container

COOKIE = "auth_token"


@pytest.fixture
def client():
    """Create test client on an app wired with mock providers."""
    return TestClient(create_app(build_test_container()))


def signup(client: TestClient, **overrides):
    payload = {
        "username": "alice",
        "password": "secret123",
        "email": "alice@example.com",
        "first_name": "Alice",
        "last_name": "Liddell",
    }
    payload.update(overrides)
    return client.post("/auth/signup", json=payload)


class TestLocalAccounts:
    """End-to-end tests for local signup, sign-in and sign-out."""

    def test_signup_returns_sanitized_user_and_sets_cookie(self, client):
        """Signup should return the public user and start a session."""
        # Act
        response = signup(client, roles=["admin"])

        # Assert
        assert response.status_code == 200
        data = response.json()
        assert data["username"] == "alice"
        assert data["provider"] == "local"
        assert data["roles"] == ["user"]
        assert "password_hash" not in data
        assert "salt" not in data
        assert client.cookies.get(COOKIE)

    def test_signup_duplicate_username_returns_structured_error(self, client):
        """Taken usernames should produce the structured 500 payload."""
        # Arrange
        signup(client)

        # Act
        response = signup(client, email="other@example.com")

        # Assert
        assert response.status_code == 500
        assert response.json() == {
            "type": "INTERNAL_SERVER_ERROR",
            "description": "Username already exists",
        }

    def test_signup_short_password_returns_structured_error(self, client):
        """Short passwords should be rejected with a message."""
        response = signup(client, password="abc")

        assert response.status_code == 500
        assert response.json()["description"] == (
            "Password should be at least 6 characters"
        )

    def test_signup_malformed_body_returns_structured_error(self, client):
        """Request validation failures use the structured payload."""
        response = client.post("/auth/signup", json={"username": "alice"})

        assert response.status_code == 500
        assert response.json()["type"] == "INTERNAL_SERVER_ERROR"
        assert response.json()["description"]

    def test_signin_with_valid_credentials(self, client):
        """Sign-in should return the user and start a session."""
        # Arrange
        signup(client)
        client.cookies.clear()

        # Act
        response = client.post(
            "/auth/signin", json={"username": "alice", "password": "secret123"}
        )

        # Assert
        assert response.status_code == 200
        assert response.json()["username"] == "alice"
        assert client.cookies.get(COOKIE)

    def test_signin_with_wrong_password(self, client):
        """Bad credentials should produce the structured 500 payload."""
        # Arrange
        signup(client)

        # Act
        response = client.post(
            "/auth/signin", json={"username": "alice", "password": "wrong-pass"}
        )

        # Assert
        assert response.status_code == 500
        assert response.json() == {
            "type": "INTERNAL_SERVER_ERROR",
            "description": "Unknown user or invalid password",
        }

    def test_me_reflects_session(self, client):
        """/auth/me should report the signed-in user."""
        # Arrange
        assert client.get("/auth/me").json() == {"authenticated": False, "user": None}
        signup(client)

        # Act
        response = client.get("/auth/me")

        # Assert
        data = response.json()
        assert data["authenticated"] is True
        assert data["user"]["username"] == "alice"

    def test_signout_clears_cookie_and_redirects_home(self, client):
        """Sign-out should clear the session cookie and redirect to /."""
        # Arrange
        signup(client)

        # Act
        response = client.get("/auth/signout", follow_redirects=False)

        # Assert
        assert response.status_code == 302
        assert response.headers["location"] == "/"
        assert f"{COOKIE}=" in response.headers["set-cookie"]
        assert "Max-Age=0" in response.headers["set-cookie"]
        assert client.get("/auth/me").json()["authenticated"] is False


class TestOAuthFlow:
    """End-to-end tests for OAuth sign-in and provider linking."""

    def test_initiate_redirects_to_provider(self, client):
        """GET /auth/github should redirect to the authorization page."""
        response = client.get("/auth/github", follow_redirects=False)

        assert response.status_code == 302
        assert response.headers["location"].startswith(
            "https://github.example.com/authorize?state="
        )

    def test_initiate_unknown_provider_redirects_to_signin(self, client):
        """Unknown providers should land on the sign-in page."""
        response = client.get("/auth/gitlab", follow_redirects=False)

        assert response.status_code == 302
        assert response.headers["location"] == "/i/signin"

    def test_callback_signs_in_new_user(self, client):
        """First callback should create the user and redirect to /."""
        # Act
        response = client.get(
            "/auth/github/callback",
            params={"code": "42", "state": "s"},
            follow_redirects=False,
        )

        # Assert
        assert response.status_code == 302
        assert response.headers["location"] == "/"
        me = client.get("/auth/me").json()
        assert me["user"]["username"] == "mock-42"
        assert me["user"]["provider"] == "github"

    def test_callback_failure_redirects_to_signin(self, client):
        """Refused authorizations should redirect to the sign-in page."""
        response = client.get(
            "/auth/github/callback",
            params={"code": "denied", "state": "s"},
            follow_redirects=False,
        )

        assert response.status_code == 302
        assert response.headers["location"] == "/i/signin"
        assert client.cookies.get(COOKIE) is None

    def test_callback_without_code_redirects_to_signin(self, client):
        """Callbacks without a code should redirect to the sign-in page."""
        response = client.get(
            "/auth/github/callback",
            params={"error": "access_denied"},
            follow_redirects=False,
        )

        assert response.status_code == 302
        assert response.headers["location"] == "/i/signin"

    def test_callback_with_session_links_provider(self, client):
        """Signed-in users should get the provider linked to their account."""
        # Arrange
        signup(client)

        # Act
        response = client.get(
            "/auth/github/callback",
            params={"code": "42", "state": "s"},
            follow_redirects=False,
        )

        # Assert
        assert response.status_code == 302
        assert response.headers["location"] == "/account-settings"
        user = client.get("/auth/me").json()["user"]
        assert user["username"] == "alice"
        assert user["additional_providers_data"]["github"]["id"] == "42"

    def test_linked_provider_signs_in_to_existing_account(self, client):
        """After linking, signing in with the provider reuses the account."""
        # Arrange
        signup(client)
        client.get(
            "/auth/github/callback",
            params={"code": "42", "state": "s"},
            follow_redirects=False,
        )
        client.get("/auth/signout", follow_redirects=False)
        client.cookies.clear()

        # Act
        client.get(
            "/auth/github/callback",
            params={"code": "42", "state": "s"},
            follow_redirects=False,
        )

        # Assert
        assert client.get("/auth/me").json()["user"]["username"] == "alice"

    def test_linking_connected_provider_redirects_to_signin(self, client):
        """Linking a provider the user already has should fail gracefully."""
        # Arrange
        client.get(
            "/auth/github/callback",
            params={"code": "42", "state": "s"},
            follow_redirects=False,
        )

        # Act
        response = client.get(
            "/auth/github/callback",
            params={"code": "43", "state": "s"},
            follow_redirects=False,
        )

        # Assert
        assert response.status_code == 302
        assert response.headers["location"] == "/i/signin"


class TestUnlinkProvider:
    """End-to-end tests for DELETE /users/accounts."""

    def test_unlink_requires_session(self, client):
        """Unauthenticated callers should get 401."""
        response = client.delete("/users/accounts", params={"provider": "github"})

        assert response.status_code == 401
        assert response.json()["type"] == "UNAUTHORIZED"

    def test_unlink_without_provider_is_bad_request(self, client):
        """Missing provider should be a structured 400."""
        signup(client)

        response = client.delete("/users/accounts")

        assert response.status_code == 400
        assert response.json()["type"] == "BAD_REQUEST"

    def test_unlink_removes_linked_provider(self, client):
        """Unlinking should drop the provider and keep the session."""
        # Arrange
        signup(client)
        client.get(
            "/auth/github/callback",
            params={"code": "42", "state": "s"},
            follow_redirects=False,
        )

        # Act
        response = client.delete("/users/accounts", params={"provider": "github"})

        # Assert
        assert response.status_code == 200
        assert response.json()["additional_providers_data"] == {}
        assert client.cookies.get(COOKIE)
        me = client.get("/auth/me").json()
        assert me["user"]["additional_providers_data"] == {}

    def test_unlink_twice_is_harmless(self, client):
        """Unlinking a provider that is no longer linked returns the user."""
        # Arrange
        signup(client)

        # Act
        response = client.delete("/users/accounts", params={"provider": "github"})

        # Assert
        assert response.status_code == 200
        assert response.json()["username"] == "alice"


class TestHealth:
    """Health endpoint."""

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
