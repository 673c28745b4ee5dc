"""Integration tests for the session management endpoints."""

from uuid import uuid4

import pytest

from tests.shared.api_client import login_headers, register
from tests.shared.factories import STRONG_PASSWORD

IPHONE_AGENT = (
    "Mozilla/5.0 (iPhone; CPU iPhone OS 17_2_1 like Mac OS X) "
    "AppleWebKit/605.1.15 (KHTML, like Gecko) Mobile/15E148"
)


@pytest.mark.integration
class TestListSessions:
    """Tests for GET /sessions."""

    def test_current_session_listed_first(
        self,
        test_client,
        api_v1_prefix,
        registered_user,
        registered_user_data,
    ):
        test_client.headers["User-Agent"] = IPHONE_AGENT
        phone = login_headers(
            test_client,
            registered_user_data["email"],
            registered_user_data["password"],
        )
        test_client.headers["User-Agent"] = "testclient"
        desktop = login_headers(
            test_client,
            registered_user_data["email"],
            registered_user_data["password"],
        )

        response = test_client.get(f"{api_v1_prefix}/sessions", headers=desktop)

        assert response.status_code == 200
        sessions = response.json()
        assert len(sessions) == 2
        assert sessions[0]["current"] is True
        assert sessions[0]["device"]["name"] == "unknown"
        assert sessions[1]["current"] is False
        assert sessions[1]["device"] == {"name": "iOS", "version": "17.2.1"}
        assert sessions[1]["ip"] == "testclient"

        from_phone = test_client.get(f"{api_v1_prefix}/sessions", headers=phone)
        assert from_phone.json()[0]["device"]["name"] == "iOS"

    def test_sessions_of_other_users_are_hidden(
        self,
        test_client,
        api_v1_prefix,
        auth_headers,
    ):
        register(
            test_client,
            {"email": "bob@example.com", "username": "bobby", "password": STRONG_PASSWORD},
        )
        login_headers(test_client, "bob@example.com", STRONG_PASSWORD)

        response = test_client.get(f"{api_v1_prefix}/sessions", headers=auth_headers)

        assert len(response.json()) == 1

    def test_requires_auth(self, test_client, api_v1_prefix):
        assert test_client.get(f"{api_v1_prefix}/sessions").status_code == 401


@pytest.fixture
def trust_proxy_headers(api_settings):
    """Honour X-Forwarded-For in the app under test."""
    api_settings.api_trust_proxy_headers = True
    return api_settings


def _login_via_proxy(client, prefix, data) -> dict:
    response = client.post(
        f"{prefix}/auth/login",
        json={"identifier": data["email"], "password": data["password"]},
        headers={"X-Forwarded-For": "203.0.113.9, 10.0.0.1"},
    )
    assert response.status_code == 200
    client.cookies.clear()
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.mark.integration
class TestSessionClientIP:
    """The recorded IP follows the proxy trust setting."""

    def test_forwarded_address_when_trusted(
        self,
        trust_proxy_headers,
        test_client,
        api_v1_prefix,
        registered_user,
        registered_user_data,
    ):
        headers = _login_via_proxy(test_client, api_v1_prefix, registered_user_data)

        sessions = test_client.get(f"{api_v1_prefix}/sessions", headers=headers)

        assert sessions.json()[0]["ip"] == "203.0.113.9"

    def test_peer_address_when_untrusted(
        self,
        test_client,
        api_v1_prefix,
        registered_user,
        registered_user_data,
    ):
        headers = _login_via_proxy(test_client, api_v1_prefix, registered_user_data)

        sessions = test_client.get(f"{api_v1_prefix}/sessions", headers=headers)

        assert sessions.json()[0]["ip"] == "testclient"


@pytest.mark.integration
class TestRevokeSessions:
    """Tests for DELETE /sessions and DELETE /sessions/{id}."""

    def test_terminate_other_sessions(
        self,
        test_client,
        api_v1_prefix,
        auth_headers,
        registered_user_data,
    ):
        others = [
            login_headers(
                test_client,
                registered_user_data["email"],
                registered_user_data["password"],
            )
            for _ in range(2)
        ]

        response = test_client.delete(f"{api_v1_prefix}/sessions", headers=auth_headers)

        assert response.status_code == 204
        remaining = test_client.get(f"{api_v1_prefix}/sessions", headers=auth_headers)
        assert len(remaining.json()) == 1
        for headers in others:
            me = test_client.get(f"{api_v1_prefix}/user/me", headers=headers)
            assert me.status_code == 401

    def test_revoke_single_session(
        self,
        test_client,
        api_v1_prefix,
        auth_headers,
        registered_user_data,
    ):
        other = login_headers(
            test_client,
            registered_user_data["email"],
            registered_user_data["password"],
        )
        sessions = test_client.get(f"{api_v1_prefix}/sessions", headers=auth_headers)
        other_id = sessions.json()[1]["id"]

        response = test_client.delete(
            f"{api_v1_prefix}/sessions/{other_id}",
            headers=auth_headers,
        )

        assert response.status_code == 204
        assert (
            test_client.get(f"{api_v1_prefix}/user/me", headers=other).status_code
            == 401
        )
        assert (
            test_client.get(f"{api_v1_prefix}/user/me", headers=auth_headers).status_code
            == 200
        )

    def test_revoke_current_session(self, test_client, api_v1_prefix, auth_headers):
        sessions = test_client.get(f"{api_v1_prefix}/sessions", headers=auth_headers)
        current_id = sessions.json()[0]["id"]

        response = test_client.delete(
            f"{api_v1_prefix}/sessions/{current_id}",
            headers=auth_headers,
        )

        assert response.status_code == 204
        assert (
            test_client.get(f"{api_v1_prefix}/user/me", headers=auth_headers).status_code
            == 401
        )

    def test_revoke_unknown_session(self, test_client, api_v1_prefix, auth_headers):
        response = test_client.delete(
            f"{api_v1_prefix}/sessions/{uuid4()}",
            headers=auth_headers,
        )

        assert response.status_code == 404
        assert response.json()["code"] == "SESSION_NOT_FOUND"

    def test_cannot_revoke_foreign_session(
        self,
        test_client,
        api_v1_prefix,
        auth_headers,
    ):
        register(
            test_client,
            {"email": "bob@example.com", "username": "bobby", "password": STRONG_PASSWORD},
        )
        bob = login_headers(test_client, "bob@example.com", STRONG_PASSWORD)
        bob_session = test_client.get(f"{api_v1_prefix}/sessions", headers=bob).json()[0]

        response = test_client.delete(
            f"{api_v1_prefix}/sessions/{bob_session['id']}",
            headers=auth_headers,
        )

        assert response.status_code == 404
        assert test_client.get(f"{api_v1_prefix}/user/me", headers=bob).status_code == 200

    def test_invalid_session_id(self, test_client, api_v1_prefix, auth_headers):
        response = test_client.delete(
            f"{api_v1_prefix}/sessions/not-a-uuid",
            headers=auth_headers,
        )

        assert response.status_code == 422
