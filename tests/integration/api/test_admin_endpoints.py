"""Integration tests for the administrator endpoints."""

from uuid import uuid4

import pytest

from tests.shared.api_client import login_headers


@pytest.mark.integration
class TestAdminAccess:
    """Only administrators reach /admin."""

    def test_regular_user_is_forbidden(self, test_client, api_v1_prefix, auth_headers):
        response = test_client.get(f"{api_v1_prefix}/admin/users", headers=auth_headers)

        assert response.status_code == 403
        assert response.json()["detail"] == "Admin access required"

    def test_anonymous_is_unauthorized(self, test_client, api_v1_prefix):
        assert test_client.get(f"{api_v1_prefix}/admin/users").status_code == 401

    def test_demoted_admin_loses_access_immediately(
        self,
        test_client,
        api_v1_prefix,
        admin_headers,
        registered_user,
        registered_user_data,
        promote,
    ):
        promote(registered_user_data["email"])
        second_admin = login_headers(
            test_client,
            registered_user_data["email"],
            registered_user_data["password"],
        )

        test_client.patch(
            f"{api_v1_prefix}/admin/users/{registered_user['id']}/role",
            headers=admin_headers,
            json={"role": "USER"},
        )

        response = test_client.get(f"{api_v1_prefix}/admin/users", headers=second_admin)
        assert response.status_code == 403


@pytest.mark.integration
class TestAdminReadUsers:
    """Tests for listing and fetching users."""

    def test_list_users(
        self,
        test_client,
        api_v1_prefix,
        admin_headers,
        registered_user,
    ):
        response = test_client.get(f"{api_v1_prefix}/admin/users", headers=admin_headers)

        assert response.status_code == 200
        users = {u["username"]: u for u in response.json()}
        assert set(users) == {"site_admin", "api_tester"}
        assert users["site_admin"]["role"] == "ADMIN"
        assert users["api_tester"]["role"] == "USER"
        assert "registered_at" in users["api_tester"]
        assert "password_hash" not in users["api_tester"]

    def test_get_user(self, test_client, api_v1_prefix, admin_headers, registered_user):
        response = test_client.get(
            f"{api_v1_prefix}/admin/users/{registered_user['id']}",
            headers=admin_headers,
        )

        assert response.status_code == 200
        assert response.json()["email"] == registered_user["email"]

    def test_get_unknown_user(self, test_client, api_v1_prefix, admin_headers):
        response = test_client.get(
            f"{api_v1_prefix}/admin/users/{uuid4()}",
            headers=admin_headers,
        )

        assert response.status_code == 404
        assert response.json()["code"] == "USER_NOT_FOUND"


@pytest.mark.integration
class TestAdminDeleteUser:
    """Tests for DELETE /admin/users/{id}."""

    def test_hard_delete(
        self,
        test_client,
        api_v1_prefix,
        admin_headers,
        registered_user,
        registered_user_data,
    ):
        user_headers = login_headers(
            test_client,
            registered_user_data["email"],
            registered_user_data["password"],
        )
        user_id = registered_user["id"]

        response = test_client.delete(
            f"{api_v1_prefix}/admin/users/{user_id}",
            headers=admin_headers,
        )

        assert response.status_code == 200
        assert response.json() == {
            "message": f"User with ID {user_id} deleted successfully",
            "soft_deleted": False,
        }
        assert (
            test_client.get(f"{api_v1_prefix}/user/me", headers=user_headers).status_code
            == 401
        )
        # the row is gone, so the email can be registered again
        again = test_client.post(
            f"{api_v1_prefix}/auth/register",
            json=registered_user_data,
        )
        assert again.status_code == 201

    def test_soft_delete(
        self,
        test_client,
        api_v1_prefix,
        admin_headers,
        registered_user,
        registered_user_data,
    ):
        user_id = registered_user["id"]

        response = test_client.delete(
            f"{api_v1_prefix}/admin/users/{user_id}",
            headers=admin_headers,
            params={"soft": "true"},
        )

        assert response.status_code == 200
        assert response.json()["soft_deleted"] is True

        listed = test_client.get(f"{api_v1_prefix}/admin/users", headers=admin_headers)
        assert user_id not in [u["id"] for u in listed.json()]

        fetched = test_client.get(
            f"{api_v1_prefix}/admin/users/{user_id}",
            headers=admin_headers,
        )
        assert fetched.status_code == 404

        # soft-deleted rows keep their email reserved
        again = test_client.post(
            f"{api_v1_prefix}/auth/register",
            json=registered_user_data,
        )
        assert again.status_code == 422

    def test_cannot_delete_self(self, test_client, api_v1_prefix, admin_headers, admin_user):
        response = test_client.delete(
            f"{api_v1_prefix}/admin/users/{admin_user['id']}",
            headers=admin_headers,
        )

        assert response.status_code == 400
        assert response.json()["code"] == "CANNOT_DELETE_SELF"

    def test_delete_unknown_user(self, test_client, api_v1_prefix, admin_headers):
        response = test_client.delete(
            f"{api_v1_prefix}/admin/users/{uuid4()}",
            headers=admin_headers,
        )

        assert response.status_code == 404


@pytest.mark.integration
class TestAdminUpdateUser:
    """Tests for the role and status PATCH endpoints."""

    def test_promote_user(
        self,
        test_client,
        api_v1_prefix,
        admin_headers,
        registered_user,
    ):
        response = test_client.patch(
            f"{api_v1_prefix}/admin/users/{registered_user['id']}/role",
            headers=admin_headers,
            json={"role": "admin"},
        )

        assert response.status_code == 200
        assert response.json()["role"] == "ADMIN"

    def test_cannot_demote_self(self, test_client, api_v1_prefix, admin_headers, admin_user):
        response = test_client.patch(
            f"{api_v1_prefix}/admin/users/{admin_user['id']}/role",
            headers=admin_headers,
            json={"role": "USER"},
        )

        assert response.status_code == 400
        assert response.json()["code"] == "CANNOT_DEMOTE_SELF"

    def test_invalid_role(self, test_client, api_v1_prefix, admin_headers, registered_user):
        response = test_client.patch(
            f"{api_v1_prefix}/admin/users/{registered_user['id']}/role",
            headers=admin_headers,
            json={"role": "SUPERUSER"},
        )

        assert response.status_code == 422

    @pytest.mark.parametrize("new_status", ["ACTIVATE", "suspend", "DEACTIVATE"])
    def test_update_status(
        self,
        test_client,
        api_v1_prefix,
        admin_headers,
        registered_user,
        new_status,
    ):
        response = test_client.patch(
            f"{api_v1_prefix}/admin/users/{registered_user['id']}/status",
            headers=admin_headers,
            json={"status": new_status},
        )

        assert response.status_code == 200
        assert response.json()["status"] == new_status.upper()

    def test_invalid_status(
        self,
        test_client,
        api_v1_prefix,
        admin_headers,
        registered_user,
    ):
        response = test_client.patch(
            f"{api_v1_prefix}/admin/users/{registered_user['id']}/status",
            headers=admin_headers,
            json={"status": "BANNED"},
        )

        assert response.status_code == 422

    def test_update_status_of_unknown_user(
        self,
        test_client,
        api_v1_prefix,
        admin_headers,
    ):
        response = test_client.patch(
            f"{api_v1_prefix}/admin/users/{uuid4()}/status",
            headers=admin_headers,
            json={"status": "ACTIVATE"},
        )

        assert response.status_code == 404
