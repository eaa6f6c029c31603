"""HTTP tests for /auth: register, login, refresh cookie rotation, logout, profile and admin routes."""

import unittest

from fastapi.testclient import TestClient

from app.core.security import TokenKind
from app.api.deps import get_token_issuer
from app.models import Role
from tests.support import ApiTestMixin, create_user

REGISTER = {
    "email": "a@example.com",
    "password": "secret1",
    "firstName": "Ann",
    "lastName": "Lee",
    "phone": "555-0100",
    "businessName": "Annie's Shop",
}


class TestRegisterAndLogin(ApiTestMixin, unittest.TestCase):
    def test_register_then_login_subject_matches(self) -> None:
        response = self.client.post(self.url("/auth/register"), json=REGISTER)
        self.assertEqual(response.status_code, 201)
        user_id = response.json()["userId"]

        body = self.login("a@example.com", "secret1")
        payload = get_token_issuer().verify(body["accessToken"], TokenKind.ACCESS)
        self.assertEqual(payload.subject, user_id)
        self.assertEqual(body["user"], {"id": user_id, "email": "a@example.com", "role": "BRAND_OWNER"})
        self.assertIn(self.cookie_name, self.client.cookies)
        self.assertNotIn("password", str(body["user"]).lower())

    def test_login_sets_http_only_cookie(self) -> None:
        self.client.post(self.url("/auth/register"), json=REGISTER)
        response = self.client.post(
            self.url("/auth/login"), json={"email": "a@example.com", "password": "secret1"}
        )
        cookie = response.headers["set-cookie"].lower()
        self.assertIn("httponly", cookie)
        self.assertIn("samesite=lax", cookie)
        self.assertIn("max-age=604800", cookie)

    def test_duplicate_email_409(self) -> None:
        self.assertEqual(self.client.post(self.url("/auth/register"), json=REGISTER).status_code, 201)
        again = self.client.post(self.url("/auth/register"), json={**REGISTER, "phone": "555-0199"})
        self.assertEqual(again.status_code, 409)
        self.assertEqual(again.json(), {"detail": "Email already exists"})

    def test_invalid_register_body_422(self) -> None:
        response = self.client.post(self.url("/auth/register"), json={**REGISTER, "email": "nope"})
        self.assertEqual(response.status_code, 422)

    def test_wrong_password_same_shape_as_unknown_email(self) -> None:
        self.client.post(self.url("/auth/register"), json=REGISTER)
        wrong = self.client.post(
            self.url("/auth/login"), json={"email": "a@example.com", "password": "bad-password"}
        )
        unknown = self.client.post(
            self.url("/auth/login"), json={"email": "z@example.com", "password": "secret1"}
        )
        self.assertEqual(wrong.status_code, 401)
        self.assertEqual(unknown.status_code, 401)
        self.assertEqual(wrong.json(), unknown.json())


class TestRefreshFlow(ApiTestMixin, unittest.TestCase):
    def setUp(self) -> None:
        super().setUp()
        self.client.post(self.url("/auth/register"), json=REGISTER)
        self.first = self.login("a@example.com", "secret1")

    def _refresh_with(self, token: str):
        self.client.cookies.clear()
        return self.client.post(self.url("/auth/refresh"), json={"refreshToken": token})

    def test_rotate_then_replay_first_token(self) -> None:
        rotated = self.client.post(self.url("/auth/refresh"))
        self.assertEqual(rotated.status_code, 200)
        body = rotated.json()
        self.assertNotEqual(body["accessToken"], self.first["accessToken"])
        new_cookie = rotated.cookies.get(self.cookie_name)
        self.assertIsNotNone(new_cookie)
        self.assertNotEqual(new_cookie, self.first["refreshToken"])
        self.assertEqual(body["user"]["email"], "a@example.com")

        replay = self._refresh_with(self.first["refreshToken"])
        self.assertEqual(replay.status_code, 401)

    def test_body_token_preferred_over_stale_cookie(self) -> None:
        other_client = TestClient(self.app)
        self.addCleanup(other_client.close)
        rotated = other_client.post(
            self.url("/auth/refresh"), json={"refreshToken": self.first["refreshToken"]}
        )
        self.assertEqual(rotated.status_code, 200)
        current = rotated.json()["refreshToken"]

        # This client's cookie still holds the superseded token.
        response = self.client.post(self.url("/auth/refresh"), json={"refreshToken": current})
        self.assertEqual(response.status_code, 200)
        self.assertNotEqual(response.json()["refreshToken"], current)

    def test_missing_refresh_token_401(self) -> None:
        self.client.cookies.clear()
        response = self.client.post(self.url("/auth/refresh"))
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json(), {"detail": "No refresh token found"})

    def test_garbage_refresh_token_401(self) -> None:
        self.assertEqual(self._refresh_with("garbage").status_code, 401)

    def test_logout_then_refresh_rejected(self) -> None:
        response = self.client.post(
            self.url("/auth/logout"), headers=self.bearer(self.first["accessToken"])
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"message": "Logged out successfully"})
        self.assertIn(self.cookie_name, response.headers["set-cookie"])
        self.assertIn(self._refresh_with(self.first["refreshToken"]).status_code, (401, 403))

    def test_logout_requires_access_token(self) -> None:
        self.assertEqual(self.client.post(self.url("/auth/logout")).status_code, 401)
        response = self.client.post(
            self.url("/auth/logout"), headers=self.bearer(self.first["refreshToken"])
        )
        self.assertEqual(response.status_code, 401)


class TestProfileRoutes(ApiTestMixin, unittest.TestCase):
    def setUp(self) -> None:
        super().setUp()
        self.client.post(self.url("/auth/register"), json=REGISTER)
        self.token = self.login("a@example.com", "secret1")["accessToken"]

    def test_profile_requires_token(self) -> None:
        response = self.client.get(self.url("/auth/profile"))
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.headers.get("www-authenticate"), "Bearer")

    def test_get_and_patch_profile(self) -> None:
        profile = self.client.get(self.url("/auth/profile"), headers=self.bearer(self.token))
        self.assertEqual(profile.status_code, 200)
        self.assertEqual(profile.json()["business"]["businessName"], "Annie's Shop")
        self.assertEqual(profile.json()["firstName"], "Ann")

        patched = self.client.patch(
            self.url("/auth/profile"),
            headers=self.bearer(self.token),
            json={"lastName": "Smith", "businessName": "Annie's Store"},
        )
        self.assertEqual(patched.status_code, 200)
        profile = self.client.get(self.url("/auth/profile"), headers=self.bearer(self.token)).json()
        self.assertEqual(profile["lastName"], "Smith")
        self.assertEqual(profile["business"]["businessName"], "Annie's Store")


class TestAdminRoutes(ApiTestMixin, unittest.TestCase):
    def setUp(self) -> None:
        super().setUp()
        self.client.post(self.url("/auth/register"), json=REGISTER)
        self.user_id = self.login("a@example.com", "secret1")["user"]["id"]
        self.owner_token = self.login("a@example.com", "secret1")["accessToken"]
        create_user(self.db, "root@example.com", Role.SUPER_ADMIN, "555-0900")
        self.admin_token = self.login("root@example.com")["accessToken"]

    def test_role_guard_403_for_brand_owner_200_for_admin(self) -> None:
        denied = self.client.get(self.url("/auth/admin/users"), headers=self.bearer(self.owner_token))
        self.assertEqual(denied.status_code, 403)
        allowed = self.client.get(self.url("/auth/admin/users"), headers=self.bearer(self.admin_token))
        self.assertEqual(allowed.status_code, 200)
        body = allowed.json()
        self.assertEqual(body["meta"], {"total": 1, "page": 1, "limit": 10, "lastPage": 1})
        self.assertEqual(body["data"][0]["email"], "a@example.com")

    def test_admin_updates_user_and_404_on_missing(self) -> None:
        ok = self.client.patch(
            self.url(f"/auth/admin/user/{self.user_id}"),
            headers=self.bearer(self.admin_token),
            json={"firstName": "Annette"},
        )
        self.assertEqual(ok.status_code, 200)
        missing = self.client.patch(
            self.url("/auth/admin/user/00000000-0000-0000-0000-000000000000"),
            headers=self.bearer(self.admin_token),
            json={"firstName": "X"},
        )
        self.assertEqual(missing.status_code, 404)

    def test_non_admin_cannot_update_other_user(self) -> None:
        response = self.client.patch(
            self.url(f"/auth/admin/user/{self.user_id}"),
            headers=self.bearer(self.owner_token),
            json={"firstName": "X"},
        )
        self.assertEqual(response.status_code, 403)

    def test_soft_delete_blocks_login(self) -> None:
        denied = self.client.delete(
            self.url(f"/auth/admin/user/{self.user_id}"), headers=self.bearer(self.owner_token)
        )
        self.assertEqual(denied.status_code, 403)
        response = self.client.delete(
            self.url(f"/auth/admin/user/{self.user_id}"), headers=self.bearer(self.admin_token)
        )
        self.assertEqual(response.status_code, 200)
        login = self.client.post(
            self.url("/auth/login"), json={"email": "a@example.com", "password": "secret1"}
        )
        self.assertEqual(login.status_code, 401)

    def test_revoke_sessions(self) -> None:
        refresh_token = self.login("a@example.com", "secret1")["refreshToken"]
        response = self.client.post(
            self.url(f"/auth/admin/user/{self.user_id}/revoke-sessions"),
            headers=self.bearer(self.admin_token),
        )
        self.assertEqual(response.status_code, 200)
        self.client.cookies.clear()
        refresh = self.client.post(self.url("/auth/refresh"), json={"refreshToken": refresh_token})
        self.assertIn(refresh.status_code, (401, 403))


if __name__ == "__main__":
    unittest.main()
