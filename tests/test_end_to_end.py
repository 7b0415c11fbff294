"""End-to-end: parent registers, logs in, is refused an admin route, is deactivated, and is locked out."""

import unittest

from support import ApiTestCase

from schoolhub.models import User


class TestParentLifecycle(ApiTestCase):
    """Register → login → admin route refused → deactivated in the store → token rejected."""

    def test_scenario(self) -> None:
        register = self.client.post(
            "/api/auth/register",
            json={
                "email": "parent1@x.com",
                "password": "pw123456",
                "firstName": "Ada",
                "lastName": "Lovelace",
            },
        )
        self.assertEqual(register.status_code, 201, register.text)
        registered = register.json()
        self.assertTrue(registered["token"])
        self.assertEqual(registered["user"]["role"], "parent")
        original_token = registered["token"]
        user_id = registered["user"]["id"]

        login = self.client.post(
            "/api/auth/login", json={"email": "parent1@x.com", "password": "pw123456"}
        )
        self.assertEqual(login.status_code, 200, login.text)
        self.assertIsNotNone(login.json()["user"]["lastLogin"])
        self.assertEqual(login.json()["user"]["loginCount"], 1)

        forbidden = self.client.get("/api/admin/users", headers=self.bearer(original_token))
        self.assertEqual(forbidden.status_code, 403)
        self.assertEqual(
            forbidden.json()["error"], "Access denied. Required roles: admin, super_admin"
        )

        self.set_active(user_id, False)
        stored = self.load_user(user_id)
        self.assertIsInstance(stored, User)
        self.assertFalse(stored.is_active)

        replay = self.client.get("/api/auth/me", headers=self.bearer(original_token))
        self.assertEqual(replay.status_code, 401)
        self.assertFalse(replay.json()["success"])


if __name__ == "__main__":
    unittest.main()
