"""Shared base class for API tests: fresh schema per test and account helpers."""

import unittest

from fastapi.testclient import TestClient

from schoolhub.core.database import SessionLocal, engine
from schoolhub.main import app
from schoolhub.models import Base, User
from schoolhub.services.users import create_account

DEFAULT_PASSWORD = "pw123456"


class ApiTestCase(unittest.TestCase):
    """Creates all tables before each test and drops them afterwards."""

    def setUp(self) -> None:
        Base.metadata.create_all(bind=engine)
        self.client = TestClient(app)

    def tearDown(self) -> None:
        self.client.close()
        Base.metadata.drop_all(bind=engine)

    def make_user(
        self,
        email: str,
        role: str = "parent",
        password: str = DEFAULT_PASSWORD,
        is_active: bool = True,
        **profile: str,
    ) -> int:
        """Insert a user directly through the service layer and return its id."""
        db = SessionLocal()
        try:
            user = create_account(db, email=email, password=password, role=role, **profile)
            if not is_active:
                user.is_active = False
                db.commit()
            return user.id
        finally:
            db.close()

    def load_user(self, user_id: int) -> User | None:
        """Fetch a user row in a throwaway session (detached, fully loaded)."""
        db = SessionLocal()
        try:
            user = db.get(User, user_id)
            if user is not None:
                db.expunge(user)
            return user
        finally:
            db.close()

    def set_active(self, user_id: int, is_active: bool) -> None:
        """Flip the active flag in the store, bypassing the API."""
        db = SessionLocal()
        try:
            db.query(User).filter(User.id == user_id).update({User.is_active: is_active})
            db.commit()
        finally:
            db.close()

    def login(self, email: str, password: str = DEFAULT_PASSWORD) -> str:
        """Log in through the API and return the token."""
        response = self.client.post(
            "/api/auth/login", json={"email": email, "password": password}
        )
        self.assertEqual(response.status_code, 200, response.text)
        return response.json()["token"]

    @staticmethod
    def bearer(token: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {token}"}
