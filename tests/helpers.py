"""Shared fixtures: a fresh schema per test and helpers to create users."""

import unittest

from app.core.database import SessionLocal, engine
from app.core.security import get_password_hasher
from app.models import Base, User
from app.services.users import register


class DatabaseTestCase(unittest.TestCase):
    """Creates all tables before each test and drops them afterwards."""

    def setUp(self) -> None:
        Base.metadata.create_all(engine)
        self.db = SessionLocal()

    def tearDown(self) -> None:
        self.db.close()
        Base.metadata.drop_all(engine)

    def make_user(
        self,
        username: str,
        password: str = "secret1",
        first_name: str | None = None,
        last_name: str = "Tester",
        phone: str = "555-0100",
    ) -> User:
        return register(
            self.db,
            get_password_hasher(),
            username=username,
            password=password,
            first_name=first_name or username.capitalize(),
            last_name=last_name,
            phone=phone,
        )
