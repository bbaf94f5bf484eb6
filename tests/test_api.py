"""Endpoint tests through FastAPI's TestClient against an in-memory database."""

import unittest
from unittest.mock import patch

from fastapi.testclient import TestClient

from app.core.database import SessionLocal
from app.core.security import get_token_service
from app.main import app
from app.models import User
from tests.helpers import DatabaseTestCase


def _registration(username: str, **overrides: str) -> dict[str, str]:
    data = {
        "username": username,
        "password": "secret1",
        "first_name": username.capitalize(),
        "last_name": "Tester",
        "phone": "555-0100",
    }
    data.update(overrides)
    return data


def _auth(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


class ApiTestCase(DatabaseTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.client = TestClient(app)

    def register(self, username: str, **overrides: str) -> str:
        resp = self.client.post("/register", json=_registration(username, **overrides))
        self.assertEqual(resp.status_code, 201, resp.text)
        return resp.json()["token"]

    def send(self, token: str, to_username: str, body: str = "hi") -> dict:
        resp = self.client.post(
            "/messages",
            json={"to_username": to_username, "body": body},
            headers=_auth(token),
        )
        self.assertEqual(resp.status_code, 201, resp.text)
        return resp.json()["message"]


class TestEndToEnd(ApiTestCase):
    """alice messages bob; only bob may read it, carol may not even view it."""

    def test_message_exchange_with_access_control(self) -> None:
        alice = self.register("alice", phone="555-0100")
        bob = self.register("bob", phone="555-0101")
        carol = self.register("carol", phone="555-0102")

        resp = self.client.post(
            "/messages",
            json={"to_username": "bob", "body": "hi"},
            headers=_auth(alice),
        )
        self.assertEqual(resp.status_code, 201)
        message = resp.json()["message"]
        self.assertEqual(message["from_username"], "alice")
        self.assertEqual(message["to_username"], "bob")
        self.assertEqual(message["body"], "hi")
        self.assertIsNone(message["read_at"])
        message_id = message["id"]

        resp = self.client.get(f"/messages/{message_id}", headers=_auth(bob))
        self.assertEqual(resp.status_code, 200)
        detail = resp.json()["message"]
        self.assertEqual(detail["id"], message_id)
        self.assertEqual(detail["body"], "hi")
        self.assertEqual(detail["from_user"]["username"], "alice")
        self.assertEqual(detail["from_user"]["phone"], "555-0100")
        self.assertEqual(detail["to_user"]["username"], "bob")
        self.assertIsNone(detail["read_at"])

        resp = self.client.get(f"/messages/{message_id}", headers=_auth(carol))
        self.assertEqual(resp.status_code, 401)

        resp = self.client.post(f"/messages/{message_id}/read", headers=_auth(alice))
        self.assertEqual(resp.status_code, 401)

        resp = self.client.post(f"/messages/{message_id}/read", headers=_auth(bob))
        self.assertEqual(resp.status_code, 200)
        read = resp.json()["message"]
        self.assertEqual(read["id"], message_id)
        self.assertIsNotNone(read["read_at"])

        resp = self.client.get(f"/messages/{message_id}", headers=_auth(alice))
        self.assertEqual(resp.status_code, 200)
        self.assertIsNotNone(resp.json()["message"]["read_at"])


class TestRegisterRoute(ApiTestCase):
    def test_register_returns_token_for_username(self) -> None:
        token = self.register("alice")
        self.assertEqual(get_token_service().verify(token), "alice")

    def test_register_records_login(self) -> None:
        self.register("alice")
        with SessionLocal() as db:
            user = db.get(User, "alice")
            self.assertIsNotNone(user.join_at)
            self.assertIsNotNone(user.last_login_at)

    def test_missing_field_is_400(self) -> None:
        data = _registration("alice")
        del data["phone"]
        resp = self.client.post("/register", json=data)
        self.assertEqual(resp.status_code, 400)
        error = resp.json()["error"]
        self.assertEqual(error["status"], 400)
        self.assertIn("phone", error["message"])

    def test_empty_field_is_400(self) -> None:
        resp = self.client.post("/register", json=_registration("alice", first_name=""))
        self.assertEqual(resp.status_code, 400)

    def test_duplicate_username_is_409(self) -> None:
        self.register("alice")
        resp = self.client.post("/register", json=_registration("alice"))
        self.assertEqual(resp.status_code, 409)
        self.assertIn("alice", resp.json()["error"]["message"])


class TestLoginRoute(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.register("alice")

    def test_login_returns_token_and_updates_last_login(self) -> None:
        with SessionLocal() as db:
            before = db.get(User, "alice").last_login_at
        resp = self.client.post("/login", json={"username": "alice", "password": "secret1"})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(get_token_service().verify(resp.json()["token"]), "alice")
        with SessionLocal() as db:
            after = db.get(User, "alice").last_login_at
        self.assertGreaterEqual(after, before)

    def test_long_password_from_service_can_log_in(self) -> None:
        password = "x" * 200
        self.make_user("dave", password=password)
        resp = self.client.post("/login", json={"username": "dave", "password": password})
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(get_token_service().verify(resp.json()["token"]), "dave")

    def test_wrong_password_is_400(self) -> None:
        resp = self.client.post("/login", json={"username": "alice", "password": "nope"})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(
            resp.json(),
            {"error": {"message": "Invalid username/password", "status": 400}},
        )

    def test_unknown_user_is_400(self) -> None:
        resp = self.client.post("/login", json={"username": "nobody", "password": "secret1"})
        self.assertEqual(resp.status_code, 400)

    def test_missing_password_is_400(self) -> None:
        resp = self.client.post("/login", json={"username": "alice"})
        self.assertEqual(resp.status_code, 400)


class TestMessageRoutes(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.alice = self.register("alice")
        self.bob = self.register("bob")

    def test_missing_token_is_401(self) -> None:
        resp = self.client.post("/messages", json={"to_username": "bob", "body": "hi"})
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.headers.get("www-authenticate"), "Bearer")

    def test_invalid_token_is_401(self) -> None:
        resp = self.client.get("/messages/1", headers=_auth("garbage"))
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json()["error"]["message"], "Invalid token")

    def test_sender_comes_from_token_not_body(self) -> None:
        resp = self.client.post(
            "/messages",
            json={"to_username": "alice", "body": "hi", "from_username": "alice"},
            headers=_auth(self.bob),
        )
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.json()["message"]["from_username"], "bob")

    def test_unknown_recipient_is_400(self) -> None:
        resp = self.client.post(
            "/messages",
            json={"to_username": "nobody", "body": "hi"},
            headers=_auth(self.alice),
        )
        self.assertEqual(resp.status_code, 400)

    def test_empty_body_is_400(self) -> None:
        resp = self.client.post(
            "/messages",
            json={"to_username": "bob", "body": ""},
            headers=_auth(self.alice),
        )
        self.assertEqual(resp.status_code, 400)

    def test_sender_can_view(self) -> None:
        message = self.send(self.alice, "bob")
        resp = self.client.get(f"/messages/{message['id']}", headers=_auth(self.alice))
        self.assertEqual(resp.status_code, 200)

    def test_missing_message_is_404(self) -> None:
        resp = self.client.get("/messages/9999", headers=_auth(self.alice))
        self.assertEqual(resp.status_code, 404)
        resp = self.client.post("/messages/9999/read", headers=_auth(self.alice))
        self.assertEqual(resp.status_code, 404)

    def test_out_of_range_id_is_404(self) -> None:
        for message_id in ("99999999999999999999", "2147483648", "0", "-1"):
            resp = self.client.get(f"/messages/{message_id}", headers=_auth(self.alice))
            self.assertEqual(resp.status_code, 404, message_id)
            resp = self.client.post(
                f"/messages/{message_id}/read", headers=_auth(self.bob)
            )
            self.assertEqual(resp.status_code, 404, message_id)

    def test_mark_read_twice_is_allowed(self) -> None:
        message = self.send(self.alice, "bob")
        url = f"/messages/{message['id']}/read"
        self.assertEqual(self.client.post(url, headers=_auth(self.bob)).status_code, 200)
        self.assertEqual(self.client.post(url, headers=_auth(self.bob)).status_code, 200)

    def test_token_for_unregistered_user_is_accepted_but_cannot_send(self) -> None:
        ghost = get_token_service().issue("ghost")
        resp = self.client.post(
            "/messages",
            json={"to_username": "bob", "body": "boo"},
            headers=_auth(ghost),
        )
        self.assertEqual(resp.status_code, 400)


class TestUserRoutes(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.alice = self.register("alice", last_name="Zimmer")
        self.bob = self.register("bob", last_name="Abbott")

    def test_list_users_requires_login(self) -> None:
        self.assertEqual(self.client.get("/users").status_code, 401)

    def test_list_users_public_fields_sorted(self) -> None:
        resp = self.client.get("/users", headers=_auth(self.alice))
        self.assertEqual(resp.status_code, 200)
        users = resp.json()["users"]
        self.assertEqual([u["username"] for u in users], ["bob", "alice"])
        self.assertEqual(
            set(users[0]), {"username", "first_name", "last_name", "phone"}
        )

    def test_own_profile_has_timestamps(self) -> None:
        resp = self.client.get("/users/alice", headers=_auth(self.alice))
        self.assertEqual(resp.status_code, 200)
        user = resp.json()["user"]
        self.assertEqual(user["username"], "alice")
        self.assertIsNotNone(user["join_at"])
        self.assertIsNotNone(user["last_login_at"])
        self.assertNotIn("password_hash", user)

    def test_other_users_profile_is_401(self) -> None:
        resp = self.client.get("/users/alice", headers=_auth(self.bob))
        self.assertEqual(resp.status_code, 401)

    def test_messages_to_and_from(self) -> None:
        self.send(self.alice, "bob", "one")
        self.send(self.alice, "bob", "two")

        resp = self.client.get("/users/bob/to", headers=_auth(self.bob))
        self.assertEqual(resp.status_code, 200)
        received = resp.json()["messages"]
        self.assertEqual([m["body"] for m in received], ["two", "one"])
        self.assertEqual(received[0]["from_user"]["username"], "alice")

        resp = self.client.get("/users/alice/from", headers=_auth(self.alice))
        self.assertEqual(resp.status_code, 200)
        sent = resp.json()["messages"]
        self.assertEqual([m["body"] for m in sent], ["one", "two"])
        self.assertEqual(sent[0]["to_user"]["username"], "bob")

    def test_other_users_messages_are_401(self) -> None:
        resp = self.client.get("/users/bob/to", headers=_auth(self.alice))
        self.assertEqual(resp.status_code, 401)


class TestHealthAndErrors(ApiTestCase):
    def test_root(self) -> None:
        self.assertEqual(self.client.get("/").json(), {"message": "Messagely API"})

    def test_health_reports_database(self) -> None:
        resp = self.client.get("/health/")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["status"], "ok")
        self.assertEqual(resp.json()["database"], "connected")

    def test_openapi_documents_error_statuses(self) -> None:
        paths = app.openapi()["paths"]
        register = paths["/register"]["post"]["responses"]
        self.assertIn("409", register)
        read = paths["/messages/{message_id}/read"]["post"]["responses"]
        for status_code in ("400", "401", "404"):
            self.assertIn(status_code, read)

    def test_unexpected_error_is_generic_500(self) -> None:
        token = self.register("alice")
        client = TestClient(app, raise_server_exceptions=False)
        with patch(
            "app.services.messages.get_message",
            side_effect=RuntimeError("connection to db lost"),
        ):
            resp = client.get("/messages/1", headers=_auth(token))
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(
            resp.json(), {"error": {"message": "Internal server error", "status": 500}}
        )


if __name__ == "__main__":
    unittest.main()
