"""HTTP API tests — routes, status codes, and error payloads.

Each test runs the full FastAPI app (lifespan included) against a fresh
temporary SQLite file.
"""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from fastapi.testclient import TestClient

from fintrack.db.database import Database
from fintrack.errors import StoreError
from server.app import create_app


class ApiTestBase(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.db_path = Path(self._tmp.name) / "database" / "database.db"
        self.client = TestClient(create_app(self.db_path))
        self.client.__enter__()

    def tearDown(self):
        self.client.__exit__(None, None, None)
        self._tmp.cleanup()

    def _signup(self, username="a", password="p", email="a@x.com") -> dict:
        resp = self.client.post(
            "/api/users", json={"username": username, "password": password, "email": email}
        )
        self.assertEqual(resp.status_code, 200, resp.text)
        return resp.json()

    def _add_transaction(self, userid=1, **overrides) -> dict:
        body = {"userid": userid, "isExpense": True, "amount": 500, "categoryid": 2, "description": "coffee"}
        body.update(overrides)
        resp = self.client.post("/api/transactions", json=body)
        self.assertEqual(resp.status_code, 200, resp.text)
        return resp.json()


# ===========================================================================
# End-to-end scenario
# ===========================================================================

class TestScenario(ApiTestBase):

    def test_signup_transaction_list_delete(self):
        user = self._signup()
        self.assertEqual(user["userid"], 1)
        self.assertEqual(user["username"], "a")
        self.assertEqual(user["email"], "a@x.com")
        self.assertIsInstance(user["timestamp"], str)
        self.assertNotIn("password", user)

        txn = self._add_transaction(userid=1)
        self.assertEqual(txn["transactionid"], 1)
        self.assertEqual(txn["userid"], 1)
        self.assertEqual(txn["amount"], 500)
        self.assertEqual(txn["isExpense"], True)
        self.assertEqual(txn["categoryid"], 2)
        self.assertEqual(txn["description"], "coffee")

        listed = self.client.get("/api/transactions/1")
        self.assertEqual(listed.status_code, 200)
        self.assertEqual([t["transactionid"] for t in listed.json()], [1])
        self.assertEqual(listed.json()[0]["amount"], 500)

        deleted = self.client.delete("/api/transactions/1")
        self.assertEqual(deleted.status_code, 200)
        self.assertEqual(deleted.json(), {"message": "Transaction 1 deleted successfully"})

        again = self.client.delete("/api/transactions/1")
        self.assertEqual(again.status_code, 404)
        self.assertEqual(again.json(), {"error": "Transaction not found"})

        self.assertEqual(self.client.get("/api/transactions/1").json(), [])


# ===========================================================================
# Health
# ===========================================================================

class TestHealth(ApiTestBase):

    def test_healthy(self):
        resp = self.client.get("/health")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["status"], "healthy")
        self.assertIn("timestamp", resp.json())

    def test_store_unreachable(self):
        with patch.object(Database, "fetchone", side_effect=StoreError("disk I/O error")):
            resp = self.client.get("/health")
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.json(), {"status": "error", "message": "Database connection failed"})


# ===========================================================================
# Users
# ===========================================================================

class TestUserRoutes(ApiTestBase):

    def test_list_users(self):
        self._signup("a", "p", "a@x.com")
        self._signup("b", "q", "b@x.com")
        resp = self.client.get("/api/users")
        self.assertEqual(resp.status_code, 200)
        users = resp.json()
        self.assertEqual({u["username"] for u in users}, {"a", "b"})
        self.assertIn("resetTokenId", users[0])

    def test_userids_increase(self):
        first = self._signup("a")
        second = self._signup("b")
        self.assertGreater(second["userid"], first["userid"])

    def test_signup_missing_field_is_store_error(self):
        resp = self.client.post("/api/users", json={"username": "a", "email": "a@x.com"})
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.json(), {"error": "NOT NULL constraint failed: users.password"})

    def test_assign_reset_token(self):
        self._signup()
        resp = self.client.put("/api/users", json={"userid": 1, "tokenid": 3})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"userid": 1, "tokenid": 3})
        users = self.client.get("/api/users").json()
        self.assertEqual(users[0]["resetTokenId"], "3")

    def test_assign_reset_token_unknown_user(self):
        resp = self.client.put("/api/users", json={"userid": 9, "tokenid": 3})
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json(), {"error": "User 9 not found"})

    def test_update_password(self):
        self._signup(password="old")
        resp = self.client.put("/api/password", json={"userid": 1, "password": "new"})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"userid": 1, "password": "new"})
        self.assertEqual(self.client.get("/api/users").json()[0]["password"], "new")

    def test_update_password_unknown_user(self):
        resp = self.client.put("/api/password", json={"userid": 9, "password": "new"})
        self.assertEqual(resp.status_code, 404)


# ===========================================================================
# Reset tokens
# ===========================================================================

class TestResetTokenRoutes(ApiTestBase):

    def test_create_and_find(self):
        created = self.client.post(
            "/api/resettoken", json={"token": "abc", "expiresAt": "2030-01-01T00:00:00.000Z"}
        )
        self.assertEqual(created.status_code, 200)
        self.assertEqual(created.json(), {"id": 1, "token": "abc", "expiresAt": "2030-01-01T00:00:00.000Z"})

        found = self.client.get("/api/resettoken", params={"token": "abc"})
        self.assertEqual(found.status_code, 200)
        self.assertEqual(found.json(), [created.json()])

    def test_find_unknown(self):
        resp = self.client.get("/api/resettoken", params={"token": "nope"})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), [])

    def test_find_without_query(self):
        resp = self.client.get("/api/resettoken")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), [])

    def test_create_missing_expiry(self):
        resp = self.client.post("/api/resettoken", json={"token": "abc"})
        self.assertEqual(resp.status_code, 500)
        self.assertIn("resetTokens.expiresAt", resp.json()["error"])


# ===========================================================================
# Transactions
# ===========================================================================

class TestTransactionRoutes(ApiTestBase):

    def test_create_missing_amount(self):
        self._signup()
        resp = self.client.post(
            "/api/transactions", json={"userid": 1, "isExpense": True, "categoryid": 2}
        )
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.json(), {"error": "NOT NULL constraint failed: transactions.amount"})
        self.assertEqual(self.client.get("/api/transactions/1").json(), [])

    def test_list_scoped_to_user(self):
        self._signup("a")
        self._signup("b", email="b@x.com")
        self._add_transaction(userid=1)
        self._add_transaction(userid=2, isExpense=False, amount=9000, description="salary")
        resp = self.client.get("/api/transactions/2")
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(len(body), 1)
        self.assertEqual(body[0]["description"], "salary")
        self.assertEqual(body[0]["isExpense"], False)
        self.assertNotIn("userid", body[0])

    def test_delete_unknown(self):
        resp = self.client.delete("/api/transactions/42")
        self.assertEqual(resp.status_code, 404)

    def test_delete_unknown_keeps_other_user_data(self):
        self._signup()
        self._add_transaction(userid=1)
        self.client.delete("/api/transactions/42")
        self.assertEqual(len(self.client.get("/api/transactions/1").json()), 1)

    def test_delete_non_numeric_id_not_found(self):
        resp = self.client.delete("/api/transactions/abc")
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json(), {"error": "Transaction not found"})

    def test_list_non_numeric_user_empty(self):
        self._signup()
        self._add_transaction(userid=1)
        resp = self.client.get("/api/transactions/abc")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), [])

    def test_fractional_amount_reaches_store(self):
        self._signup()
        txn = self._add_transaction(userid=1, amount=12.5)
        self.assertEqual(txn["amount"], 12.5)
        listed = self.client.get("/api/transactions/1").json()
        self.assertEqual(listed[0]["amount"], 12.5)


class TestUntypedBodies(ApiTestBase):

    def test_numeric_username_stored(self):
        resp = self.client.post(
            "/api/users", json={"username": 123, "password": "p", "email": "a@x.com"}
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["username"], 123)
        users = self.client.get("/api/users").json()
        self.assertEqual(users[0]["username"], "123")

    def test_unbindable_value_is_store_error(self):
        resp = self.client.post(
            "/api/users", json={"username": {"nested": 1}, "password": "p", "email": "a@x.com"}
        )
        self.assertEqual(resp.status_code, 500)
        self.assertIn("error", resp.json())
        self.assertEqual(self.client.get("/api/users").json(), [])


# ===========================================================================
# Lifecycle & CORS
# ===========================================================================

class TestLifecycle(unittest.TestCase):

    def test_server_is_regular_package(self):
        import server
        # Namespace packages have no __file__ and are skipped by packages.find.
        self.assertIsNotNone(server.__file__)
        self.assertTrue(server.__file__.endswith("__init__.py"))

    def test_store_file_created_and_closed(self):
        with tempfile.TemporaryDirectory() as tmp:
            db_path = Path(tmp) / "nested" / "fin.db"
            app = create_app(db_path)
            with TestClient(app) as client:
                client.get("/health")
                self.assertTrue(db_path.exists())
            self.assertIsNone(app.state.db._conn)

    def test_data_survives_restart(self):
        with tempfile.TemporaryDirectory() as tmp:
            db_path = Path(tmp) / "fin.db"
            with TestClient(create_app(db_path)) as client:
                client.post("/api/users", json={"username": "a", "password": "p", "email": "a@x.com"})
            with TestClient(create_app(db_path)) as client:
                users = client.get("/api/users").json()
            self.assertEqual([u["username"] for u in users], ["a"])

    def test_cors_preflight(self):
        with tempfile.TemporaryDirectory() as tmp:
            with TestClient(create_app(Path(tmp) / "fin.db")) as client:
                resp = client.options(
                    "/api/users",
                    headers={
                        "Origin": "http://example.com",
                        "Access-Control-Request-Method": "DELETE",
                    },
                )
            self.assertEqual(resp.status_code, 200)
            self.assertEqual(resp.headers["access-control-allow-origin"], "*")


if __name__ == "__main__":
    unittest.main()
