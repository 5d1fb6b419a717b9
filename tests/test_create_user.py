"""Tests for the create_user CLI."""

import asyncio
import io
import unittest
from contextlib import redirect_stderr, redirect_stdout
from unittest.mock import MagicMock, patch

from provision.core.store import InMemoryUserStore
from provision.schemas.user import AuthRequest
from provision.scripts.create_user import main
from provision.services.authenticator import authenticate


def _settings() -> MagicMock:
    settings = MagicMock()
    settings.PASSWORD_MIN_LEN = 10
    settings.BCRYPT_ROUNDS = 4
    return settings


class TestCreateUserCli(unittest.TestCase):
    """main upserts through the same path as POST /user."""

    def setUp(self) -> None:
        self.store = InMemoryUserStore()
        store_patch = patch("provision.scripts.create_user.get_user_store", return_value=self.store)
        settings_patch = patch("provision.scripts.create_user.get_settings", return_value=_settings())
        store_patch.start()
        settings_patch.start()
        self.addCleanup(store_patch.stop)
        self.addCleanup(settings_patch.stop)

    def test_creates_user(self) -> None:
        out = io.StringIO()
        with redirect_stdout(out):
            code = main(["admin", "abcdefghij", "--sysop", "--section", "reports"])
        self.assertEqual(code, 0)
        self.assertIn("admin", out.getvalue())
        doc = asyncio.run(self.store.get("admin")).document
        self.assertTrue(doc["sysop"])
        self.assertTrue(doc["active"])
        self.assertEqual(doc["sections"], ["reports"])
        outcome = asyncio.run(
            authenticate(AuthRequest(id="admin", password="abcdefghij"), self.store)
        )
        self.assertTrue(outcome.valid)

    def test_weak_password(self) -> None:
        err = io.StringIO()
        with redirect_stderr(err):
            code = main(["admin", "short"])
        self.assertEqual(code, 1)
        self.assertIn("at least 10", err.getvalue())
        self.assertIsNone(asyncio.run(self.store.get("admin")).document)

    def test_empty_id(self) -> None:
        with redirect_stderr(io.StringIO()):
            self.assertEqual(main(["  ", "abcdefghij"]), 1)


if __name__ == "__main__":
    unittest.main()
