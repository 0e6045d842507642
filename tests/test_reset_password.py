import asyncio
import sqlite3

import pytest

import reset_password
from oauth_identity_api.app.core.security import verify_password
from oauth_identity_api.app.schemas.user import UserRequest
from oauth_identity_api.app.services.user_service import UserService


@pytest.fixture()
def alice():
    return asyncio.run(UserService().create_or_update(UserRequest(username="alice", password="old-pw")))


def test_reset_password_rehashes(database, alice, db_rows, capsys):
    code = reset_password.main(["--db", str(database), "--user-id", str(alice.id), "--password", "new-pw"])

    stored = db_rows("SELECT username, password FROM users WHERE id = ?", (alice.id,))[0]
    assert code == 0
    assert stored["username"] == "alice"
    assert verify_password("new-pw", stored["password"])
    assert "Password updated for user: alice" in capsys.readouterr().out


def test_reset_password_prompts_when_no_password_given(database, alice, db_rows, monkeypatch):
    monkeypatch.setattr(reset_password.getpass, "getpass", lambda prompt: "typed-pw")

    code = reset_password.main(["--db", str(database), "--user-id", str(alice.id)])

    stored = db_rows("SELECT password FROM users WHERE id = ?", (alice.id,))[0]
    assert code == 0
    assert verify_password("typed-pw", stored["password"])


def test_reset_password_rejects_empty_password(database, alice, monkeypatch):
    monkeypatch.setattr(reset_password.getpass, "getpass", lambda prompt: "")

    assert reset_password.main(["--db", str(database), "--user-id", str(alice.id)]) == 1


def test_reset_password_unknown_user(database):
    assert reset_password.main(["--db", str(database), "--user-id", "99", "--password", "x"]) == 2


def test_reset_password_missing_db(tmp_path):
    assert reset_password.main(["--db", str(tmp_path / "nope.db"), "--user-id", "1", "--password", "x"]) == 1


def test_reset_password_unmigrated_db(tmp_path, capsys):
    empty = tmp_path / "empty.db"
    sqlite3.connect(str(empty)).close()

    code = reset_password.main(["--db", str(empty), "--user-id", "1", "--password", "x"])

    assert code == 1
    assert "[!] Cannot use DB" in capsys.readouterr().err
