"""Tests for the persisted auth session."""

import json
import os
import stat
from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from portal.schemas import Role
from portal.session import AuthSession


class TestPersistence:
    """Session file round trip."""

    def test_login_then_restore_in_new_process(self, session):
        session.login("tok-1", Role.CANDIDATE)

        restored = AuthSession(path=str(session.path))

        assert restored.restore() is True
        assert restored.token == "tok-1"
        assert restored.role == Role.CANDIDATE
        assert restored.is_authenticated

    def test_write_leaves_no_temp_file(self, session):
        session.login("tok-1", Role.INTERVIEWER)

        assert json.loads(session.path.read_text()) == {"token": "tok-1", "role": "interviewer"}
        assert not session.path.with_name(session.path.name + ".tmp").exists()

    def test_clear_removes_file(self, session):
        session.login("tok-1", Role.CANDIDATE)

        session.clear()
        session.clear()  # Second call is a no-op

        assert not session.path.exists()
        assert session.token is None
        assert session.role is None

    def test_restore_without_file(self, session):
        assert session.restore() is False
        assert not session.is_authenticated

    def test_restore_ignores_corrupt_file(self, session):
        session.path.write_text("{not json")

        assert session.restore() is False

    def test_restore_requires_known_role(self, session):
        session.path.write_text(json.dumps({"token": "tok", "role": "superuser"}))

        assert session.restore() is False
        assert session.token is None

    def test_restore_requires_token(self, session):
        session.path.write_text(json.dumps({"token": "", "role": "candidate"}))

        assert session.restore() is False


class TestClaims:
    """Unverified JWT claims."""

    def test_user_id_and_expiry(self, session):
        exp = datetime.now(timezone.utc).replace(microsecond=0) + timedelta(hours=1)
        token = jwt.encode({"sub": "user-1", "exp": int(exp.timestamp())}, "secret", algorithm="HS256")
        session.login(token, Role.CANDIDATE)

        assert session.user_id == "user-1"
        assert session.expires_at == exp

    def test_opaque_token_has_no_claims(self, session):
        session.login("not-a-jwt", Role.CANDIDATE)

        assert session.claims == {}
        assert session.user_id is None
        assert session.expires_at is None


@pytest.mark.skipif(os.name != "posix", reason="POSIX file modes")
class TestPermissions:
    """Session file access."""

    def test_file_is_owner_only(self, session):
        old_umask = os.umask(0o022)
        try:
            session.login("tok-1", Role.CANDIDATE)
        finally:
            os.umask(old_umask)

        assert stat.S_IMODE(os.stat(session.path).st_mode) == 0o600

    def test_stale_temp_file_is_tightened(self, session):
        temp_path = session.path.with_name(session.path.name + ".tmp")
        temp_path.write_text("{}")
        os.chmod(temp_path, 0o644)

        session.login("tok-1", Role.CANDIDATE)

        assert stat.S_IMODE(os.stat(session.path).st_mode) == 0o600
