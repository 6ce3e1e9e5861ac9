"""Authenticated session store persisted between runs."""

import json
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

import structlog
from jose import jwt, JWTError

from portal.config import settings
from portal.schemas.auth import Role

logger = structlog.get_logger()


class AuthSession:
    """Holds the auth token and role for one client process.

    The session is passed explicitly to every screen and to the API
    gateway. Call restore() once at start-up and clear() on logout.
    """

    def __init__(self, path: Optional[str] = None):
        """Initialize an empty session.

        Args:
            path: Session file location, defaults to settings.SESSION_FILE
        """
        self.path = Path(os.path.expanduser(path or settings.SESSION_FILE))
        self.token: Optional[str] = None
        self.role: Optional[Role] = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    def restore(self) -> bool:
        """Load token and role from the session file.

        Returns:
            True if a complete session was restored
        """
        if not self.path.exists():
            return False

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            token = data.get("token")
            role = Role(data.get("role"))
        except (OSError, ValueError, AttributeError) as e:
            logger.warning("Ignoring unreadable session file", path=str(self.path), error=str(e))
            return False

        if not token:
            return False

        self.token = token
        self.role = role
        logger.debug("Session restored", role=role.value)
        return True

    def login(self, token: str, role: Role) -> None:
        """Store a freshly issued token and persist it."""
        self.token = token
        self.role = Role(role)
        self._write()
        logger.info("Session started", role=self.role.value)

    def clear(self) -> None:
        """Forget the token and remove the session file."""
        self.token = None
        self.role = None
        try:
            self.path.unlink()
        except FileNotFoundError:
            pass
        logger.info("Session cleared")

    @property
    def claims(self) -> dict[str, Any]:
        """Unverified token claims (the server is the one that verifies)."""
        if not self.token:
            return {}
        try:
            return jwt.get_unverified_claims(self.token)
        except JWTError:
            return {}

    @property
    def user_id(self) -> Optional[str]:
        return self.claims.get("sub")

    @property
    def expires_at(self) -> Optional[datetime]:
        """Token expiration as datetime."""
        exp = self.claims.get("exp")
        if exp:
            return datetime.fromtimestamp(exp, tz=timezone.utc)
        return None

    def _write(self) -> None:
        """Write session data atomically (write to temp, then rename)."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        data = {"token": self.token, "role": self.role.value}

        temp_path = f"{self.path}.tmp"
        # Owner-only; the file holds a bearer token
        fd = os.open(temp_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            os.chmod(temp_path, 0o600)
            json.dump(data, f)

        os.replace(temp_path, self.path)
