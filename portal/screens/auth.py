"""Login, signup, OAuth callback and password screens."""

from typing import Optional

from portal.integrations.gateway import PortalAPIError
from portal.schemas import Role

from .base import BaseScreen, FormValidationError, LOGIN_ROUTE, home_route

MIN_PASSWORD_LENGTH = 6
GOOGLE_FAILED_ROUTE = "/login?error=google_auth_failed"


class AuthScreen(BaseScreen):
    """Credential and OAuth entry points.

    Every successful path stores the token in the session and returns the
    route to navigate to next.
    """

    screen_name = "auth"

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.error: Optional[str] = None
        self.redirect_to: Optional[str] = None

    async def load(self) -> None:
        """Skip the form when a session is already active."""
        if self.session.is_authenticated:
            self.redirect_to = home_route(self.session.role)

    async def login(self, email: str, password: str) -> Optional[str]:
        """Log in with credentials.

        Returns:
            Home route for the user's role, or None if login failed
        """
        self.error = None
        if not email or not password:
            raise FormValidationError("Email and password are required", field="email")

        try:
            token = await self.api.login(email, password)
        except PortalAPIError as e:
            self.error = e.message or "Invalid credentials"
            self.report(e, self.error)
            return None

        self.session.login(token.token, token.role)
        self.redirect_to = home_route(token.role)
        return self.redirect_to

    async def signup(
        self,
        email: str,
        password: str,
        confirm_password: str,
        role: Role,
        name: str = "",
    ) -> Optional[str]:
        """Create an account, then log straight in.

        Returns:
            Home route for the chosen role, or None if either step failed
        """
        self.error = None
        if password != confirm_password:
            raise FormValidationError("Passwords do not match", field="confirm_password")

        try:
            await self.api.signup(email, password, role, name=name)
            token = await self.api.login(email, password)
        except PortalAPIError as e:
            self.error = e.message or "Failed to create account"
            self.report(e, self.error)
            return None

        self.session.login(token.token, token.role)
        self.redirect_to = home_route(Role(role))
        return self.redirect_to

    def google_login_url(self, role: Role = Role.CANDIDATE) -> str:
        return self.api.google_login_url(role)

    def complete_google_login(self, token: Optional[str], role: Optional[str]) -> str:
        """Handle the OAuth redirect carrying ``token`` and ``role`` parameters."""
        if not token or not role:
            self.logger.warning("OAuth callback without token or role")
            return GOOGLE_FAILED_ROUTE

        try:
            parsed_role = Role(role)
        except ValueError:
            self.logger.warning("OAuth callback with unknown role", role=role)
            return LOGIN_ROUTE

        self.session.login(token, parsed_role)
        if parsed_role == Role.ADMIN:
            return LOGIN_ROUTE
        return home_route(parsed_role)

    async def set_password(self, password: str, confirm_password: str) -> bool:
        """Set a password for an account created through OAuth only."""
        self.error = None
        if len(password) < MIN_PASSWORD_LENGTH:
            raise FormValidationError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters", field="password"
            )
        if password != confirm_password:
            raise FormValidationError("Passwords do not match", field="confirm_password")

        try:
            await self.api.set_password(password)
        except PortalAPIError as e:
            self.error = e.message or "Failed to set password"
            self.report(e, self.error)
            return False

        self.notifier.success("Password updated successfully")
        return True

    def logout(self) -> str:
        self.session.clear()
        return LOGIN_ROUTE
