"""Base class for screen controllers."""

from abc import ABC, abstractmethod
from typing import Optional, Tuple

import structlog

from portal.integrations.gateway import PortalAPIError
from portal.notifications import Notifier
from portal.schemas import Role
from portal.services.portal_api import PortalAPI
from portal.session import AuthSession

LOGIN_ROUTE = "/login"


def home_route(role: Optional[Role]) -> str:
    """Landing route for a role."""
    if role == Role.CANDIDATE:
        return "/candidate/dashboard"
    if role in (Role.INTERVIEWER, Role.ADMIN):
        return "/interviewer/dashboard"
    return LOGIN_ROUTE


class BaseScreen(ABC):
    """Abstract base class for screen controllers.

    A screen fetches what it shows, keeps the resulting view state and
    turns failed requests into error notices. Guarded screens list the
    roles allowed in ``required_roles``.
    """

    # Override in subclasses
    screen_name: str = "base"
    required_roles: Tuple[Role, ...] = ()

    def __init__(self, api: PortalAPI, session: AuthSession, notifier: Optional[Notifier] = None):
        """Initialize screen.

        Args:
            api: Backend API
            session: Current auth session
            notifier: Channel for user notices
        """
        self.api = api
        self.session = session
        self.notifier = notifier or Notifier()
        self.loading = False
        self.logger = structlog.get_logger().bind(screen=self.screen_name)

    def ensure_access(self) -> None:
        """Redirect-if-unauthenticated guard.

        Raises:
            NotAuthenticatedError: No token, or a role this screen does not serve
        """
        if not self.required_roles:
            return
        if not self.session.is_authenticated or self.session.role not in self.required_roles:
            self.logger.warning(
                "Access denied",
                role=self.session.role.value if self.session.role else None,
                required=[r.value for r in self.required_roles],
            )
            raise NotAuthenticatedError(LOGIN_ROUTE)

    @abstractmethod
    async def load(self) -> None:
        """Fetch everything the screen displays."""
        pass

    async def refresh(self) -> None:
        """Full re-fetch after a mutation."""
        await self.load()

    def report(self, error: PortalAPIError, message: str) -> None:
        """Log a failed request and show ``message`` as an error notice."""
        self.logger.error("Request failed", error=error.message, status_code=error.status_code)
        self.notifier.error(message)


class NotAuthenticatedError(Exception):
    """Raised when a guarded screen is opened without a suitable session."""

    def __init__(self, redirect_to: str = LOGIN_ROUTE):
        self.redirect_to = redirect_to
        super().__init__(f"Authentication required, redirect to {redirect_to}")


class FormValidationError(Exception):
    """Raised when user input fails client-side validation."""

    def __init__(self, message: str, field: Optional[str] = None):
        self.message = message
        self.field = field
        super().__init__(message)
