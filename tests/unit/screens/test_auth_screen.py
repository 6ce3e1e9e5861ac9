"""Tests for login, signup and OAuth flows."""

import pytest

from portal.integrations.gateway import PortalAPIError
from portal.schemas import MessageResponse, Role, TokenResponse
from portal.screens import AuthScreen, FormValidationError, home_route


@pytest.fixture
def screen(api, session, notifier):
    return AuthScreen(api, session, notifier)


class TestLogin:
    """Credential login."""

    @pytest.mark.asyncio
    async def test_success_stores_session(self, screen, api, session):
        api.login.return_value = TokenResponse(token="tok", role=Role.INTERVIEWER)

        route = await screen.login("a@b.c", "secret1")

        assert route == "/interviewer/dashboard"
        assert (session.token, session.role) == ("tok", Role.INTERVIEWER)
        assert session.path.exists()

    @pytest.mark.asyncio
    async def test_failure_shows_server_message(self, screen, api, session, notifier):
        api.login.side_effect = PortalAPIError("Invalid email or password", status_code=401)

        assert await screen.login("a@b.c", "wrong") is None

        assert screen.error == "Invalid email or password"
        assert notifier.last.message == "Invalid email or password"
        assert not session.is_authenticated

    @pytest.mark.asyncio
    async def test_missing_fields(self, screen, api):
        with pytest.raises(FormValidationError):
            await screen.login("", "secret1")

        api.login.assert_not_called()

    @pytest.mark.asyncio
    async def test_logged_in_user_skips_form(self, api, candidate_session):
        screen = AuthScreen(api, candidate_session)

        await screen.load()

        assert screen.redirect_to == "/candidate/dashboard"


class TestSignup:
    """Account creation."""

    @pytest.mark.asyncio
    async def test_signup_then_login(self, screen, api, session):
        api.signup.return_value = MessageResponse(message="User created successfully")
        api.login.return_value = TokenResponse(token="tok", role=Role.CANDIDATE)

        route = await screen.signup("a@b.c", "secret1", "secret1", Role.CANDIDATE, name="Ada")

        api.signup.assert_awaited_once_with("a@b.c", "secret1", Role.CANDIDATE, name="Ada")
        api.login.assert_awaited_once_with("a@b.c", "secret1")
        assert route == "/candidate/dashboard"
        assert session.token == "tok"

    @pytest.mark.asyncio
    async def test_passwords_must_match(self, screen, api):
        with pytest.raises(FormValidationError, match="Passwords do not match"):
            await screen.signup("a@b.c", "secret1", "secret2", Role.CANDIDATE)

        api.signup.assert_not_called()

    @pytest.mark.asyncio
    async def test_duplicate_email(self, screen, api, notifier):
        api.signup.side_effect = PortalAPIError("User already exists", status_code=400)

        assert await screen.signup("a@b.c", "secret1", "secret1", Role.CANDIDATE) is None

        assert notifier.last.message == "User already exists"
        api.login.assert_not_called()


class TestOAuth:
    """Google sign-in callback."""

    def test_missing_parameters(self, screen, session):
        assert screen.complete_google_login(None, "candidate") == "/login?error=google_auth_failed"
        assert screen.complete_google_login("tok", "") == "/login?error=google_auth_failed"
        assert not session.is_authenticated

    def test_candidate_callback(self, screen, session):
        assert screen.complete_google_login("tok", "candidate") == "/candidate/dashboard"
        assert session.role == Role.CANDIDATE

    def test_unknown_role(self, screen, session):
        assert screen.complete_google_login("tok", "owner") == "/login"
        assert not session.is_authenticated

    def test_google_url_is_delegated(self, screen, api):
        api.google_login_url.return_value = "http://portal.test/auth/google/login?role=candidate"

        assert screen.google_login_url(Role.CANDIDATE).endswith("role=candidate")


class TestPasswordAndLogout:
    """Password setup and logout."""

    @pytest.mark.asyncio
    async def test_password_too_short(self, screen, api):
        with pytest.raises(FormValidationError) as exc_info:
            await screen.set_password("abc", "abc")

        assert exc_info.value.field == "password"
        api.set_password.assert_not_called()

    @pytest.mark.asyncio
    async def test_password_set(self, screen, api, notifier):
        api.set_password.return_value = MessageResponse(message="ok")

        assert await screen.set_password("secret1", "secret1") is True

        assert notifier.last.message == "Password updated successfully"

    def test_logout_clears_session(self, api, candidate_session):
        route = AuthScreen(api, candidate_session).logout()

        assert route == "/login"
        assert not candidate_session.path.exists()
        assert not candidate_session.is_authenticated

    def test_home_routes(self):
        assert home_route(Role.CANDIDATE) == "/candidate/dashboard"
        assert home_route(Role.ADMIN) == "/interviewer/dashboard"
        assert home_route(None) == "/login"
