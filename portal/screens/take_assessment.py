"""Exam-taking screens and anonymous candidate identification."""

from typing import Optional

from portal.integrations.gateway import PortalAPIError
from portal.schemas import PublicStartRequest, Role
from portal.services.exam_session import ExamSession, ExamState

from .base import BaseScreen, FormValidationError, NotAuthenticatedError


class TakeAssessmentScreen(BaseScreen):
    """Hosts one ExamSession and routes to the result once it completes."""

    screen_name = "take_assessment"
    required_roles = (Role.CANDIDATE,)
    route_prefix = "/candidate/assessments"

    def __init__(self, *args, assessment_id: str, tick_interval: Optional[float] = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.assessment_id = assessment_id
        self.next_route: Optional[str] = None
        self.exam = ExamSession(
            self.api,
            assessment_id,
            notifier=self.notifier,
            on_complete=self._on_complete,
            tick_interval=tick_interval,
        )

    @property
    def result_route(self) -> str:
        return f"{self.route_prefix}/{self.assessment_id}/result"

    def _on_complete(self) -> None:
        self.next_route = self.result_route

    async def load(self, start_timer: bool = True) -> ExamState:
        self.ensure_access()
        self.loading = True
        try:
            return await self.exam.load(start_timer=start_timer)
        finally:
            self.loading = False

    async def close(self) -> None:
        await self.exam.close()


class PublicTakeAssessmentScreen(TakeAssessmentScreen):
    """Exam reached through a shared link; needs the identification token."""

    screen_name = "public_take_assessment"
    required_roles = ()
    route_prefix = "/public/assessments"

    def ensure_access(self) -> None:
        if not self.session.is_authenticated:
            raise NotAuthenticatedError(f"{self.route_prefix}/{self.assessment_id}")


class PublicIdentifyScreen(BaseScreen):
    """Landing page of a shared assessment link."""

    screen_name = "public_identify"

    def __init__(self, *args, assessment_id: str, **kwargs):
        super().__init__(*args, **kwargs)
        self.assessment_id = assessment_id
        self.redirect_to: Optional[str] = None

    @property
    def take_route(self) -> str:
        return f"/public/assessments/{self.assessment_id}/take"

    async def load(self) -> None:
        # Already identified: skip to the exam
        if self.session.is_authenticated:
            self.redirect_to = self.take_route

    async def start(self, name: str, email: str, phone: str = "") -> Optional[str]:
        """Identify the candidate and open the exam.

        Returns:
            Route of the exam, or None if identification failed
        """
        if not name or not email:
            raise FormValidationError("Name and email are required", field="name" if not name else "email")

        request = PublicStartRequest(
            name=name,
            email=email,
            phone=phone,
            assessment_id=self.assessment_id,
        )
        try:
            response = await self.api.public_start(request)
        except PortalAPIError as e:
            self.report(e, e.message or "Failed to start assessment")
            return None

        self.session.login(response.token, response.user.role)
        self.notifier.success("Welcome! Starting your assessment...")
        self.redirect_to = self.take_route
        return self.redirect_to
