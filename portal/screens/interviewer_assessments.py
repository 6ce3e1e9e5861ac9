"""Interviewer screens for authored assessments."""

import asyncio
from typing import List, Optional

from portal.config import settings
from portal.integrations.gateway import PortalAPIError
from portal.schemas import (
    Assessment,
    AssessmentUpdate,
    CandidateSubmission,
    Question,
    Role,
    invalid_answer_question,
)

from .base import BaseScreen, FormValidationError

INTERVIEWER_ROLES = (Role.INTERVIEWER, Role.ADMIN)


def share_link(assessment_id: str) -> str:
    """Public link a candidate can open without an account."""
    return f"{settings.FRONTEND_URL.rstrip('/')}/public/assessments/{assessment_id}"


class InterviewerAssessmentsScreen(BaseScreen):
    """Series authored by the interviewer, one row per root phase."""

    screen_name = "interviewer_assessments"
    required_roles = INTERVIEWER_ROLES

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.assessments: List[Assessment] = []
        self.search_term = ""

    async def load(self) -> None:
        self.ensure_access()
        self.loading = True
        try:
            self.assessments = await self.api.list_my_assessments()
        except PortalAPIError as e:
            self.report(e, "Failed to fetch assessments")
        finally:
            self.loading = False

    @property
    def roots(self) -> List[Assessment]:
        return [a for a in self.assessments if a.is_root]

    @property
    def filtered(self) -> List[Assessment]:
        """Root phases whose title contains the search term (case-insensitive)."""
        term = self.search_term.lower()
        return [a for a in self.roots if term in a.title.lower()]

    def share_link(self, assessment_id: str) -> str:
        link = share_link(assessment_id)
        self.notifier.success("Assessment link copied to clipboard!")
        return link

    async def delete(self, assessment_id: str) -> bool:
        """Delete a series; the server removes linked phases too."""
        self.ensure_access()
        try:
            response = await self.api.delete_assessment(assessment_id)
        except PortalAPIError as e:
            self.report(e, "Failed to delete assessment")
            return False

        self.logger.info(
            "Assessment deleted",
            assessment_id=assessment_id,
            deleted_count=response.deleted_count,
        )
        self.notifier.success("Assessment deleted successfully")
        await self.refresh()
        return True


class InterviewerDashboardScreen(InterviewerAssessmentsScreen):
    """Interviewer landing page."""

    screen_name = "interviewer_dashboard"

    @property
    def active_tests(self) -> int:
        """Every authored phase, not only roots."""
        return len(self.assessments)


class AssessmentSubmissionsScreen(BaseScreen):
    """All candidate submissions for one assessment."""

    screen_name = "assessment_submissions"
    required_roles = INTERVIEWER_ROLES

    def __init__(self, *args, assessment_id: str, **kwargs):
        super().__init__(*args, **kwargs)
        self.assessment_id = assessment_id
        self.assessment: Optional[Assessment] = None
        self.submissions: List[CandidateSubmission] = []

    async def load(self) -> None:
        self.ensure_access()
        self.loading = True
        try:
            self.submissions, self.assessment = await asyncio.gather(
                self.api.list_submissions(self.assessment_id),
                self.api.get_assessment(self.assessment_id),
            )
        except PortalAPIError as e:
            self.report(e, "Failed to fetch submissions")
        finally:
            self.loading = False

    def submission(self, submission_id: str) -> Optional[CandidateSubmission]:
        return next((s for s in self.submissions if s.id == submission_id), None)


class AssessmentEditorScreen(BaseScreen):
    """Edit title, description, duration and questions of one phase."""

    screen_name = "assessment_editor"
    required_roles = INTERVIEWER_ROLES

    def __init__(self, *args, assessment_id: str, **kwargs):
        super().__init__(*args, **kwargs)
        self.assessment_id = assessment_id
        self.title = ""
        self.description = ""
        self.duration = 0
        self.questions: List[Question] = []
        self.redirect_to: Optional[str] = None

    async def load(self) -> None:
        self.ensure_access()
        self.loading = True
        try:
            assessment = await self.api.get_assessment(self.assessment_id)
        except PortalAPIError as e:
            self.report(e, "Failed to load assessment details")
            self.redirect_to = "/interviewer/assessments"
            return
        finally:
            self.loading = False

        self.title = assessment.title
        self.description = assessment.description
        self.duration = assessment.duration
        self.questions = list(assessment.questions)

    async def save(self) -> bool:
        self.ensure_access()
        if not self.title:
            raise FormValidationError("Please enter a title", field="title")
        number = invalid_answer_question(self.questions)
        if number is not None:
            raise FormValidationError(
                f"Question {number}: correct answer must be one of the options", field="questions"
            )

        payload = AssessmentUpdate(
            title=self.title,
            description=self.description,
            duration=int(self.duration),
            questions=self.questions,
        )
        try:
            await self.api.update_assessment(self.assessment_id, payload)
        except PortalAPIError as e:
            self.report(e, e.message or "Failed to update assessment")
            return False

        self.notifier.success("Assessment updated successfully!")
        self.redirect_to = "/interviewer/assessments"
        return True
