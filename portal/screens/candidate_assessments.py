"""Candidate dashboard and assessment list screens."""

import asyncio
from typing import List

from portal.integrations.gateway import PortalAPIError
from portal.schemas import Assessment, AssessmentCard, Role, Submission
from portal.services.phase_resolver import ResolverVariant, resolve_series

from .base import BaseScreen


class CandidateAssessmentsScreen(BaseScreen):
    """Assessment series available to a candidate.

    Multi-phase series unlock sequentially; a failed phase leaves the
    card on its last Start/Resume status.
    """

    screen_name = "candidate_assessments"
    required_roles = (Role.CANDIDATE,)
    variant = ResolverVariant.LIST
    load_error = "Failed to fetch assessments"

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.assessments: List[Assessment] = []
        self.submissions: List[Submission] = []
        self.cards: List[AssessmentCard] = []

    async def load(self) -> None:
        self.ensure_access()
        self.loading = True
        try:
            self.assessments, self.submissions = await asyncio.gather(
                self.api.list_assessments(),
                self.api.my_submissions(),
            )
            self.cards = resolve_series(self.assessments, self.submissions, self.variant)
            self.logger.info("Assessments loaded", cards=len(self.cards))
        except PortalAPIError as e:
            self.report(e, self.load_error)
        finally:
            self.loading = False


class CandidateDashboardScreen(CandidateAssessmentsScreen):
    """Candidate landing page: series cards plus summary counts."""

    screen_name = "candidate_dashboard"
    variant = ResolverVariant.DASHBOARD
    load_error = "Failed to fetch dashboard data"

    @property
    def available_count(self) -> int:
        return len(self.cards)

    @property
    def completed_count(self) -> int:
        """Distinct assessments the candidate has submitted."""
        return len({s.assessment_id for s in self.submissions})
