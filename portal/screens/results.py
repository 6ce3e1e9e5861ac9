"""Scored result screen for candidates and public takers."""

import math
from typing import Optional

from portal.integrations.gateway import PortalAPIError
from portal.schemas import ResultView, Role

from .base import BaseScreen


def score_percentage(score: int, total_marks: Optional[int]) -> int:
    """Whole-number percentage, 0 when the phase has no marks."""
    if not total_marks:
        return 0
    # Halves round up (12.5 -> 13), not to even
    return math.floor(score / total_marks * 100 + 0.5)


class ResultScreen(BaseScreen):
    """Result of the caller's submission for one phase."""

    screen_name = "assessment_result"
    required_roles = (Role.CANDIDATE,)
    route_prefix = "/candidate/assessments"

    def __init__(self, *args, assessment_id: str, **kwargs):
        super().__init__(*args, **kwargs)
        self.assessment_id = assessment_id
        self.result: Optional[ResultView] = None

    def next_phase_route(self, next_phase_id: str) -> str:
        return f"{self.route_prefix}/{next_phase_id}/take"

    async def load(self) -> None:
        self.ensure_access()
        self.loading = True
        try:
            submission = await self.api.get_result(self.assessment_id)
        except PortalAPIError as e:
            self.report(e, e.message or "Failed to load result")
            return
        finally:
            self.loading = False

        total_marks = submission.total_marks or 0
        self.result = ResultView(
            assessment_id=self.assessment_id,
            score=submission.score,
            total_marks=total_marks,
            percentage=score_percentage(submission.score, total_marks),
            passed=submission.passed,
            next_phase_id=submission.next_phase_id,
            next_route=self.next_phase_route(submission.next_phase_id) if submission.next_phase_id else None,
        )


class PublicResultScreen(ResultScreen):
    """Result page reached through a shared assessment link."""

    screen_name = "public_result"
    required_roles = ()
    route_prefix = "/public/assessments"

    def next_phase_route(self, next_phase_id: str) -> str:
        return f"{self.route_prefix}/{next_phase_id}"
