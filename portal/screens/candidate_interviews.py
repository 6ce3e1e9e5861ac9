"""Candidate interview booking screen."""

import asyncio
from typing import List

from portal.integrations.gateway import PortalAPIError
from portal.schemas import Interview, Role

from .base import BaseScreen


class CandidateInterviewsScreen(BaseScreen):
    """Bookable slots next to the candidate's own interviews."""

    screen_name = "candidate_interviews"
    required_roles = (Role.CANDIDATE,)

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.available: List[Interview] = []
        self.mine: List[Interview] = []

    async def load(self) -> None:
        self.ensure_access()
        self.loading = True
        try:
            self.available, self.mine = await asyncio.gather(
                self.api.available_interviews(),
                self.api.my_interviews(),
            )
        except PortalAPIError as e:
            self.report(e, "Failed to fetch interviews")
        finally:
            self.loading = False

    async def book(self, interview_id: str) -> bool:
        self.ensure_access()
        try:
            await self.api.book_interview(interview_id)
        except PortalAPIError as e:
            self.report(e, e.message or "Failed to book interview")
            return False

        self.logger.info("Interview booked", interview_id=interview_id)
        self.notifier.success("Interview booked successfully!")
        await self.refresh()
        return True

    async def cancel(self, interview_id: str) -> bool:
        self.ensure_access()
        try:
            await self.api.cancel_interview(interview_id)
        except PortalAPIError as e:
            self.report(e, e.message or "Failed to cancel interview")
            return False

        self.logger.info("Interview cancelled", interview_id=interview_id)
        self.notifier.success("Interview cancelled successfully")
        await self.refresh()
        return True
