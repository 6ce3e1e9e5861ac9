"""Interviewer interview management and slot creation."""

from datetime import datetime, timezone
from typing import List, Optional

from pydantic import ValidationError

from portal.integrations.gateway import PortalAPIError
from portal.schemas import Interview, InterviewSlotCreate, InterviewStats, InterviewStatus

from .base import BaseScreen, FormValidationError
from .interviewer_assessments import INTERVIEWER_ROLES

ALL_STATUSES = "all"
MIN_SLOT_MINUTES = 15
MAX_SLOT_MINUTES = 240


class InterviewerInterviewsScreen(BaseScreen):
    """Slots owned by the interviewer, filterable by status."""

    screen_name = "interviewer_interviews"
    required_roles = INTERVIEWER_ROLES

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.interviews: List[Interview] = []
        self.filter = ALL_STATUSES

    async def load(self) -> None:
        self.ensure_access()
        self.loading = True
        try:
            self.interviews = await self.api.my_interviews()
        except PortalAPIError as e:
            self.report(e, "Failed to fetch interviews")
        finally:
            self.loading = False

    def set_filter(self, status: str) -> None:
        if status != ALL_STATUSES:
            # Raises ValueError for unknown statuses
            status = InterviewStatus(status).value
        self.filter = status

    @property
    def filtered(self) -> List[Interview]:
        if self.filter == ALL_STATUSES:
            return list(self.interviews)
        return [i for i in self.interviews if i.status.value == self.filter]

    @property
    def stats(self) -> InterviewStats:
        def count(status: InterviewStatus) -> int:
            return sum(1 for i in self.interviews if i.status == status)

        return InterviewStats(
            total=len(self.interviews),
            available=count(InterviewStatus.AVAILABLE),
            scheduled=count(InterviewStatus.SCHEDULED),
            completed=count(InterviewStatus.COMPLETED),
        )

    async def cancel(self, interview_id: str) -> bool:
        self.ensure_access()
        try:
            await self.api.cancel_interview(interview_id)
        except PortalAPIError as e:
            self.report(e, "Failed to cancel interview")
            return False

        self.logger.info("Interview cancelled", interview_id=interview_id)
        self.notifier.success("Interview cancelled successfully")
        await self.refresh()
        return True

    async def complete(self, interview_id: str, notes: str = "") -> bool:
        self.ensure_access()
        try:
            await self.api.complete_interview(interview_id, notes)
        except PortalAPIError as e:
            self.report(e, "Failed to complete interview")
            return False

        self.logger.info("Interview completed", interview_id=interview_id)
        self.notifier.success("Interview marked as completed")
        await self.refresh()
        return True


def combine_local(date: str, time: str) -> datetime:
    """Join a local ``YYYY-MM-DD`` date and ``HH:MM`` time into a UTC datetime."""
    local = datetime.strptime(f"{date} {time}", "%Y-%m-%d %H:%M")
    # Naive values are taken as local time
    return local.astimezone(timezone.utc)


class InterviewSlotFormScreen(BaseScreen):
    """Form for publishing a new bookable interview slot."""

    screen_name = "interview_slot_form"
    required_roles = INTERVIEWER_ROLES

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.title = ""
        self.description = ""
        self.type = "Technical"
        self.date = ""
        self.time = ""
        self.duration = 60
        self.meeting_link = ""
        self.created: Optional[Interview] = None
        self.redirect_to: Optional[str] = None

    async def load(self) -> None:
        self.ensure_access()

    def build_payload(self) -> InterviewSlotCreate:
        """Validate the form fields.

        Raises:
            FormValidationError: Missing field, bad date/time or duration out of range
        """
        if not self.title or not self.date or not self.time:
            raise FormValidationError("Please fill in all required fields")

        duration = int(self.duration)
        if not MIN_SLOT_MINUTES <= duration <= MAX_SLOT_MINUTES:
            raise FormValidationError(
                f"Duration must be between {MIN_SLOT_MINUTES} and {MAX_SLOT_MINUTES} minutes",
                field="duration",
            )

        try:
            scheduled_at = combine_local(self.date, self.time)
        except ValueError:
            raise FormValidationError("Invalid date or time", field="date")

        try:
            return InterviewSlotCreate(
                title=self.title,
                description=self.description,
                type=self.type,
                scheduled_at=scheduled_at,
                duration=duration,
                meeting_link=self.meeting_link,
            )
        except ValidationError as e:
            raise FormValidationError(e.errors()[0]["msg"])

    async def submit(self) -> bool:
        self.ensure_access()
        payload = self.build_payload()
        try:
            self.created = await self.api.create_interview_slot(payload)
        except PortalAPIError as e:
            self.report(e, e.message or "Failed to create interview slot")
            return False

        self.logger.info("Interview slot created", interview_id=self.created.id)
        self.notifier.success("Interview slot created successfully!")
        self.redirect_to = "/interviewer/interviews"
        return True
