"""Pydantic schemas for interview slots and bookings."""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import Field

from .base import WireModel


class InterviewStatus(str, Enum):
    """Interview slot lifecycle."""

    AVAILABLE = "available"
    SCHEDULED = "scheduled"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class Interview(WireModel):
    """Interview slot, optionally booked by a candidate."""

    id: str
    interviewer_id: Optional[str] = None
    candidate_id: Optional[str] = None
    title: str
    description: str = ""
    type: str = ""  # Technical, HR, Behavioral, etc.
    scheduled_at: datetime
    duration: int = 0  # Minutes
    status: InterviewStatus
    meeting_link: Optional[str] = None
    notes: Optional[str] = None

    # Populated user details
    interviewer_name: Optional[str] = None
    interviewer_email: Optional[str] = None
    candidate_name: Optional[str] = None
    candidate_email: Optional[str] = None

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_terminal(self) -> bool:
        return self.status in (InterviewStatus.COMPLETED, InterviewStatus.CANCELLED)


class InterviewSlotCreate(WireModel):
    """Payload for creating an interview slot."""

    title: str = Field(min_length=1)
    description: str = ""
    type: str = Field(min_length=1)
    scheduled_at: datetime
    duration: int = Field(ge=15, le=240)
    meeting_link: str = ""


class InterviewComplete(WireModel):
    """Payload for marking an interview completed."""

    notes: str = ""
