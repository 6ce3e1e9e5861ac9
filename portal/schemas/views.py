"""View state produced by screen controllers.

Rendered with camelCase keys, matching what the web client displayed.
"""

from enum import Enum
from typing import Optional

from .base import CamelModel


class CardStatus(str, Enum):
    """Action offered on an assessment series card."""

    START = "Start"
    RESUME = "Resume"
    COMPLETED = "Completed"
    FAILED = "Failed"


class AssessmentCard(CamelModel):
    """One card per root series, pointing at the next actionable phase."""

    id: str  # Phase to open (could be phase 1, 2 or 3)
    display_title: str  # Always the root title
    description: str
    phase: int
    duration: int
    question_count: int
    status: CardStatus


class ResultView(CamelModel):
    """Scored result of one phase."""

    assessment_id: str
    score: int
    total_marks: int
    percentage: int
    passed: bool
    next_phase_id: Optional[str] = None
    next_route: Optional[str] = None


class InterviewStats(CamelModel):
    """Counts shown above the interviewer's slot list."""

    total: int = 0
    available: int = 0
    scheduled: int = 0
    completed: int = 0


class ExamProgress(CamelModel):
    """Snapshot of an exam session for rendering."""

    assessment_id: str
    title: str
    state: str
    question_index: int
    question_count: int
    time_left: Optional[int] = None
    clock: str = "--:--"
    low_time: bool = False
    answered: int = 0
