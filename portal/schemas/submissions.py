"""Pydantic schemas for assessment submissions."""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import field_validator

from .base import WireModel


class SubmissionStatus(str, Enum):
    """Server-side submission lifecycle."""

    IN_PROGRESS = "in_progress"
    SUBMITTED = "submitted"
    GRADED = "graded"


class AnswerSubmission(WireModel):
    """One answer as sent by the candidate."""

    question_id: str
    value: str = ""


class Answer(AnswerSubmission):
    """One answer as stored and graded by the server."""

    is_correct: Optional[bool] = None
    points: Optional[int] = None


class Submission(WireModel):
    """A candidate's one-time attempt at one assessment phase."""

    id: str
    assessment_id: str
    candidate_id: Optional[str] = None
    answers: list[Answer] = []
    score: int = 0
    status: SubmissionStatus = SubmissionStatus.SUBMITTED
    started_at: Optional[datetime] = None
    submitted_at: Optional[datetime] = None

    # Phase system (server computed)
    passed: bool = False
    total_marks: Optional[int] = None
    next_phase_unlocked: bool = False
    next_phase_id: Optional[str] = None

    @field_validator("answers", mode="before")
    @classmethod
    def _null_answers(cls, value):
        return value or []

    @field_validator("next_phase_id", mode="before")
    @classmethod
    def _blank_next_phase(cls, value):
        return value or None


class CandidateSubmission(Submission):
    """Submission with candidate details, as listed to interviewers."""

    candidate_name: str = ""
    candidate_email: str = ""
    candidate_phone: str = ""


class SubmitRequest(WireModel):
    """Payload for submitting an attempt."""

    answers: list[AnswerSubmission]


class SubmitResult(WireModel):
    """Score returned right after submitting."""

    message: str = ""
    score: int = 0
    total_marks: Optional[int] = None
    passed: bool = False
    next_phase_unlocked: bool = False
    next_phase_id: Optional[str] = None
