"""Pydantic schemas for API payloads and client view state.

Wire models use the backend's snake_case names; view models use
CamelCase aliases (via alias_generator).
"""

from .base import CamelModel, WireModel

# Re-export all schemas
from .assessments import (
    QuestionType,
    McqQuestion,
    SubjectiveQuestion,
    CodingQuestion,
    Question,
    Assessment,
    AssessmentCreate,
    AssessmentUpdate,
    CreatedResponse,
    DeletedResponse,
    invalid_answer_question,
)
from .submissions import (
    SubmissionStatus,
    AnswerSubmission,
    Answer,
    Submission,
    CandidateSubmission,
    SubmitRequest,
    SubmitResult,
)
from .interviews import (
    InterviewStatus,
    Interview,
    InterviewSlotCreate,
    InterviewComplete,
)
from .auth import (
    Role,
    Credentials,
    SignupRequest,
    TokenResponse,
    PublicUser,
    PublicStartRequest,
    PublicStartResponse,
    SetPasswordRequest,
    MessageResponse,
)
from .views import (
    CardStatus,
    AssessmentCard,
    ResultView,
    InterviewStats,
    ExamProgress,
)

__all__ = [
    # Base
    "CamelModel",
    "WireModel",
    # Assessments
    "QuestionType",
    "McqQuestion",
    "SubjectiveQuestion",
    "CodingQuestion",
    "Question",
    "Assessment",
    "AssessmentCreate",
    "AssessmentUpdate",
    "invalid_answer_question",
    "CreatedResponse",
    "DeletedResponse",
    # Submissions
    "SubmissionStatus",
    "AnswerSubmission",
    "Answer",
    "Submission",
    "CandidateSubmission",
    "SubmitRequest",
    "SubmitResult",
    # Interviews
    "InterviewStatus",
    "Interview",
    "InterviewSlotCreate",
    "InterviewComplete",
    # Auth
    "Role",
    "Credentials",
    "SignupRequest",
    "TokenResponse",
    "PublicUser",
    "PublicStartRequest",
    "PublicStartResponse",
    "SetPasswordRequest",
    "MessageResponse",
    # Views
    "CardStatus",
    "AssessmentCard",
    "ResultView",
    "InterviewStats",
    "ExamProgress",
]
