"""Screen controllers.

Each screen mirrors one page of the portal:

1. AuthScreen - Login, signup, Google OAuth callback, password setup
2. CandidateDashboardScreen / CandidateAssessmentsScreen - Phase cards
3. TakeAssessmentScreen / PublicTakeAssessmentScreen - Timed exam
4. ResultScreen / PublicResultScreen - Scored result and next phase
5. PublicIdentifyScreen - Anonymous candidate entry from a shared link
6. CandidateInterviewsScreen - Booking
7. InterviewerDashboardScreen / InterviewerAssessmentsScreen - Authored series
8. AssessmentSubmissionsScreen / AssessmentEditorScreen - Review and edit
9. AssessmentWizardScreen - Multi-phase creation
10. InterviewerInterviewsScreen / InterviewSlotFormScreen - Slot management
"""

from .base import BaseScreen, FormValidationError, NotAuthenticatedError, LOGIN_ROUTE, home_route
from .auth import AuthScreen
from .candidate_assessments import CandidateAssessmentsScreen, CandidateDashboardScreen
from .take_assessment import PublicIdentifyScreen, PublicTakeAssessmentScreen, TakeAssessmentScreen
from .results import PublicResultScreen, ResultScreen, score_percentage
from .candidate_interviews import CandidateInterviewsScreen
from .interviewer_assessments import (
    AssessmentEditorScreen,
    AssessmentSubmissionsScreen,
    InterviewerAssessmentsScreen,
    InterviewerDashboardScreen,
    share_link,
)
from .assessment_wizard import AssessmentWizardScreen, PhaseDraft
from .interviewer_interviews import InterviewerInterviewsScreen, InterviewSlotFormScreen

__all__ = [
    "BaseScreen",
    "FormValidationError",
    "NotAuthenticatedError",
    "LOGIN_ROUTE",
    "home_route",
    "AuthScreen",
    "CandidateAssessmentsScreen",
    "CandidateDashboardScreen",
    "TakeAssessmentScreen",
    "PublicTakeAssessmentScreen",
    "PublicIdentifyScreen",
    "ResultScreen",
    "PublicResultScreen",
    "score_percentage",
    "CandidateInterviewsScreen",
    "InterviewerAssessmentsScreen",
    "InterviewerDashboardScreen",
    "AssessmentSubmissionsScreen",
    "AssessmentEditorScreen",
    "share_link",
    "AssessmentWizardScreen",
    "PhaseDraft",
    "InterviewerInterviewsScreen",
    "InterviewSlotFormScreen",
]
