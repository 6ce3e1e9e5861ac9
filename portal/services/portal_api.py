"""Typed access to every backend endpoint used by the client."""

from typing import Any, List, Optional, Type, TypeVar
from urllib.parse import quote, urlencode

import structlog
from pydantic import BaseModel, TypeAdapter, ValidationError

from portal.integrations.gateway import ApiGateway, PortalAPIError
from portal.schemas import (
    Assessment,
    AssessmentCreate,
    AssessmentUpdate,
    AnswerSubmission,
    CandidateSubmission,
    Credentials,
    CreatedResponse,
    DeletedResponse,
    Interview,
    InterviewComplete,
    InterviewSlotCreate,
    MessageResponse,
    PublicStartRequest,
    PublicStartResponse,
    Role,
    SetPasswordRequest,
    SignupRequest,
    Submission,
    SubmitRequest,
    SubmitResult,
    TokenResponse,
)

logger = structlog.get_logger()

M = TypeVar("M", bound=BaseModel)


def _path_id(value: str) -> str:
    return quote(str(value), safe="")


class PortalAPI:
    """Backend endpoints, parsed into schema models.

    A body that does not match the expected schema is reported as a
    PortalAPIError, the same way the gateway reports bad JSON.
    """

    def __init__(self, gateway: ApiGateway):
        self.gateway = gateway

    @property
    def base_url(self) -> str:
        return self.gateway.base_url

    # Parsing helpers

    def _parse(self, model: Type[M], data: Any, endpoint: str) -> M:
        try:
            return model.model_validate(data)
        except ValidationError as e:
            logger.error("Unexpected response shape", endpoint=endpoint, error=str(e))
            raise PortalAPIError("Unexpected response from server") from e

    def _parse_list(self, model: Type[M], data: Any, endpoint: str) -> List[M]:
        # The backend encodes an empty collection as null
        if data is None or data == {}:
            return []
        try:
            return TypeAdapter(List[model]).validate_python(data)
        except ValidationError as e:
            logger.error("Unexpected response shape", endpoint=endpoint, error=str(e))
            raise PortalAPIError("Unexpected response from server") from e

    async def _get_list(self, model: Type[M], endpoint: str) -> List[M]:
        data = await self.gateway.request(endpoint, "GET")
        return self._parse_list(model, data, endpoint)

    @staticmethod
    def _dump(payload: BaseModel) -> dict:
        return payload.model_dump(mode="json", exclude_none=True)

    # Authentication

    async def login(self, email: str, password: str) -> TokenResponse:
        data = await self.gateway.request(
            "/login", "POST", self._dump(Credentials(email=email, password=password))
        )
        return self._parse(TokenResponse, data, "/login")

    async def signup(self, email: str, password: str, role: Role, name: str = "") -> MessageResponse:
        payload = SignupRequest(email=email, password=password, role=role, name=name)
        data = await self.gateway.request("/signup", "POST", self._dump(payload))
        return self._parse(MessageResponse, data, "/signup")

    async def set_password(self, password: str) -> MessageResponse:
        data = await self.gateway.request(
            "/auth/set-password", "POST", self._dump(SetPasswordRequest(password=password))
        )
        return self._parse(MessageResponse, data, "/auth/set-password")

    def google_login_url(self, role: Role) -> str:
        """OAuth entry point; the browser is sent here, nothing is fetched."""
        return f"{self.base_url}/auth/google/login?{urlencode({'role': Role(role).value})}"

    async def public_start(self, request: PublicStartRequest) -> PublicStartResponse:
        data = await self.gateway.request("/api/public/start", "POST", self._dump(request))
        return self._parse(PublicStartResponse, data, "/api/public/start")

    # Assessments

    async def list_assessments(self) -> List[Assessment]:
        return await self._get_list(Assessment, "/api/assessments")

    async def list_my_assessments(self) -> List[Assessment]:
        return await self._get_list(Assessment, "/api/assessments/my")

    async def get_assessment(self, assessment_id: str) -> Assessment:
        endpoint = f"/api/assessments/{_path_id(assessment_id)}"
        data = await self.gateway.request(endpoint, "GET")
        return self._parse(Assessment, data, endpoint)

    async def create_assessment(self, payload: AssessmentCreate) -> CreatedResponse:
        data = await self.gateway.request("/api/assessments", "POST", self._dump(payload))
        return self._parse(CreatedResponse, data, "/api/assessments")

    async def update_assessment(self, assessment_id: str, payload: AssessmentUpdate) -> MessageResponse:
        endpoint = f"/api/assessments/{_path_id(assessment_id)}"
        data = await self.gateway.request(endpoint, "PUT", self._dump(payload))
        return self._parse(MessageResponse, data, endpoint)

    async def delete_assessment(self, assessment_id: str) -> DeletedResponse:
        endpoint = f"/api/assessments/{_path_id(assessment_id)}"
        data = await self.gateway.request(endpoint, "DELETE")
        return self._parse(DeletedResponse, data, endpoint)

    async def get_result(self, assessment_id: str) -> Submission:
        endpoint = f"/api/assessments/{_path_id(assessment_id)}/result"
        data = await self.gateway.request(endpoint, "GET")
        return self._parse(Submission, data, endpoint)

    async def list_submissions(self, assessment_id: str) -> List[CandidateSubmission]:
        return await self._get_list(
            CandidateSubmission, f"/api/assessments/{_path_id(assessment_id)}/submissions"
        )

    async def submit_assessment(
        self, assessment_id: str, answers: List[AnswerSubmission]
    ) -> SubmitResult:
        endpoint = f"/api/assessments/{_path_id(assessment_id)}/submit"
        data = await self.gateway.request(
            endpoint, "POST", self._dump(SubmitRequest(answers=answers))
        )
        return self._parse(SubmitResult, data, endpoint)

    async def my_submissions(self) -> List[Submission]:
        return await self._get_list(Submission, "/api/submissions/me")

    # Interviews

    async def available_interviews(self) -> List[Interview]:
        return await self._get_list(Interview, "/api/interviews/available")

    async def my_interviews(self) -> List[Interview]:
        return await self._get_list(Interview, "/api/interviews/my")

    async def book_interview(self, interview_id: str) -> Interview:
        endpoint = f"/api/interviews/{_path_id(interview_id)}/book"
        data = await self.gateway.request(endpoint, "POST", {})
        return self._parse(Interview, data, endpoint)

    async def cancel_interview(self, interview_id: str) -> Interview:
        endpoint = f"/api/interviews/{_path_id(interview_id)}"
        data = await self.gateway.request(endpoint, "DELETE")
        return self._parse(Interview, data, endpoint)

    async def create_interview_slot(self, payload: InterviewSlotCreate) -> Interview:
        data = await self.gateway.request("/api/interviews/slots", "POST", self._dump(payload))
        return self._parse(Interview, data, "/api/interviews/slots")

    async def complete_interview(self, interview_id: str, notes: Optional[str] = "") -> Interview:
        endpoint = f"/api/interviews/{_path_id(interview_id)}/complete"
        data = await self.gateway.request(
            endpoint, "POST", self._dump(InterviewComplete(notes=notes or ""))
        )
        return self._parse(Interview, data, endpoint)
