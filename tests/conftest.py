"""Shared fixtures and utilities for tests."""

from datetime import datetime, timezone
from unittest.mock import MagicMock

import httpx
import pytest

from portal.integrations.gateway import ApiGateway
from portal.notifications import Notifier
from portal.schemas import Assessment, Interview, Role, Submission
from portal.services.portal_api import PortalAPI
from portal.session import AuthSession

BASE_URL = "http://portal.test"


@pytest.fixture
def session(tmp_path):
    """Empty session backed by a temporary file."""
    return AuthSession(path=str(tmp_path / "session.json"))


@pytest.fixture
def candidate_session(session):
    session.login("candidate-token", Role.CANDIDATE)
    return session


@pytest.fixture
def interviewer_session(session):
    session.login("interviewer-token", Role.INTERVIEWER)
    return session


@pytest.fixture
def notifier():
    return Notifier()


@pytest.fixture
def make_gateway(session):
    """Build a gateway whose HTTP traffic goes to ``handler``."""

    def _make(handler, auth_session=None):
        return ApiGateway(
            auth_session or session,
            base_url=BASE_URL,
            timeout=5.0,
            transport=httpx.MockTransport(handler),
        )

    return _make


@pytest.fixture
def api():
    """PortalAPI stand-in; coroutine methods are AsyncMocks."""
    return MagicMock(spec=PortalAPI)


@pytest.fixture
def make_assessment():
    def _make(assessment_id, phase=None, next_phase_id=None, duration=10, questions=None, **extra):
        if questions is None:
            questions = [
                {"id": f"{assessment_id}-q1", "type": "MCQ", "text": "2 + 2?", "points": 5,
                 "options": ["3", "4"]},
                {"id": f"{assessment_id}-q2", "type": "SUBJECTIVE", "text": "Explain", "points": 5},
            ]
        return Assessment.model_validate(
            {
                "id": assessment_id,
                "title": extra.pop("title", f"Assessment {assessment_id}"),
                "description": extra.pop("description", ""),
                "duration": duration,
                "questions": questions,
                "phase": phase,
                "next_phase_id": next_phase_id,
                **extra,
            }
        )

    return _make


@pytest.fixture
def make_submission():
    def _make(assessment_id, passed=True, score=10, **extra):
        return Submission.model_validate(
            {
                "id": f"sub-{assessment_id}",
                "assessment_id": assessment_id,
                "score": score,
                "passed": passed,
                **extra,
            }
        )

    return _make


@pytest.fixture
def make_interview():
    def _make(interview_id, status="available", **extra):
        return Interview.model_validate(
            {
                "id": interview_id,
                "title": extra.pop("title", "Technical round"),
                "type": "Technical",
                "scheduled_at": datetime(2026, 3, 1, 10, 0, tzinfo=timezone.utc),
                "duration": 60,
                "status": status,
                **extra,
            }
        )

    return _make
