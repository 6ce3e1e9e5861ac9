"""Pydantic schemas for authentication endpoints."""

from enum import Enum
from typing import Optional

from .base import WireModel


class Role(str, Enum):
    """User roles known to the platform."""

    CANDIDATE = "candidate"
    INTERVIEWER = "interviewer"
    ADMIN = "admin"


class Credentials(WireModel):
    """Email/password login request."""

    email: str
    password: str


class SignupRequest(Credentials):
    """Account creation request."""

    name: str = ""
    role: Role


class TokenResponse(WireModel):
    """Token issued on login."""

    token: str
    role: Role


class PublicUser(WireModel):
    """Candidate profile returned by anonymous identification."""

    id: Optional[str] = None
    name: str = ""
    email: str = ""
    role: Role = Role.CANDIDATE


class PublicStartRequest(WireModel):
    """Anonymous candidate identification for a shared assessment link."""

    name: str
    email: str
    phone: str = ""
    assessment_id: str


class PublicStartResponse(WireModel):
    """Token and profile for an identified public candidate."""

    token: str
    user: PublicUser


class SetPasswordRequest(WireModel):
    """Password for an account created through OAuth only."""

    password: str


class MessageResponse(WireModel):
    """Generic acknowledgement."""

    message: str = ""
