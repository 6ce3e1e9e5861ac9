"""Client-side services: API facade, phase resolution and exam sessions."""

from .portal_api import PortalAPI
from .phase_resolver import ResolverVariant, resolve_series
from .exam_session import ExamSession, ExamSessionError, ExamState, build_submit_payload, format_time

__all__ = [
    "PortalAPI",
    "ResolverVariant",
    "resolve_series",
    "ExamSession",
    "ExamSessionError",
    "ExamState",
    "build_submit_payload",
    "format_time",
]
