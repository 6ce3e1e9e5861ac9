"""Base Pydantic schemas for wire payloads and view state."""

from pydantic import BaseModel, ConfigDict
from humps import camelize


def to_camel(string: str) -> str:
    """Convert snake_case to camelCase."""
    return camelize(string)


class WireModel(BaseModel):
    """
    Base model for payloads exchanged with the backend API.

    The backend speaks snake_case JSON and adds fields over time, so
    unknown keys are ignored instead of rejected.
    """

    model_config = ConfigDict(
        extra="ignore",
        populate_by_name=True,
    )


class CamelModel(BaseModel):
    """
    Base model for client-side view state rendered with camelCase keys.

    Usage:
        class AssessmentCard(CamelModel):
            display_title: str   # JSON: displayTitle
            question_count: int  # JSON: questionCount
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
