"""Pydantic models for the contact form request and response."""
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..utils.formatting import format_topic


class Submission(BaseModel):
    """A contact form submission as posted by the website."""
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    first_name: str = Field(alias="firstName")
    last_name: str | None = Field(default=None, alias="lastName")
    email: str
    topic: str
    subject: str
    message: str
    altcha: str

    @model_validator(mode="before")
    @classmethod
    def match_keys_case_insensitively(cls, data: Any) -> Any:
        """Map incoming keys onto the field aliases regardless of their case."""
        if not isinstance(data, dict):
            return data

        known_keys: dict[str, str] = {}
        for name, field in cls.model_fields.items():
            known_keys[name.lower()] = field.alias or name
            if field.alias:
                known_keys[field.alias.lower()] = field.alias

        return {known_keys.get(str(key).lower(), key): value for key, value in data.items()}

    @field_validator("first_name", "email", "topic", "subject", "message", "altcha")
    @classmethod
    def require_non_empty(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be empty")
        return value

    @field_validator("last_name")
    @classmethod
    def strip_optional(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip() or None

    @property
    def formatted_topic(self) -> str:
        """The topic formatted for display, e.g. "General Enquiry"."""
        return format_topic(self.topic)

    @property
    def full_name(self) -> str:
        """First and last name joined by a space, without trailing space when last name is missing."""
        return f"{self.first_name} {self.last_name or ''}".strip()


class ContactFormResponse(BaseModel):
    """Response body returned to the website."""
    success: bool
