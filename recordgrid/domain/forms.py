"""
Validation rules for the add/edit record form.

These are stricter than the import rules (the form requires a role and an
adult age) and apply only to records entered by hand. Error messages are
meant to be shown next to the offending field.
"""
from __future__ import annotations

from typing import Any, Dict

from pydantic import BaseModel, Field, field_validator

from recordgrid.domain.models import EMAIL_PATTERN

MIN_TEXT_LENGTH = 2
MIN_FORM_AGE = 18
MAX_FORM_AGE = 100


def _check_text(label: str, value: str) -> str:
    if not value:
        raise ValueError(f"{label} is required")
    if len(value) < MIN_TEXT_LENGTH:
        raise ValueError(f"{label} must be at least {MIN_TEXT_LENGTH} characters")
    return value


class RecordForm(BaseModel):
    name: str
    email: str
    age: int = Field(25)
    role: str
    department: str = ""
    location: str = ""

    model_config = {
        "str_strip_whitespace": True,
        "frozen": True,
    }

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        return _check_text("Name", value)

    @field_validator("role")
    @classmethod
    def _check_role(cls, value: str) -> str:
        return _check_text("Role", value)

    @field_validator("email")
    @classmethod
    def _check_email(cls, value: str) -> str:
        if not value:
            raise ValueError("Email is required")
        if not EMAIL_PATTERN.match(value):
            raise ValueError("Please enter a valid email address")
        return value

    @field_validator("age")
    @classmethod
    def _check_age(cls, value: int) -> int:
        if value < MIN_FORM_AGE:
            raise ValueError(f"Age must be at least {MIN_FORM_AGE}")
        if value > MAX_FORM_AGE:
            raise ValueError(f"Age must be less than {MAX_FORM_AGE}")
        return value

    def to_fields(self) -> Dict[str, Any]:
        return self.model_dump()


__all__ = ["RecordForm"]
