"""Shared field rules used by every create/update schema.

Strings are trimmed before their length is checked and stored trimmed.
Optional strings that are empty after trimming become None.
"""

from collections.abc import Callable
from typing import Annotated

from pydantic import AfterValidator

PROJECT_NAME_MAX_LENGTH = 100
PROJECT_DESCRIPTION_MAX_LENGTH = 500
NOTE_TITLE_MAX_LENGTH = 200
TAB_NAME_MAX_LENGTH = 100


def required_text(label: str, max_length: int | None = None) -> Callable[[str], str]:
    """Build a validator for a required string field."""

    def validate(value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError(f"{label} is required and must be a non-empty string")
        if max_length is not None and len(value) > max_length:
            raise ValueError(f"{label} must be at most {max_length} characters")
        return value

    return validate


def optional_text(label: str, max_length: int | None = None) -> Callable[[str | None], str | None]:
    """Build a validator for an optional string field (empty -> None)."""

    def validate(value: str | None) -> str | None:
        if value is None:
            return None
        value = value.strip()
        if not value:
            return None
        if max_length is not None and len(value) > max_length:
            raise ValueError(f"{label} must be at most {max_length} characters")
        return value

    return validate


def _validate_tab_name(value: str) -> str:
    # Tab names are keys of the stored JSON and are kept verbatim.
    if not value.strip():
        raise ValueError("Tab name must be a non-empty string")
    if len(value) > TAB_NAME_MAX_LENGTH:
        raise ValueError(f"Tab name must be at most {TAB_NAME_MAX_LENGTH} characters")
    return value


ProjectName = Annotated[str, AfterValidator(required_text("Project name", PROJECT_NAME_MAX_LENGTH))]
ProjectDescription = Annotated[
    str | None,
    AfterValidator(optional_text("Project description", PROJECT_DESCRIPTION_MAX_LENGTH)),
]
NoteTitle = Annotated[str, AfterValidator(required_text("Note title", NOTE_TITLE_MAX_LENGTH))]
NoteContent = Annotated[str | None, AfterValidator(optional_text("Note content"))]
ActiveTab = Annotated[str | None, AfterValidator(optional_text("Active tab", TAB_NAME_MAX_LENGTH))]
TabName = Annotated[str, AfterValidator(_validate_tab_name)]


def reject_null(label: str) -> Callable[[object], object]:
    """Build a before-validator that refuses an explicit null for a required field."""

    def validate(value: object) -> object:
        if value is None:
            raise ValueError(f"{label} must be a non-empty string")
        return value

    return validate
