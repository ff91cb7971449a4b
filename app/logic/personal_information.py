"""Parsing of the personal-information onboarding form.

The form posts camelCase field names; parsed values use snake_case attributes.
"""
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator


FORM_FIELDS: tuple[str, ...] = (
    "ethnicities",
    "hometown",
    "hometownLatitude",
    "hometownLongitude",
)

REQUIRED_MESSAGE = "Required"


def split_ethnicities(value: str | None) -> list[str] | None:
    """Turn ``"US, MX,,NG"`` into ``["US", "MX", "NG"]``; blank input is ``None``."""
    if value is None:
        return None
    trimmed = value.strip()
    if not trimmed:
        return None
    return [code.strip() for code in trimmed.split(",") if code.strip()]


class UpdatePersonalInformation(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    ethnicities: list[str] | None = None
    hometown: str = Field(min_length=1)
    hometown_latitude: float = Field(alias="hometownLatitude", ge=-90, le=90, allow_inf_nan=False)
    hometown_longitude: float = Field(alias="hometownLongitude", ge=-180, le=180, allow_inf_nan=False)

    @field_validator("ethnicities", mode="before")
    @classmethod
    def _split_ethnicities(cls, value: Any) -> Any:
        if isinstance(value, str):
            return split_ethnicities(value)
        return value


@dataclass(frozen=True)
class PersonalInformationResult:
    data: UpdatePersonalInformation | None = None
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.data is not None and not self.errors


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _field_errors(exc: ValidationError) -> dict[str, str]:
    errors: dict[str, str] = {}
    for error in exc.errors():
        location = error.get("loc") or ("form",)
        name = str(location[0])
        if error.get("input") is None:
            message = REQUIRED_MESSAGE
        else:
            message = error.get("msg") or "Invalid value"
        errors.setdefault(name, message)
    return errors


def parse_personal_information(form: Mapping[str, Any]) -> PersonalInformationResult:
    values = {name: _blank_to_none(form.get(name)) for name in FORM_FIELDS}
    try:
        data = UpdatePersonalInformation.model_validate(values)
    except ValidationError as exc:
        return PersonalInformationResult(errors=_field_errors(exc))
    return PersonalInformationResult(data=data)
