from typing import Any

from pydantic import BaseModel, Field, field_validator


def coerce_str_list(value: Any) -> list[str]:
    """Coerce a loosely-typed list field into a list of strings.

    None, scalars and other shapes become an empty list; non-string items
    are dropped. A comma-separated string is split into items.
    """
    if value is None:
        return []
    if isinstance(value, str):
        return [item.strip() for item in value.split(",") if item.strip()]
    if isinstance(value, (list, tuple, set, frozenset)):
        return [item for item in value if isinstance(item, str)]
    return []


def _coerce_number(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if number != number or number < 0:
        return None
    return number


class SalaryRange(BaseModel):
    """A salary range. Either bound may be missing."""

    min: float | None = Field(default=None, description="Lower bound")
    max: float | None = Field(default=None, description="Upper bound")

    @field_validator("min", "max", mode="before")
    @classmethod
    def _coerce_bound(cls, value):
        return _coerce_number(value)

    def bounds(self) -> tuple[float, float] | None:
        """Return (low, high), filling a missing bound from the other one.

        Returns None when both bounds are missing or the range is inverted.
        """
        if self.min is None and self.max is None:
            return None
        low = self.min if self.min is not None else self.max
        high = self.max if self.max is not None else self.min
        if low > high:
            return None
        return low, high


class CandidateRecord(BaseModel):
    """A job seeker profile supplied by the record source for scoring.

    Only ``id`` is required. Every other field falls back to an empty default
    when missing or malformed, so scoring never has to guard against shape.
    """

    id: str = Field(min_length=1, description="Unique identifier for the candidate")
    name: str | None = Field(default=None, description="Display name")
    avatar_url: str | None = Field(default=None, description="Avatar image URL")
    phone: str | None = Field(default=None, description="Contact phone")
    headline: str | None = Field(default=None, description="Short professional headline")
    summary: str | None = Field(default=None, description="Free-text profile summary")
    experience_years: float | None = Field(
        default=None,
        description="Total years of professional experience"
    )
    current_location: str | None = Field(default=None, description="Current city or region")
    preferred_locations: list[str] = Field(default_factory=list, description="Locations of interest")
    willing_to_relocate: bool = Field(default=False, description="Open to relocation")
    preferred_job_types: list[str] = Field(
        default_factory=list,
        description="Preferred employment types (full-time, contract, ...)"
    )
    target_salary_range: SalaryRange | None = Field(default=None, description="Expected salary")
    skills: list[str] = Field(default_factory=list, description="Skills, compared case-insensitively")
    languages: list[str] = Field(default_factory=list, description="Spoken languages")
    created_at: str | None = Field(default=None, description="Profile creation timestamp")
    updated_at: str | None = Field(default=None, description="Last update timestamp")

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, value):
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("experience_years", mode="before")
    @classmethod
    def _coerce_experience(cls, value):
        return _coerce_number(value)

    @field_validator("preferred_locations", "preferred_job_types", "skills", "languages", mode="before")
    @classmethod
    def _coerce_lists(cls, value):
        return coerce_str_list(value)

    @field_validator("willing_to_relocate", mode="before")
    @classmethod
    def _coerce_relocate(cls, value):
        return value is True

    @field_validator(
        "name", "avatar_url", "phone", "headline", "summary", "current_location",
        "created_at", "updated_at",
        mode="before",
    )
    @classmethod
    def _coerce_optional_str(cls, value):
        return value if isinstance(value, str) else None

    @field_validator("target_salary_range", mode="before")
    @classmethod
    def _coerce_salary(cls, value):
        return value if isinstance(value, (dict, SalaryRange)) else None
