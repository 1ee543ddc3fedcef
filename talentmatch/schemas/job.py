import re
from enum import IntEnum

from pydantic import BaseModel, Field, field_validator

from talentmatch.schemas.candidate import SalaryRange, coerce_str_list

_LEVEL_WORDS = re.compile(r"\b(entry|mid|senior|lead|executive)\b")


class ExperienceLevel(IntEnum):
    """Job experience levels in ascending order.

    The integer values represent relative seniority for comparison.
    Use _missing_ for case-insensitive string parsing (e.g., from form input).
    """

    ENTRY = 0
    MID = 1
    SENIOR = 2
    LEAD = 3
    EXECUTIVE = 4

    @classmethod
    def _missing_(cls, value):
        """Allow case-insensitive string lookup."""
        if isinstance(value, str):
            value_lower = value.strip().lower()
            for member in cls:
                if member.name.lower() == value_lower:
                    return member
        return None

    @property
    def years_band(self) -> tuple[float, float]:
        """Inclusive range of experience years that fits this level."""
        return EXPERIENCE_BANDS[self]

    @classmethod
    def parse(cls, text) -> "ExperienceLevel | None":
        """Find a level in free text such as 'Mid-level' or 'Senior Engineer'.

        Level names must appear as whole words. When several appear
        ('Mid-Senior level'), the most senior one wins.
        """
        if isinstance(text, cls):
            return text
        if not isinstance(text, str):
            return None
        found = [cls[word.upper()] for word in _LEVEL_WORDS.findall(text.lower())]
        return max(found) if found else None


EXPERIENCE_BANDS: dict[ExperienceLevel, tuple[float, float]] = {
    ExperienceLevel.ENTRY: (0, 2),
    ExperienceLevel.MID: (2, 5),
    ExperienceLevel.SENIOR: (5, 8),
    ExperienceLevel.LEAD: (8, 12),
    ExperienceLevel.EXECUTIVE: (12, 50),
}


class JobRecord(BaseModel):
    """A job posting supplied by the record source for scoring."""

    id: str = Field(min_length=1, description="Unique identifier for the job")
    title: str | None = Field(default=None, description="Job title")
    company_id: str | None = Field(default=None, description="Owning company")
    status: str = Field(default="active", description="Posting status (active, closed, draft)")
    skills_required: list[str] = Field(default_factory=list, description="Required skills")
    location: str | None = Field(default=None, description="Job location")
    job_type: str | None = Field(default=None, description="Employment type (full-time, part-time, etc.)")
    experience_level: str | None = Field(default=None, description="Required experience level")
    preferred_language: str | None = Field(default=None, description="Preferred working language")
    salary_range: SalaryRange | None = Field(default=None, description="Offered salary range")

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, value):
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("skills_required", mode="before")
    @classmethod
    def _coerce_skills(cls, value):
        return coerce_str_list(value)

    @field_validator(
        "title", "company_id", "location", "job_type", "experience_level", "preferred_language",
        mode="before",
    )
    @classmethod
    def _coerce_optional_str(cls, value):
        if value is None:
            return None
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value if isinstance(value, str) else None

    @field_validator("status", mode="before")
    @classmethod
    def _coerce_status(cls, value):
        if isinstance(value, str) and value.strip():
            return value.strip().lower()
        return "active"

    @field_validator("salary_range", mode="before")
    @classmethod
    def _coerce_salary(cls, value):
        return value if isinstance(value, (dict, SalaryRange)) else None

    @property
    def level(self) -> ExperienceLevel | None:
        """Parsed experience level, or None when absent or unrecognized."""
        return ExperienceLevel.parse(self.experience_level)

    @property
    def is_active(self) -> bool:
        return self.status == "active"
