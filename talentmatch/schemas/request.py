from pydantic import BaseModel, ConfigDict, Field, field_validator

from talentmatch.schemas.candidate import CandidateRecord
from talentmatch.schemas.job import JobRecord
from talentmatch.schemas.match import MatchResult


def _stringify_id(value):
    """Accept numeric ids from JSON the same way the record schemas do."""
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return value


class RequestContext(BaseModel):
    """Read-only view of the requesting session, injected by the handler."""

    model_config = ConfigDict(frozen=True)

    user_id: str | None = Field(default=None, description="Authenticated user")
    company_id: str | None = Field(default=None, description="Company the user belongs to")

    @field_validator("user_id", "company_id", mode="before")
    @classmethod
    def _stringify_ids(cls, value):
        return _stringify_id(value)


class JobFilter(BaseModel):
    """Selects which jobs take part in a match request."""

    company_id: str | None = Field(default=None, description="Only jobs of this company")

    @field_validator("company_id", mode="before")
    @classmethod
    def _stringify_company(cls, value):
        return _stringify_id(value)


class CandidateFilters(BaseModel):
    """Optional narrowing of the candidate pool before ranking."""

    location: str | None = Field(default=None, description="Substring of current location")
    skill: str | None = Field(default=None, description="Skill the candidate must list")
    search_term: str | None = Field(default=None, description="Fuzzy search over name/headline/summary")
    experience: str | None = Field(default=None, description="Experience level band (entry, mid, ...)")


class MatchRequest(BaseModel):
    """Input of an employer-side match request."""

    job_filter: JobFilter = Field(default_factory=JobFilter)
    candidates: list[CandidateRecord] = Field(default_factory=list)
    jobs: list[JobRecord] = Field(default_factory=list)
    excluded_candidate_ids: list[str] = Field(
        default_factory=list,
        description="Candidates never to show (e.g. already hired)"
    )
    filters: CandidateFilters = Field(default_factory=CandidateFilters)


class MatchResponse(BaseModel):
    """Ranked results plus a candidate_id -> match_score lookup map."""

    results: list[MatchResult] = Field(default_factory=list)
    scores: dict[str, int] = Field(default_factory=dict)
