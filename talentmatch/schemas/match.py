from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from talentmatch.schemas.candidate import CandidateRecord
from talentmatch.schemas.job import JobRecord


class MatchTier(str, Enum):
    """Human-readable band for a 0-100 match score."""

    EXCELLENT = "Excellent Match"
    GOOD = "Good Match"
    FAIR = "Fair Match"
    POOR = "Poor Match"

    @classmethod
    def from_score(cls, score: float) -> "MatchTier":
        if score >= 80:
            return cls.EXCELLENT
        if score >= 60:
            return cls.GOOD
        if score >= 40:
            return cls.FAIR
        return cls.POOR


class ScoreBreakdown(BaseModel):
    """Per-factor sub-scores (each 0-100) and the clamped weighted total."""

    model_config = ConfigDict(frozen=True)

    skills: float = Field(description="Share of required skills the candidate covers")
    experience: float = Field(description="Fit of experience years to the job level band")
    location: float = Field(description="Location or relocation fit")
    job_type: float = Field(description="Whether the job type is a preferred one")
    language: float = Field(description="Whether the candidate speaks the preferred language")
    salary: float = Field(description="Overlap of target and offered salary ranges")
    total: float = Field(description="Weighted sum clamped to [0, 100]")


class BestJobMatch(BaseModel):
    """The job a candidate scores highest on, among one employer's postings."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Job identifier")
    title: str | None = Field(default=None, description="Job title")
    location: str | None = Field(default=None, description="Job location")
    job_type: str | None = Field(default=None, description="Employment type")
    experience_level: str | None = Field(default=None, description="Required experience level")
    match_score: int = Field(description="The candidate's rounded score on this job (0-100)")

    @classmethod
    def from_job(cls, job: JobRecord, match_score: int) -> "BestJobMatch":
        return cls(
            id=job.id,
            title=job.title,
            location=job.location,
            job_type=job.job_type,
            experience_level=job.experience_level,
            match_score=match_score,
        )


class MatchResult(BaseModel):
    """Result of matching a candidate against an employer's open jobs."""

    model_config = ConfigDict(frozen=True)

    candidate: CandidateRecord = Field(
        description="The matched candidate, display fields unchanged"
    )
    match_score: int = Field(
        ge=0,
        le=100,
        description="Best score across the employer's jobs, clamped and rounded"
    )
    average_match_score: int = Field(
        ge=0,
        le=100,
        description="Mean score across all jobs; informational, not used for ranking"
    )
    best_job_match: BestJobMatch | None = Field(
        default=None,
        description="Highest-scoring job, absent when no job scored above zero"
    )

    @property
    def candidate_id(self) -> str:
        return self.candidate.id

    @property
    def tier(self) -> MatchTier:
        return MatchTier.from_score(self.match_score)


class JobMatch(BaseModel):
    """A job scored for one candidate (candidate portal view)."""

    model_config = ConfigDict(frozen=True)

    job: JobRecord = Field(description="The scored job")
    match_score: int = Field(ge=0, le=100, description="Rounded score (0-100)")
    breakdown: ScoreBreakdown = Field(description="Per-factor sub-scores")
    match_reasons: list[str] = Field(
        default_factory=list,
        description="Short statements on why the job fits"
    )
    missing_skills: list[str] = Field(
        default_factory=list,
        description="Required skills not found in the candidate's profile"
    )

    @property
    def tier(self) -> MatchTier:
        return MatchTier.from_score(self.match_score)
