"""Scoring policy: weights, thresholds and caps used by the scorer and ranker."""

import math

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from talentmatch import config
from talentmatch.utils import PolicyConfigurationError


def _parse_number(name: str, raw: str) -> float:
    try:
        number = float(raw)
    except (TypeError, ValueError) as e:
        raise PolicyConfigurationError(f"{name} must be a number, got {raw!r}") from e
    if not math.isfinite(number):
        raise PolicyConfigurationError(f"{name} must be a finite number, got {raw!r}")
    return number


def _setting(name: str, attr: str):
    """Default factory reading a config setting at construction time."""
    return lambda: _parse_number(name, getattr(config, attr))


class FactorWeights(BaseModel):
    """Weight applied to each 0-100 sub-score.

    Weights need not sum to 1; the total is clamped to [0, 100] either way.
    """

    model_config = ConfigDict(frozen=True, validate_default=True)

    skills: float = Field(
        default_factory=_setting("TALENTMATCH_SKILLS_WEIGHT", "SKILLS_WEIGHT"), ge=0
    )
    experience: float = Field(
        default_factory=_setting("TALENTMATCH_EXPERIENCE_WEIGHT", "EXPERIENCE_WEIGHT"), ge=0
    )
    location: float = Field(
        default_factory=_setting("TALENTMATCH_LOCATION_WEIGHT", "LOCATION_WEIGHT"), ge=0
    )
    job_type: float = Field(
        default_factory=_setting("TALENTMATCH_JOB_TYPE_WEIGHT", "JOB_TYPE_WEIGHT"), ge=0
    )
    language: float = Field(
        default_factory=_setting("TALENTMATCH_LANGUAGE_WEIGHT", "LANGUAGE_WEIGHT"), ge=0
    )
    salary: float = Field(
        default_factory=_setting("TALENTMATCH_SALARY_WEIGHT", "SALARY_WEIGHT"), ge=0
    )


class ScoringPolicy(BaseModel):
    """All tunable numbers of the matching pipeline.

    Unset fields take their value from the environment-backed settings in
    config when the policy is built.
    """

    model_config = ConfigDict(frozen=True, validate_default=True)

    weights: FactorWeights = Field(default_factory=FactorWeights)
    relevance_threshold: float = Field(
        default_factory=_setting("TALENTMATCH_RELEVANCE_THRESHOLD", "RELEVANCE_THRESHOLD"),
        ge=0,
        le=100,
        description="Candidates whose best score is below this are dropped"
    )
    result_cap: int = Field(
        default_factory=_setting("TALENTMATCH_RESULT_CAP", "RESULT_CAP"),
        ge=0,
        description="Maximum ranked results"
    )
    relocation_score: float = Field(
        default_factory=_setting("TALENTMATCH_RELOCATION_SCORE", "RELOCATION_SCORE"),
        ge=0,
        le=100,
        description="Location sub-score for candidates willing to relocate"
    )
    experience_decay: float = Field(
        default_factory=_setting("TALENTMATCH_EXPERIENCE_DECAY", "EXPERIENCE_DECAY_PER_YEAR"),
        ge=0,
        description="Experience sub-score lost per year outside the level band"
    )
    skill_match_threshold: float = Field(
        default_factory=_setting("TALENTMATCH_SKILL_MATCH_THRESHOLD", "SKILL_MATCH_THRESHOLD"),
        ge=0,
        le=100,
        description="Minimum RapidFuzz ratio for two compacted skill names to match"
    )


def policy_from_config() -> ScoringPolicy:
    """Build a policy from the environment-backed settings in config.

    Raises:
        PolicyConfigurationError: If a setting is not a finite number or is out of range.
    """
    try:
        return ScoringPolicy()
    except ValidationError as e:
        raise PolicyConfigurationError(f"Invalid scoring policy: {e}") from e


def get_default_policy() -> ScoringPolicy:
    """Policy used when a caller passes none; reflects the current config."""
    return policy_from_config()
