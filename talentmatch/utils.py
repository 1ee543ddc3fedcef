"""Shared utilities for talentmatch."""

import math
import re
from collections.abc import Iterable

_SEPARATORS = re.compile(r"[\s_\-]+")


class TalentMatchError(Exception):
    """Base class for talentmatch errors."""

    pass


class PolicyConfigurationError(TalentMatchError):
    """Raised when scoring policy settings are not valid numbers."""

    pass


class PayloadError(TalentMatchError):
    """Raised when a match payload does not have the expected shape."""

    pass


class MissingUserError(TalentMatchError):
    """Raised when a match request arrives without a requesting user."""

    pass


def normalize_term(value) -> str:
    """Lowercase and trim a free-text term. Non-strings normalize to ''."""
    if not isinstance(value, str):
        return ""
    return value.strip().lower()


def normalize_job_type(value) -> str:
    """Normalize job type spellings so 'Full Time' == 'full_time' == 'full-time'."""
    return _SEPARATORS.sub("-", normalize_term(value))


def normalize_terms(values: Iterable | None) -> list[str]:
    """Normalize a collection of terms, dropping empties and keeping order."""
    if not values:
        return []
    seen = set()
    terms = []
    for value in values:
        term = normalize_term(value)
        if term and term not in seen:
            seen.add(term)
            terms.append(term)
    return terms


def round_score(score: float) -> int:
    """Round half up (2.5 -> 3), unlike Python's banker's rounding."""
    return int(math.floor(score + 0.5))


def clamp_score(score: float) -> float:
    """Clamp a score into [0, 100]. NaN clamps to 0."""
    if math.isnan(score):
        return 0.0
    return max(0.0, min(100.0, score))


def ensure_iterable(value, name: str) -> list:
    """Materialize an iterable argument, raising TypeError for anything else.

    Strings and mappings are rejected since iterating them yields characters
    or keys rather than records.
    """
    if isinstance(value, (str, bytes, dict)) or not isinstance(value, Iterable):
        raise TypeError(f"{name} must be an iterable of records, got {type(value).__name__}")
    return list(value)
