"""Deterministic candidate filters applied before ranking."""

from rapidfuzz import fuzz
from rapidfuzz.utils import default_process

from talentmatch.config import SEARCH_MATCH_THRESHOLD
from talentmatch.schemas.candidate import CandidateRecord
from talentmatch.schemas.job import ExperienceLevel, JobRecord
from talentmatch.schemas.request import CandidateFilters
from talentmatch.utils import normalize_term, normalize_terms

# Filter values that mean "no filter" in the portal's dropdowns
ALL = "all"


def _is_unset(value: str | None) -> bool:
    term = normalize_term(value)
    return not term or term == ALL


def filter_excluded(
    candidates: list[CandidateRecord],
    excluded_ids,
) -> list[CandidateRecord]:
    """Drop candidates whose id is in excluded_ids (e.g. already hired)."""
    excluded = set(excluded_ids or [])
    if not excluded:
        return candidates
    return [candidate for candidate in candidates if candidate.id not in excluded]


def filter_by_location(
    candidates: list[CandidateRecord],
    location: str | None,
) -> list[CandidateRecord]:
    """Filter candidates whose current location contains the given location.

    Args:
        candidates: Candidates to filter.
        location: Desired location (None or 'all' means no filter).

    Returns:
        Candidates matching location criteria.
    """
    if _is_unset(location):
        return candidates

    location_lower = normalize_term(location)
    return [
        candidate for candidate in candidates
        if location_lower in normalize_term(candidate.current_location)
    ]


def filter_by_skill(
    candidates: list[CandidateRecord],
    skill: str | None,
) -> list[CandidateRecord]:
    """Keep candidates that list the given skill (case-insensitive)."""
    if _is_unset(skill):
        return candidates

    wanted = normalize_term(skill)
    return [candidate for candidate in candidates if wanted in normalize_terms(candidate.skills)]


def filter_by_search_term(
    candidates: list[CandidateRecord],
    search_term: str | None,
    threshold: int = SEARCH_MATCH_THRESHOLD,
) -> list[CandidateRecord]:
    """Fuzzy search over candidate name, headline and summary.

    Args:
        candidates: Candidates to filter.
        search_term: Free-text query (None means no filter).
        threshold: Minimum RapidFuzz partial_ratio (0-100).

    Returns:
        Candidates with at least one field matching the query.
    """
    if not normalize_term(search_term):
        return candidates

    results = []
    for candidate in candidates:
        fields = [candidate.name, candidate.headline, candidate.summary]
        if any(
            field and fuzz.partial_ratio(search_term, field, processor=default_process) >= threshold
            for field in fields
        ):
            results.append(candidate)
    return results


def filter_by_experience(
    candidates: list[CandidateRecord],
    experience: str | None,
) -> list[CandidateRecord]:
    """Keep candidates whose experience years fall inside a level's band.

    Unrecognized levels disable the filter; candidates without experience
    data are dropped when the filter is active.
    """
    if _is_unset(experience):
        return candidates

    level = ExperienceLevel.parse(experience)
    if level is None:
        return candidates

    low, high = level.years_band
    return [
        candidate for candidate in candidates
        if candidate.experience_years is not None and low <= candidate.experience_years <= high
    ]


def filter_jobs_for_company(
    jobs: list[JobRecord],
    company_id: str | None,
) -> list[JobRecord]:
    """Keep active jobs of the given company.

    Jobs carrying no company_id are treated as already scoped to the requester.
    """
    return [
        job for job in jobs
        if job.is_active and (company_id is None or job.company_id in (None, company_id))
    ]


def apply_filters(
    candidates: list[CandidateRecord],
    filters: CandidateFilters | None = None,
    excluded_ids=None,
) -> list[CandidateRecord]:
    """Apply exclusions and all candidate filters.

    Args:
        candidates: Candidate records.
        filters: Optional narrowing criteria.
        excluded_ids: Candidate ids never to return.

    Returns:
        Candidates passing every filter, in input order.
    """
    # Exclusions first (just an id lookup)
    candidates = filter_excluded(candidates, excluded_ids)
    if filters is None:
        return candidates

    candidates = filter_by_location(candidates, filters.location)
    candidates = filter_by_skill(candidates, filters.skill)
    candidates = filter_by_experience(candidates, filters.experience)
    candidates = filter_by_search_term(candidates, filters.search_term)

    return candidates
