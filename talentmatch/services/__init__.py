"""Service layer for TalentMatch request handlers."""

from talentmatch.services.match_service import (
    find_candidate,
    find_job,
    match_candidates,
    recommend_jobs,
)

__all__ = [
    "find_candidate",
    "find_job",
    "match_candidates",
    "recommend_jobs",
]
