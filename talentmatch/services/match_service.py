"""Match service for the employer and candidate portals.

This service handles:
- Scoping a match request to the requester's company and its active jobs
- Narrowing the candidate pool (exclusions, search filters)
- Ranking candidates and building the candidate_id -> score lookup map
- Recommending jobs to a candidate with match reasons

The service never reads session state on its own; the request handler passes
a read-only RequestContext in.
"""

import logging

from talentmatch.explainer.reasons import build_match_reasons, find_missing_skills
from talentmatch.matching.filter import apply_filters, filter_jobs_for_company
from talentmatch.matching.policy import ScoringPolicy
from talentmatch.matching.ranker import build_score_map, rank_candidates, rank_jobs
from talentmatch.schemas.candidate import CandidateRecord
from talentmatch.schemas.job import JobRecord
from talentmatch.schemas.match import JobMatch
from talentmatch.schemas.request import MatchRequest, MatchResponse, RequestContext
from talentmatch.utils import MissingUserError, ensure_iterable

logger = logging.getLogger(__name__)


def resolve_company_id(request: MatchRequest, context: RequestContext) -> str | None:
    """Company to match for: the request's job filter wins over the session's."""
    return request.job_filter.company_id or context.company_id


def match_candidates(
    request: MatchRequest,
    context: RequestContext,
    policy: ScoringPolicy | None = None,
) -> MatchResponse:
    """Run the employer-side matching pipeline.

    Pipeline:
    1. Resolve the company from the job filter or the session
    2. Keep that company's active jobs
    3. Drop excluded candidates and apply search filters
    4. Rank candidates by their best job, threshold and cap
    5. Build the candidate_id -> match_score map

    Args:
        request: Candidates, jobs and filters supplied by the record source.
        context: Read-only session context.
        policy: Scoring policy (None uses the defaults).

    Returns:
        MatchResponse with ranked results and the score map.

    Raises:
        MissingUserError: If the context carries no user.
    """
    if not context.user_id:
        raise MissingUserError("User information is missing")

    company_id = resolve_company_id(request, context)
    if not company_id:
        logger.warning("Company not loaded yet; returning empty candidates")
        return MatchResponse()

    jobs = filter_jobs_for_company(request.jobs, company_id)
    logger.info(f"Found {len(jobs)} active jobs for company {company_id}")
    if not jobs:
        logger.info("No active jobs found for company")
        return MatchResponse()

    candidates = apply_filters(
        candidates=request.candidates,
        filters=request.filters,
        excluded_ids=request.excluded_candidate_ids,
    )
    logger.info(f"{len(candidates)} of {len(request.candidates)} candidates passed filters")

    results = rank_candidates(candidates, jobs, policy)
    if results:
        logger.info(f"Ranked {len(results)} candidates, top score {results[0].match_score}")
    else:
        logger.info("No candidates reached the relevance threshold")

    return MatchResponse(results=results, scores=build_score_map(results))


def recommend_jobs(
    candidate: CandidateRecord,
    jobs,
    policy: ScoringPolicy | None = None,
    top_n: int | None = None,
) -> list[JobMatch]:
    """Rank active jobs for a candidate and explain each match.

    Args:
        candidate: Candidate profile.
        jobs: Job records to consider.
        policy: Scoring policy (None uses the defaults).
        top_n: Maximum number of jobs to return (None for all).

    Returns:
        JobMatch objects sorted by match_score, with reasons and missing skills.
    """
    active_jobs = [job for job in ensure_iterable(jobs, "jobs") if job.is_active]
    logger.info(f"Scoring {len(active_jobs)} active jobs for candidate {candidate.id}")

    ranked = rank_jobs(candidate, active_jobs, policy, top_n=top_n)

    return [
        match.model_copy(
            update={
                "match_reasons": build_match_reasons(candidate, match.job, match.breakdown, policy),
                "missing_skills": find_missing_skills(candidate, match.job, policy),
            }
        )
        for match in ranked
    ]


def find_candidate(request: MatchRequest, candidate_id: str) -> CandidateRecord | None:
    """Look up a candidate in a request by id."""
    return next((c for c in request.candidates if c.id == candidate_id), None)


def find_job(request: MatchRequest, job_id: str) -> JobRecord | None:
    """Look up a job in a request by id."""
    return next((j for j in request.jobs if j.id == job_id), None)
