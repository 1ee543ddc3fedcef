"""Candidate ranking across an employer's jobs, and job ranking for a candidate."""

import logging

import numpy as np

from talentmatch.matching.policy import ScoringPolicy, get_default_policy
from talentmatch.matching.scorer import score_breakdown, score_match
from talentmatch.schemas.candidate import CandidateRecord
from talentmatch.schemas.job import JobRecord
from talentmatch.schemas.match import BestJobMatch, JobMatch, MatchResult
from talentmatch.utils import clamp_score, ensure_iterable, round_score

logger = logging.getLogger(__name__)


def compute_score_matrix(
    candidates: list[CandidateRecord],
    jobs: list[JobRecord],
    policy: ScoringPolicy | None = None,
) -> np.ndarray:
    """Score every candidate against every job.

    Returns:
        Array of shape (n_candidates, n_jobs) with scores in [0, 100].
    """
    matrix = np.zeros((len(candidates), len(jobs)))
    for i, candidate in enumerate(candidates):
        for j, job in enumerate(jobs):
            matrix[i, j] = score_match(candidate, job, policy)
    return matrix


def rank_candidates(
    candidates,
    jobs,
    policy: ScoringPolicy | None = None,
) -> list[MatchResult]:
    """Rank candidates by their best match among a set of jobs.

    Each candidate is scored against every job. The best job is the one with
    the strictly highest score (ties go to the earliest job). Candidates whose
    rounded best score is under the relevance threshold are dropped, the rest
    are sorted by score descending (stable on ties) and capped.

    Args:
        candidates: Candidate records.
        jobs: The employer's job records.
        policy: Weights, threshold and cap (None uses the defaults).

    Returns:
        List of MatchResult objects sorted by match_score descending.

    Raises:
        TypeError: If candidates or jobs is not an iterable of records.
    """
    policy = policy or get_default_policy()
    candidates = ensure_iterable(candidates, "candidates")
    jobs = ensure_iterable(jobs, "jobs")

    if not jobs or not candidates:
        return []

    scores = compute_score_matrix(candidates, jobs, policy)
    # argmax returns the first index among equal maxima
    best_indices = scores.argmax(axis=1)
    best_scores = scores[np.arange(len(candidates)), best_indices]
    average_scores = scores.mean(axis=1)

    results = []
    for candidate, best_index, best_score, average in zip(
        candidates, best_indices, best_scores, average_scores
    ):
        match_score = round_score(clamp_score(float(best_score)))
        if match_score < policy.relevance_threshold:
            continue

        best_job_match = None
        if best_score > 0:
            best_job_match = BestJobMatch.from_job(jobs[int(best_index)], match_score)

        results.append(
            MatchResult(
                candidate=candidate,
                match_score=match_score,
                average_match_score=round_score(clamp_score(float(average))),
                best_job_match=best_job_match,
            )
        )

    logger.debug(
        f"{len(results)} of {len(candidates)} candidates reached the relevance threshold"
    )

    # list.sort is stable, including with reverse=True
    results.sort(key=lambda r: r.match_score, reverse=True)
    return results[:policy.result_cap]


def rank_jobs(
    candidate: CandidateRecord,
    jobs,
    policy: ScoringPolicy | None = None,
    top_n: int | None = None,
) -> list[JobMatch]:
    """Rank jobs by how well they fit one candidate.

    Args:
        candidate: Candidate to match against.
        jobs: Job records to score.
        policy: Weights and thresholds (None uses the defaults).
        top_n: Maximum number of results to return (None for all).

    Returns:
        List of JobMatch objects sorted by match_score descending.
    """
    jobs = ensure_iterable(jobs, "jobs")
    if not jobs:
        return []
    policy = policy or get_default_policy()

    results = []
    for job in jobs:
        breakdown = score_breakdown(candidate, job, policy)
        results.append(
            JobMatch(
                job=job,
                match_score=round_score(breakdown.total),
                breakdown=breakdown,
            )
        )

    results.sort(key=lambda r: r.match_score, reverse=True)

    if top_n is not None:
        results = results[:max(top_n, 0)]

    return results


def build_score_map(results: list[MatchResult]) -> dict[str, int]:
    """Map candidate_id to match_score for quick lookup by consumers."""
    return {result.candidate_id: result.match_score for result in results}
