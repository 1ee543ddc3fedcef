"""Deterministic explanations for candidate/job matches."""

from talentmatch.matching.policy import ScoringPolicy, get_default_policy
from talentmatch.matching.scorer import matched_skills
from talentmatch.schemas.candidate import CandidateRecord
from talentmatch.schemas.job import JobRecord
from talentmatch.schemas.match import ScoreBreakdown
from talentmatch.utils import normalize_term, normalize_terms


def find_missing_skills(
    candidate: CandidateRecord,
    job: JobRecord,
    policy: ScoringPolicy | None = None,
) -> list[str]:
    """Identify skills required by the job that the candidate doesn't have.

    Uses the same matching rule as the skills sub-score, so a skill reported
    missing here is exactly one that did not count toward the score.

    Returns:
        Missing skills as written in the job posting, in posting order.
    """
    policy = policy or get_default_policy()
    covered = set(
        matched_skills(job.skills_required, candidate.skills, policy.skill_match_threshold)
    )

    missing = []
    seen = set()
    for skill in job.skills_required:
        term = normalize_term(skill)
        if term and term not in covered and term not in seen:
            seen.add(term)
            missing.append(skill.strip())
    return missing


def build_match_reasons(
    candidate: CandidateRecord,
    job: JobRecord,
    breakdown: ScoreBreakdown,
    policy: ScoringPolicy | None = None,
) -> list[str]:
    """Summarize why a job fits a candidate in a few short statements."""
    policy = policy or get_default_policy()
    reasons = []

    required = normalize_terms(job.skills_required)
    if breakdown.skills > 0 and required:
        covered = matched_skills(required, candidate.skills, policy.skill_match_threshold)
        reasons.append(f"Skills match: {len(covered)}/{len(required)} required skills")

    if breakdown.experience > 80:
        reasons.append("Experience level matches perfectly")
    elif breakdown.experience > 60:
        reasons.append("Experience level is a good fit")

    if breakdown.job_type > 0:
        reasons.append("Job type matches preferences")

    if breakdown.location >= 100:
        reasons.append("Location matches")
    elif breakdown.location > 0:
        reasons.append("Open to relocation")

    if breakdown.language > 0:
        reasons.append("Speaks the preferred language")

    if breakdown.salary >= 100:
        reasons.append("Salary expectations fit the offered range")
    elif breakdown.salary > 0:
        reasons.append("Salary expectations partially overlap the offered range")

    return reasons
