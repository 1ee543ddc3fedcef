"""Deterministic candidate/job compatibility scoring.

Every function here is pure: the same candidate, job and policy always give
the same score, and missing or malformed optional fields contribute zero
instead of raising.
"""

import re

from rapidfuzz import fuzz

from talentmatch.matching.policy import ScoringPolicy, get_default_policy
from talentmatch.schemas.candidate import CandidateRecord, SalaryRange
from talentmatch.schemas.job import ExperienceLevel, JobRecord
from talentmatch.schemas.match import ScoreBreakdown
from talentmatch.utils import clamp_score, normalize_job_type, normalize_term, normalize_terms

FULL_SCORE = 100.0
REMOTE_MARKER = "remote"

# Separators that never distinguish two skills; '+', '#' and other symbols do.
_SKILL_SEPARATORS = re.compile(r"[\s.\-_/]+")


def compact_skill(term: str) -> str:
    """Drop separators from a normalized skill ('node.js' -> 'nodejs')."""
    return _SKILL_SEPARATORS.sub("", term)


def skills_match(
    required: str,
    candidate_skill: str,
    threshold: float | None = None,
) -> bool:
    """Check whether a candidate skill covers a required skill.

    Both terms must already be normalized. Exact equality always matches;
    otherwise the compacted names must reach the RapidFuzz ratio threshold.
    That absorbs spelling variants ('React Native' vs 'react-native') while
    symbols are kept, so 'c#' never covers 'c++' and a single word never
    covers a longer skill such as 'machine learning'.
    """
    if required == candidate_skill:
        return True
    if threshold is None:
        threshold = get_default_policy().skill_match_threshold
    left = compact_skill(required)
    right = compact_skill(candidate_skill)
    if not left or not right:
        return False
    return fuzz.ratio(left, right) >= threshold


def matched_skills(
    job_skills,
    candidate_skills,
    threshold: float | None = None,
) -> list[str]:
    """Return the normalized required skills covered by any candidate skill."""
    required = normalize_terms(job_skills)
    have = normalize_terms(candidate_skills)
    if not required or not have:
        return []
    if threshold is None:
        threshold = get_default_policy().skill_match_threshold
    return [
        skill for skill in required
        if any(skills_match(skill, own, threshold) for own in have)
    ]


def compute_skills_score(
    job_skills,
    candidate_skills,
    threshold: float | None = None,
) -> float:
    """Share of required skills the candidate covers, scaled to 0-100.

    Args:
        job_skills: Skills required by the job.
        candidate_skills: Skills listed by the candidate.
        threshold: Minimum fuzzy ratio for a non-exact skill match
            (None uses the configured policy).

    Returns:
        0 when either side is empty, else matched/required * 100.
    """
    required = normalize_terms(job_skills)
    if not required:
        return 0.0
    covered = matched_skills(required, candidate_skills, threshold)
    return FULL_SCORE * len(covered) / len(required)


def compute_experience_score(
    experience_level,
    experience_years: float | None,
    decay: float | None = None,
) -> float:
    """Score how well experience years fit the job level's band.

    Inside the band scores 100; each year outside it costs `decay` points,
    never going below 0. Unknown level or missing years score 0.
    """
    level = ExperienceLevel.parse(experience_level)
    if level is None or experience_years is None:
        return 0.0
    if decay is None:
        decay = get_default_policy().experience_decay
    low, high = level.years_band
    if experience_years < low:
        distance = low - experience_years
    elif experience_years > high:
        distance = experience_years - high
    else:
        return FULL_SCORE
    return max(0.0, FULL_SCORE - decay * distance)


def compute_location_score(
    candidate_location,
    job_location,
    willing_to_relocate: bool,
    relocation_score: float | None = None,
) -> float:
    """Score location fit.

    Full score when the normalized locations are equal or one contains the
    other ('Berlin' and 'Berlin, Germany'), or when the job is remote.
    Otherwise a willing-to-relocate candidate gets `relocation_score`.
    """
    job_loc = normalize_term(job_location)
    if not job_loc:
        return 0.0
    if REMOTE_MARKER in job_loc:
        return FULL_SCORE
    cand_loc = normalize_term(candidate_location)
    if cand_loc and (cand_loc == job_loc or cand_loc in job_loc or job_loc in cand_loc):
        return FULL_SCORE
    if willing_to_relocate:
        if relocation_score is None:
            relocation_score = get_default_policy().relocation_score
        return relocation_score
    return 0.0


def compute_job_type_score(job_type, preferred_job_types) -> float:
    """Full score when the job type is one of the candidate's preferences."""
    wanted = normalize_job_type(job_type)
    if not wanted or not preferred_job_types:
        return 0.0
    preferred = {normalize_job_type(value) for value in preferred_job_types}
    return FULL_SCORE if wanted in preferred else 0.0


def compute_language_score(preferred_language, candidate_languages) -> float:
    """Full score when a candidate language matches the job's preferred one."""
    target = normalize_term(preferred_language)
    if not target:
        return 0.0
    for language in normalize_terms(candidate_languages):
        if language in target or target in language:
            return FULL_SCORE
    return 0.0


def compute_salary_score(
    candidate_range: SalaryRange | None,
    job_range: SalaryRange | None,
) -> float:
    """Score overlap between the target and offered salary ranges.

    A target range inside the offered range scores 100. Partial overlap
    scores 60 plus up to 40 by the overlapping share of the target range.
    No overlap, or a missing range, scores 0.
    """
    if candidate_range is None or job_range is None:
        return 0.0
    cand_bounds = candidate_range.bounds()
    job_bounds = job_range.bounds()
    if cand_bounds is None or job_bounds is None:
        return 0.0
    c_min, c_max = cand_bounds
    j_min, j_max = job_bounds
    if c_min >= j_min and c_max <= j_max:
        return FULL_SCORE
    overlap = min(c_max, j_max) - max(c_min, j_min)
    if overlap <= 0:
        return 0.0
    span = max(1.0, c_max - c_min)
    ratio = min(1.0, overlap / span)
    return 60.0 + ratio * 40.0


def score_breakdown(
    candidate: CandidateRecord,
    job: JobRecord,
    policy: ScoringPolicy | None = None,
) -> ScoreBreakdown:
    """Compute every sub-score and the clamped weighted total.

    Args:
        candidate: Candidate to score.
        job: Job to score against.
        policy: Weights and thresholds (None uses the defaults).

    Returns:
        ScoreBreakdown with sub-scores in [0, 100] and total in [0, 100].
    """
    policy = policy or get_default_policy()
    weights = policy.weights

    skills = compute_skills_score(
        job.skills_required, candidate.skills, policy.skill_match_threshold
    )
    experience = compute_experience_score(
        job.experience_level, candidate.experience_years, policy.experience_decay
    )
    location = compute_location_score(
        candidate.current_location,
        job.location,
        candidate.willing_to_relocate,
        policy.relocation_score,
    )
    job_type = compute_job_type_score(job.job_type, candidate.preferred_job_types)
    language = compute_language_score(job.preferred_language, candidate.languages)
    salary = compute_salary_score(candidate.target_salary_range, job.salary_range)

    total = (
        weights.skills * skills
        + weights.experience * experience
        + weights.location * location
        + weights.job_type * job_type
        + weights.language * language
        + weights.salary * salary
    )

    return ScoreBreakdown(
        skills=skills,
        experience=experience,
        location=location,
        job_type=job_type,
        language=language,
        salary=salary,
        total=clamp_score(total),
    )


def score_match(
    candidate: CandidateRecord,
    job: JobRecord,
    policy: ScoringPolicy | None = None,
) -> float:
    """Compute the compatibility score of one candidate for one job.

    Returns:
        Weighted score clamped to [0, 100] (not rounded).
    """
    return score_breakdown(candidate, job, policy).total
