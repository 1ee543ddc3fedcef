import json
import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ValidationError

from talentmatch.schemas.candidate import CandidateRecord
from talentmatch.schemas.job import JobRecord
from talentmatch.schemas.request import CandidateFilters, JobFilter, MatchRequest
from talentmatch.utils import PayloadError

logger = logging.getLogger(__name__)


def _normalize_candidate(raw: dict) -> dict:
    """Normalize a job seeker row to match the CandidateRecord schema.

    Profile rows joined from the accounts table arrive nested under
    'profiles'; their display fields are lifted to the top level.
    """
    normalized = raw.copy()

    profile = normalized.pop("profiles", None)
    if isinstance(profile, dict):
        normalized.setdefault("name", profile.get("full_name"))
        normalized.setdefault("avatar_url", profile.get("avatar_url"))
        normalized.setdefault("phone", profile.get("phone"))

    return normalized


def _normalize_job(raw: dict) -> dict:
    """Normalize a job row to match the JobRecord schema.

    Location may arrive as a dict; prefer 'city', fall back to 'name'.
    """
    normalized = raw.copy()

    location = normalized.get("location")
    if isinstance(location, dict):
        normalized["location"] = location.get("city") or location.get("name")

    return normalized


def parse_records(
    rows: list[Any],
    model: type[BaseModel],
    kind: str,
) -> list:
    """Validate raw rows into records, skipping rows that fail validation.

    Args:
        rows: Raw row dicts.
        model: CandidateRecord or JobRecord.
        kind: Record kind for log messages.

    Returns:
        Valid records in input order.
    """
    normalize = _normalize_candidate if model is CandidateRecord else _normalize_job
    records = []
    for index, row in enumerate(rows):
        if not isinstance(row, dict):
            logger.warning(f"Skipping {kind} #{index}: expected an object, got {type(row).__name__}")
            continue
        try:
            records.append(model.model_validate(normalize(row)))
        except ValidationError as e:
            logger.warning(f"Skipping {kind} #{index}: {e.error_count()} validation error(s)")
    return records


def build_request(payload: Any) -> MatchRequest:
    """Build a MatchRequest from a decoded JSON payload.

    Raises:
        PayloadError: If the payload is not an object with list-valued
            'candidates' and 'jobs'.
    """
    if not isinstance(payload, dict):
        raise PayloadError("Match payload must be a JSON object")

    candidates_raw = payload.get("candidates", [])
    jobs_raw = payload.get("jobs", [])
    if not isinstance(candidates_raw, list) or not isinstance(jobs_raw, list):
        raise PayloadError("'candidates' and 'jobs' must be JSON arrays")

    excluded = payload.get("excluded_candidate_ids") or []
    if not isinstance(excluded, list):
        raise PayloadError("'excluded_candidate_ids' must be a JSON array")

    try:
        job_filter = JobFilter.model_validate(payload.get("job_filter") or {})
        filters = CandidateFilters.model_validate(payload.get("filters") or {})
    except ValidationError as e:
        raise PayloadError(f"Invalid filters in match payload: {e}") from e

    candidates = parse_records(candidates_raw, CandidateRecord, "candidate")
    jobs = parse_records(jobs_raw, JobRecord, "job")
    logger.info(f"Loaded {len(candidates)} candidates and {len(jobs)} jobs")

    return MatchRequest(
        job_filter=job_filter,
        candidates=candidates,
        jobs=jobs,
        excluded_candidate_ids=[str(item) for item in excluded],
        filters=filters,
    )


def load_request(file_path: Path) -> MatchRequest:
    """Load a match payload from a JSON file.

    Args:
        file_path: Path to a JSON file with job_filter, candidates and jobs.

    Returns:
        Validated MatchRequest.

    Raises:
        PayloadError: If the file cannot be read, is not UTF-8 JSON or has
            the wrong shape.
    """
    try:
        with open(file_path, encoding="utf-8") as f:
            payload = json.load(f)
    except UnicodeDecodeError as e:
        raise PayloadError(f"{file_path} is not UTF-8 encoded: {e}") from e
    except json.JSONDecodeError as e:
        raise PayloadError(f"{file_path} is not valid JSON: {e}") from e
    except OSError as e:
        raise PayloadError(f"Could not read {file_path}: {e}") from e

    return build_request(payload)
