"""Tests for the match service."""

import pytest

from talentmatch.schemas.request import CandidateFilters, JobFilter, MatchRequest, RequestContext
from talentmatch.services import match_candidates, recommend_jobs
from talentmatch.utils import MissingUserError
from tests.test_utils import make_test_candidate, make_test_job


@pytest.fixture
def context():
    return RequestContext(user_id="user-1", company_id="acme")


class TestMatchCandidates:
    def test_missing_user_raises(self, berlin_candidate, berlin_job):
        request = MatchRequest(candidates=[berlin_candidate], jobs=[berlin_job])

        with pytest.raises(MissingUserError):
            match_candidates(request, RequestContext(company_id="acme"))

    def test_no_company_returns_empty(self, berlin_candidate, berlin_job):
        request = MatchRequest(candidates=[berlin_candidate], jobs=[berlin_job])

        response = match_candidates(request, RequestContext(user_id="user-1"))

        assert response.results == []
        assert response.scores == {}

    def test_ranks_and_builds_score_map(self, context, berlin_candidate, berlin_job):
        weak = make_test_candidate(id="weak", skills=["cobol"])
        request = MatchRequest(candidates=[weak, berlin_candidate], jobs=[berlin_job])

        response = match_candidates(request, context)

        assert [r.candidate_id for r in response.results] == ["cand-berlin"]
        assert response.scores == {"cand-berlin": 85}
        assert response.results[0].best_job_match.id == "job-berlin"

    def test_job_filter_overrides_session_company(self, berlin_candidate, berlin_job):
        request = MatchRequest(
            job_filter=JobFilter(company_id="other"),
            candidates=[berlin_candidate],
            jobs=[berlin_job],
        )

        response = match_candidates(request, RequestContext(user_id="u", company_id="acme"))

        assert response.results == []

    def test_ignores_inactive_jobs(self, context, berlin_candidate):
        closed = make_test_job(
            id="closed",
            skills=["react", "node"],
            location="Berlin",
            company_id="acme",
            status="closed",
        )
        request = MatchRequest(candidates=[berlin_candidate], jobs=[closed])

        assert match_candidates(request, context).results == []

    def test_excludes_hired_candidates(self, context, berlin_candidate, berlin_job):
        request = MatchRequest(
            candidates=[berlin_candidate],
            jobs=[berlin_job],
            excluded_candidate_ids=["cand-berlin"],
        )

        assert match_candidates(request, context).results == []

    def test_applies_candidate_filters(self, context, berlin_candidate, berlin_job):
        request = MatchRequest(
            candidates=[berlin_candidate],
            jobs=[berlin_job],
            filters=CandidateFilters(location="Munich"),
        )

        assert match_candidates(request, context).results == []

    def test_best_job_across_company_jobs(self, context, berlin_candidate, berlin_job):
        lisbon = make_test_job(id="lisbon", skills=["react"], location="Lisbon", company_id="acme")
        request = MatchRequest(candidates=[berlin_candidate], jobs=[lisbon, berlin_job])

        result = match_candidates(request, context).results[0]

        assert result.best_job_match.id == "job-berlin"
        assert result.average_match_score < result.match_score


class TestRecommendJobs:
    def test_adds_reasons_and_missing_skills(self, berlin_candidate, berlin_job):
        devops = make_test_job(id="devops", skills=["docker", "react"], location="Berlin")

        matches = recommend_jobs(berlin_candidate, [devops, berlin_job])

        assert [m.job.id for m in matches] == ["job-berlin", "devops"]
        assert "Location matches" in matches[0].match_reasons
        assert matches[0].missing_skills == []
        assert matches[1].missing_skills == ["docker"]

    def test_skips_inactive_jobs(self, berlin_candidate, berlin_job):
        closed = make_test_job(id="closed", status="closed")

        matches = recommend_jobs(berlin_candidate, [closed, berlin_job])

        assert [m.job.id for m in matches] == ["job-berlin"]

    def test_top_n(self, berlin_candidate):
        jobs = [make_test_job(id=str(i)) for i in range(5)]

        assert len(recommend_jobs(berlin_candidate, jobs, top_n=2)) == 2
