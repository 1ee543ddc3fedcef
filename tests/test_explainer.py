"""Tests for match explanations."""

from talentmatch.explainer.reasons import build_match_reasons, find_missing_skills
from talentmatch.matching.scorer import score_breakdown
from tests.test_utils import make_test_candidate, make_test_job


class TestFindMissingSkills:
    def test_lists_uncovered_skills_in_posting_order(self):
        candidate = make_test_candidate(skills=["python"])
        job = make_test_job(skills=["Docker", "Python", " Kubernetes "])

        assert find_missing_skills(candidate, job) == ["Docker", "Kubernetes"]

    def test_uses_fuzzy_skill_rule(self):
        candidate = make_test_candidate(skills=["nodejs"])
        job = make_test_job(skills=["Node.js"])

        assert find_missing_skills(candidate, job) == []

    def test_no_requirements(self):
        candidate = make_test_candidate(skills=["python"])

        assert find_missing_skills(candidate, make_test_job()) == []

    def test_duplicates_reported_once(self):
        candidate = make_test_candidate()
        job = make_test_job(skills=["Go", "go"])

        assert find_missing_skills(candidate, job) == ["Go"]


class TestBuildMatchReasons:
    def test_strong_match_reasons(self, berlin_candidate, berlin_job):
        breakdown = score_breakdown(berlin_candidate, berlin_job)

        reasons = build_match_reasons(berlin_candidate, berlin_job, breakdown)

        assert "Skills match: 2/2 required skills" in reasons
        assert "Experience level matches perfectly" in reasons
        assert "Job type matches preferences" in reasons
        assert "Location matches" in reasons

    def test_relocation_and_good_fit(self):
        candidate = make_test_candidate(
            skills=["react"], experience_years=7, location="Lisbon", willing_to_relocate=True
        )
        job = make_test_job(skills=["react", "node", "sql"], location="Berlin", experience_level="mid")
        breakdown = score_breakdown(candidate, job)

        reasons = build_match_reasons(candidate, job, breakdown)

        assert "Skills match: 1/3 required skills" in reasons
        assert "Open to relocation" in reasons
        assert "Experience level matches perfectly" not in reasons

    def test_no_reasons_for_empty_records(self):
        candidate = make_test_candidate()
        job = make_test_job()

        assert build_match_reasons(candidate, job, score_breakdown(candidate, job)) == []
