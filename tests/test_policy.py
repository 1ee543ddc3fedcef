"""Tests for scoring policy configuration."""

from unittest.mock import patch

import pytest
from pydantic import ValidationError

from talentmatch.matching.policy import (
    FactorWeights,
    ScoringPolicy,
    get_default_policy,
    policy_from_config,
)
from talentmatch.matching.ranker import rank_candidates
from talentmatch.matching.scorer import compute_experience_score
from talentmatch.utils import PolicyConfigurationError
from tests.test_utils import make_test_candidate, make_test_job


class TestScoringPolicy:
    def test_defaults(self):
        policy = get_default_policy()

        assert policy.relevance_threshold == 20
        assert policy.result_cap == 50
        assert policy.weights.skills == 0.40

    def test_skills_carry_largest_weight(self):
        weights = get_default_policy().weights.model_dump()

        assert max(weights, key=weights.get) == "skills"

    def test_negative_weight_rejected(self):
        with pytest.raises(ValidationError):
            FactorWeights(skills=-0.1)

    def test_threshold_out_of_range_rejected(self):
        with pytest.raises(ValidationError):
            ScoringPolicy(relevance_threshold=120)

    def test_unset_fields_read_config(self):
        with patch("talentmatch.config.RESULT_CAP", "7"):
            policy = ScoringPolicy(relevance_threshold=30)

        assert policy.relevance_threshold == 30
        assert policy.result_cap == 7


class TestPolicyFromConfig:
    def test_defaults_match_config(self):
        assert policy_from_config() == ScoringPolicy()

    def test_reads_overrides(self):
        with (
            patch("talentmatch.config.RESULT_CAP", "10"),
            patch("talentmatch.config.SKILLS_WEIGHT", "0.5"),
        ):
            policy = policy_from_config()

        assert policy.result_cap == 10
        assert policy.weights.skills == 0.5

    def test_non_numeric_setting_raises(self):
        with patch("talentmatch.config.RELEVANCE_THRESHOLD", "high"):
            with pytest.raises(PolicyConfigurationError, match="TALENTMATCH_RELEVANCE_THRESHOLD"):
                policy_from_config()

    def test_out_of_range_setting_raises(self):
        with patch("talentmatch.config.LOCATION_WEIGHT", "-1"):
            with pytest.raises(PolicyConfigurationError):
                policy_from_config()

    @pytest.mark.parametrize("raw", ["nan", "inf", "2.5"])
    def test_bad_result_cap_raises(self, raw):
        with patch("talentmatch.config.RESULT_CAP", raw):
            with pytest.raises(PolicyConfigurationError):
                policy_from_config()


class TestDefaultPolicyFollowsConfig:
    def test_rank_candidates_uses_configured_threshold(self):
        candidate = make_test_candidate(skills=["python"])
        job = make_test_job(skills=["python"])

        assert rank_candidates([candidate], [job])[0].match_score == 40

        with patch("talentmatch.config.RELEVANCE_THRESHOLD", "90"):
            assert rank_candidates([candidate], [job]) == []

    def test_scorer_uses_configured_decay(self):
        with patch("talentmatch.config.EXPERIENCE_DECAY_PER_YEAR", "10"):
            assert compute_experience_score("mid", 7) == 80.0
