"""Unit tests for thresholds, their validation and evaluation."""

import pytest

from complex_code_spotter.core.exceptions import ConfigurationError
from complex_code_spotter.features.complexity.thresholds import evaluate_scores, is_flagged
from complex_code_spotter.models.complexity import MetricKind, Thresholds, validate_threshold


class TestMetricKind:
    """Test metric name parsing."""

    def test_parse(self):
        assert MetricKind.parse("cyclomatic") is MetricKind.CYCLOMATIC
        assert MetricKind.parse(" Cognitive ") is MetricKind.COGNITIVE
        assert MetricKind.parse(MetricKind.COGNITIVE) is MetricKind.COGNITIVE

    def test_unknown_metric_lists_possible_values(self):
        with pytest.raises(ConfigurationError, match="Possible values: cyclomatic, cognitive"):
            MetricKind.parse("halstead")

    def test_default_threshold(self):
        assert MetricKind.CYCLOMATIC.default_threshold == 15
        assert MetricKind.COGNITIVE.default_threshold == 15


class TestThresholds:
    """Test Thresholds construction."""

    def test_defaults(self):
        thresholds = Thresholds.default_thresholds()
        assert thresholds.metrics == (MetricKind.CYCLOMATIC, MetricKind.COGNITIVE)
        assert thresholds.to_dict() == {"cyclomatic": 15, "cognitive": 15}

    def test_empty_pairs_give_defaults(self):
        assert Thresholds.from_pairs([]) == Thresholds.default_thresholds()

    def test_configured_metrics_only(self):
        thresholds = Thresholds.from_pairs([("cognitive", 20)])
        assert thresholds.metrics == (MetricKind.COGNITIVE,)
        assert thresholds.threshold_for(MetricKind.COGNITIVE) == 20

    def test_unconfigured_metric_falls_back_to_default(self):
        thresholds = Thresholds.from_pairs([("cognitive", 20)])
        assert thresholds.threshold_for(MetricKind.CYCLOMATIC) == 15

    def test_later_pairs_override(self):
        thresholds = Thresholds.from_pairs([("cyclomatic", 10), ("cognitive", 30), ("cyclomatic", 20)])
        assert thresholds.to_dict() == {"cyclomatic": 20, "cognitive": 30}

    def test_thresholds_are_immutable(self):
        thresholds = Thresholds.default_thresholds()
        with pytest.raises(TypeError):
            thresholds.values[MetricKind.CYCLOMATIC] = 1

    @pytest.mark.parametrize("value", [0, -5, "10", 1.5, True, None])
    def test_invalid_values(self, value):
        with pytest.raises(ConfigurationError):
            Thresholds.from_pairs([("cyclomatic", value)])

    def test_unknown_metric(self):
        with pytest.raises(ConfigurationError):
            Thresholds.from_pairs([("maintainability", 10)])

    def test_minimum_is_one(self):
        assert validate_threshold(MetricKind.CYCLOMATIC, 1) == 1

    def test_large_values_are_clamped(self):
        assert validate_threshold(MetricKind.CYCLOMATIC, 100) == 100
        assert validate_threshold(MetricKind.CYCLOMATIC, 250) == 100
        assert Thresholds.from_pairs([("cognitive", 1000)]).to_dict() == {"cognitive": 100}


class TestEvaluation:
    """Test threshold evaluation: a score must exceed its threshold."""

    def test_equal_score_not_flagged(self, score_factory):
        assert not is_flagged(score_factory(15), Thresholds.default_thresholds())

    def test_greater_score_flagged(self, score_factory):
        assert is_flagged(score_factory(16), Thresholds.default_thresholds())

    def test_uses_threshold_of_score_metric(self, score_factory):
        thresholds = Thresholds.from_pairs([("cyclomatic", 5), ("cognitive", 50)])
        assert is_flagged(score_factory(6, MetricKind.CYCLOMATIC), thresholds)
        assert not is_flagged(score_factory(6, MetricKind.COGNITIVE), thresholds)

    def test_unconfigured_metric_uses_default(self, score_factory):
        thresholds = Thresholds.from_pairs([("cyclomatic", 5)])
        assert not is_flagged(score_factory(15, MetricKind.COGNITIVE), thresholds)
        assert is_flagged(score_factory(16, MetricKind.COGNITIVE), thresholds)

    def test_evaluate_keeps_order(self, score_factory):
        scores = [score_factory(20), score_factory(3), score_factory(16)]
        flags = [flagged for _, flagged in evaluate_scores(scores, Thresholds.default_thresholds())]
        assert flags == [True, False, True]
