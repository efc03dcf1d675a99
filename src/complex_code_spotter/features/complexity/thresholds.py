"""Threshold evaluation for complexity scores."""

from typing import Iterable, List, Tuple

from complex_code_spotter.models.complexity import Score, Thresholds


def is_flagged(score: Score, thresholds: Thresholds) -> bool:
    """A score is flagged only when it strictly exceeds its threshold."""
    return score.value > thresholds.threshold_for(score.metric)


def evaluate_scores(scores: Iterable[Score], thresholds: Thresholds) -> List[Tuple[Score, bool]]:
    """Pair each score with its flagged state, keeping input order."""
    return [(score, is_flagged(score, thresholds)) for score in scores]
