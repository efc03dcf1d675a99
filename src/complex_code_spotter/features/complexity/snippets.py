"""
Snippet extraction.

Turns flagged scores into Snippet records carrying a copy of the unit's
source lines. A unit flagged by several metrics yields one snippet per
metric; no deduplication happens across metrics.
"""

from typing import Iterable, List, Tuple

from complex_code_spotter.models.complexity import Score, Snippet, Thresholds
from complex_code_spotter.utils.text import slice_lines


def extract_snippets(
    evaluations: Iterable[Tuple[Score, bool]],
    thresholds: Thresholds,
    source: str,
    source_path: str,
) -> List[Snippet]:
    """Build one snippet per flagged score.

    Args:
        evaluations: (score, flagged) pairs for one file
        thresholds: Thresholds the scores were evaluated against
        source: Full text of the file
        source_path: Path of the file, stored on every snippet

    Returns:
        Snippets ordered by unit discovery order, then by metric order
    """
    metric_order = {metric: position for position, metric in enumerate(thresholds.metrics)}
    flagged = [score for score, is_flagged in evaluations if is_flagged]
    flagged.sort(key=lambda score: (score.unit.index, metric_order.get(score.metric, len(metric_order))))

    return [
        Snippet(
            unit=score.unit,
            metric=score.metric,
            score=score,
            threshold=thresholds.threshold_for(score.metric),
            text=slice_lines(source, score.unit.span.start_line, score.unit.span.end_line),
            source_path=source_path,
        )
        for score in flagged
    ]
