"""Data models for code complexity analysis."""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Tuple, Union

from complex_code_spotter.constants import ComplexityDefaults
from complex_code_spotter.core.exceptions import ConfigurationError
from complex_code_spotter.core.logging import get_logger
from complex_code_spotter.models.syntax import Span, SyntaxNode


class MetricKind(str, Enum):
    """Supported complexity metrics."""

    CYCLOMATIC = "cyclomatic"
    COGNITIVE = "cognitive"

    @property
    def default_threshold(self) -> int:
        return ComplexityDefaults.THRESHOLD

    @classmethod
    def names(cls) -> List[str]:
        return [metric.value for metric in cls]

    @classmethod
    def parse(cls, value: Union[str, "MetricKind"]) -> "MetricKind":
        """Resolve a metric from its name.

        Raises:
            ConfigurationError: If the metric is not supported
        """
        if isinstance(value, MetricKind):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ConfigurationError(
                f"Unknown complexity metric '{value}'. Possible values: {', '.join(cls.names())}"
            ) from None


def validate_threshold(metric: MetricKind, threshold: Any) -> int:
    """Check a threshold value for one metric.

    Thresholds must be integers of at least 1. Values above the maximum are
    clamped to it.

    Raises:
        ConfigurationError: If the value is not an integer or below 1
    """
    if isinstance(threshold, bool) or not isinstance(threshold, int):
        raise ConfigurationError(f"Threshold for {metric.value} must be an integer, got {threshold!r}")
    if threshold < ComplexityDefaults.MIN_THRESHOLD:
        raise ConfigurationError(
            f"Threshold for {metric.value} must be at least {ComplexityDefaults.MIN_THRESHOLD}, got {threshold}"
        )
    if threshold > ComplexityDefaults.MAX_THRESHOLD:
        get_logger("complexity.thresholds").warning(
            "threshold_clamped",
            metric=metric.value,
            requested=threshold,
            applied=ComplexityDefaults.MAX_THRESHOLD,
        )
        return ComplexityDefaults.MAX_THRESHOLD
    return threshold


@dataclass(frozen=True)
class Thresholds:
    """Per-metric thresholds.

    The configured metrics are the ones computed during a run; metrics that
    were never configured fall back to the default threshold when asked.
    """

    values: Mapping[MetricKind, int] = field(default_factory=lambda: MappingProxyType({}))
    default: int = ComplexityDefaults.THRESHOLD

    @classmethod
    def from_pairs(cls, pairs: Iterable[Tuple[Union[str, MetricKind], int]]) -> "Thresholds":
        """Build thresholds from (metric, threshold) pairs.

        Later entries for the same metric override earlier ones. An empty
        sequence yields the defaults for every metric.
        """
        values: Dict[MetricKind, int] = {}
        for metric_name, threshold in pairs:
            metric = MetricKind.parse(metric_name)
            values[metric] = validate_threshold(metric, threshold)
        if not values:
            return cls.default_thresholds()
        return cls(values=MappingProxyType(values))

    @classmethod
    def default_thresholds(cls) -> "Thresholds":
        return cls(values=MappingProxyType({
            MetricKind.CYCLOMATIC: ComplexityDefaults.CYCLOMATIC_THRESHOLD,
            MetricKind.COGNITIVE: ComplexityDefaults.COGNITIVE_THRESHOLD,
        }))

    @property
    def metrics(self) -> Tuple[MetricKind, ...]:
        return tuple(self.values)

    def threshold_for(self, metric: MetricKind) -> int:
        return self.values.get(metric, self.default)

    def to_dict(self) -> Dict[str, int]:
        return {metric.value: threshold for metric, threshold in self.values.items()}


@dataclass(frozen=True)
class CodeUnit:
    """A function, method, closure or lambda scored on its own."""

    name: str
    qualified_name: str
    span: Span
    index: int
    root: SyntaxNode = field(compare=False, repr=False)


@dataclass(frozen=True)
class Score:
    """Value of one metric for one unit."""

    metric: MetricKind
    unit: CodeUnit
    value: int


@dataclass(frozen=True)
class Snippet:
    """Source text of a unit whose score exceeded a threshold."""

    unit: CodeUnit
    metric: MetricKind
    score: Score
    threshold: int
    text: str
    source_path: str

    @property
    def complexity(self) -> int:
        return self.score.value

    @property
    def start_line(self) -> int:
        return self.unit.span.start_line

    @property
    def end_line(self) -> int:
        return self.unit.span.end_line

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.unit.qualified_name,
            "complexity": self.complexity,
            "threshold": self.threshold,
            "start_line": self.start_line,
            "end_line": self.end_line,
            "text": self.text,
        }


@dataclass
class FileSnippets:
    """Snippets extracted from one source file."""

    source_path: str
    language: str
    snippets: List[Snippet] = field(default_factory=list)
    units_analyzed: int = 0

    def by_metric(self) -> Dict[MetricKind, List[Snippet]]:
        """Group snippets by metric, keeping first-seen metric order."""
        grouped: Dict[MetricKind, List[Snippet]] = {}
        for snippet in self.snippets:
            grouped.setdefault(snippet.metric, []).append(snippet)
        return grouped

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source_path": self.source_path,
            "language": self.language,
            "snippets": {
                metric.value: [snippet.to_dict() for snippet in snippets]
                for metric, snippets in self.by_metric().items()
            },
        }


@dataclass(frozen=True)
class FileFailure:
    """A file whose analysis was abandoned."""

    source_path: str
    kind: str
    message: str

    def to_dict(self) -> Dict[str, str]:
        return {"source_path": self.source_path, "kind": self.kind, "message": self.message}


@dataclass
class AnalysisReport:
    """Outcome of analyzing a batch of files."""

    files: List[FileSnippets] = field(default_factory=list)
    failures: List[FileFailure] = field(default_factory=list)
    thresholds: Thresholds = field(default_factory=Thresholds.default_thresholds)
    execution_time_seconds: float = 0.0

    @property
    def files_with_snippets(self) -> List[FileSnippets]:
        return [f for f in self.files if f.snippets]

    @property
    def snippets(self) -> List[Snippet]:
        return [snippet for f in self.files for snippet in f.snippets]

    @property
    def is_clean(self) -> bool:
        return not self.snippets

    def summary(self) -> Dict[str, Any]:
        counts = {metric.value: 0 for metric in self.thresholds.metrics}
        for snippet in self.snippets:
            counts[snippet.metric.value] = counts.get(snippet.metric.value, 0) + 1
        return {
            "files_analyzed": len(self.files),
            "files_failed": len(self.failures),
            "units_analyzed": sum(f.units_analyzed for f in self.files),
            "total_snippets": len(self.snippets),
            "snippets_by_metric": counts,
            "analysis_time_seconds": round(self.execution_time_seconds, 3),
        }
