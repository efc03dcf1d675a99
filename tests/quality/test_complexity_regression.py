"""
Complexity Regression Tests

Runs the spotter over its own source tree so that no function creeps back
above the critical thresholds.

## Usage

Run all complexity tests:
    pytest tests/quality/test_complexity_regression.py -v
"""

from pathlib import Path
from typing import List

import pytest

from complex_code_spotter.features.complexity.complexity_analyzer import ParallelComplexityAnalyzer
from complex_code_spotter.features.complexity.complexity_file_finder import ComplexityFileFinder
from complex_code_spotter.models.complexity import AnalysisReport, Thresholds

PACKAGE_ROOT = Path(__file__).resolve().parents[2] / "src" / "complex_code_spotter"

CRITICAL_THRESHOLDS = [("cyclomatic", 20), ("cognitive", 30)]


@pytest.fixture(scope="module")
def source_files() -> List[str]:
    return ComplexityFileFinder().find_files(str(PACKAGE_ROOT))


@pytest.fixture(scope="module")
def report(source_files) -> AnalysisReport:
    analyzer = ParallelComplexityAnalyzer(Thresholds.from_pairs(CRITICAL_THRESHOLDS))
    return analyzer.analyze_files(source_files)


class TestComplexityTrends:
    """Monitor complexity across the whole package."""

    def test_every_module_is_analyzed(self, source_files, report):
        assert len(source_files) > 10
        assert report.failures == []
        assert len(report.files) == len(source_files)

    def test_no_functions_exceed_critical_thresholds(self, report):
        violations = [
            f"{snippet.source_path}:{snippet.start_line} {snippet.unit.qualified_name} "
            f"{snippet.metric.value}={snippet.complexity}"
            for snippet in report.snippets
        ]
        assert violations == [], "Functions above critical thresholds:\n" + "\n".join(violations)

    def test_codebase_health_metrics(self, report):
        """Print a short health summary (run with -s to see it)."""
        summary = report.summary()
        print(f"\nFiles analyzed: {summary['files_analyzed']}")
        print(f"Units analyzed: {summary['units_analyzed']}")
        assert summary["units_analyzed"] > 50
