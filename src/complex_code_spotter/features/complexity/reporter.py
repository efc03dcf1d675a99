"""Snippet report writing.

This module renders extracted snippets into report files:
- Markdown reports (human-readable, one file per source file)
- HTML reports (escaped snippets plus an index page)
- JSON reports (machine-readable)

Every format writes into its own ``<output>/<format>/`` directory.
"""

import html
import json
from enum import Enum
from pathlib import Path
from typing import Dict, List, Sequence

from complex_code_spotter.constants import OutputDefaults
from complex_code_spotter.core.exceptions import ConfigurationError
from complex_code_spotter.core.logging import get_logger
from complex_code_spotter.models.complexity import FileSnippets, Snippet

logger = get_logger(__name__)


class OutputFormat(str, Enum):
    """Supported report formats."""

    MARKDOWN = "markdown"
    HTML = "html"
    JSON = "json"
    ALL = "all"

    @classmethod
    def parse(cls, value: str) -> "OutputFormat":
        """Resolve a format from its name.

        Raises:
            ConfigurationError: If the format is not supported
        """
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            possible = ", ".join(f.value for f in cls)
            raise ConfigurationError(f"Unknown output format '{value}'. Possible values: {possible}") from None

    def expand(self) -> List["OutputFormat"]:
        if self is OutputFormat.ALL:
            return [OutputFormat.MARKDOWN, OutputFormat.HTML, OutputFormat.JSON]
        return [self]


def create_filenames(files: Sequence[FileSnippets]) -> List[str]:
    """Build one report base name per source file.

    Path components are joined with ``_``; the root anchor, ``.`` and ``..``
    are dropped, so ``src/pkg/mod.py`` becomes ``src_pkg_mod.py``.
    """
    names = []
    for file_snippets in files:
        parts = [
            part for part in Path(file_snippets.source_path).parts
            if part not in OutputDefaults.SKIPPED_PATH_PARTS and part != Path(file_snippets.source_path).anchor
        ]
        names.append("_".join(parts))
    return names


def _report_path(directory: Path, filename: str, extension: str) -> Path:
    return (directory / filename).with_suffix(f".{extension}")


# =============================================================================
# Markdown Report Generation
# =============================================================================


def _format_markdown_snippet(snippet: Snippet, language: str) -> List[str]:
    return [
        f"*name:* **{snippet.unit.qualified_name}**",
        "",
        f"*complexity:* **{snippet.complexity}**",
        "",
        f"*threshold:* **{snippet.threshold}**",
        "",
        f"*start line:* **{snippet.start_line}**",
        "",
        f"*end line:* **{snippet.end_line}**",
        "",
        f"```{language}",
        snippet.text,
        "```",
        "",
    ]


def generate_markdown_report(file_snippets: FileSnippets) -> str:
    """Render the snippets of one file as Markdown, one section per metric."""
    lines: List[str] = []
    for metric, snippets in file_snippets.by_metric().items():
        lines.append(f"# {metric.value}")
        lines.append("")
        for snippet in snippets:
            lines.extend(_format_markdown_snippet(snippet, file_snippets.language))
    return "\n".join(lines)


# =============================================================================
# HTML Report Generation
# =============================================================================


def _format_html_snippet(snippet: Snippet) -> List[str]:
    return [
        "<p>",
        f"    name: <b>{html.escape(snippet.unit.qualified_name)}</b><br>",
        f"    complexity: <b>{snippet.complexity}</b><br>",
        f"    threshold: <b>{snippet.threshold}</b><br>",
        f"    start line: <b>{snippet.start_line}</b><br>",
        f"    end line: <b>{snippet.end_line}</b><br>",
        f"    <pre><code>{html.escape(snippet.text)}</code></pre>",
        "</p>",
    ]


def _html_page(title: str, body: List[str]) -> str:
    lines = [
        "<!DOCTYPE html>",
        "<html>",
        "<head>",
        '    <meta charset="utf-8">',
        f"    <title>{html.escape(title)}</title>",
        "</head>",
        "<body>",
    ]
    lines.extend(body)
    lines.extend(["</body>", "</html>", ""])
    return "\n".join(lines)


def generate_html_report(file_snippets: FileSnippets) -> str:
    """Render the snippets of one file as an HTML page."""
    body: List[str] = []
    for metric, snippets in file_snippets.by_metric().items():
        body.append(f"<h1>{metric.value}</h1>")
        for snippet in snippets:
            body.extend(_format_html_snippet(snippet))
    return _html_page(file_snippets.source_path, body)


def generate_html_index(page_names: List[str]) -> str:
    """Render the index page linking every HTML report."""
    body = [
        f'<a href="{html.escape(name)}" target="_blank">{html.escape(name)}</a><br>'
        for name in page_names
    ]
    return _html_page("Index", body)


# =============================================================================
# Writers
# =============================================================================


def _create_dir(output_path: Path, output_format: OutputFormat) -> Path:
    directory = output_path / output_format.value
    logger.debug("report_dir_created", path=str(directory))
    directory.mkdir(parents=True, exist_ok=True)
    return directory


def _write_markdown(output_path: Path, filenames: List[str], files: Sequence[FileSnippets]) -> List[str]:
    directory = _create_dir(output_path, OutputFormat.MARKDOWN)
    written = []
    for filename, file_snippets in zip(filenames, files):
        path = _report_path(directory, filename, "md")
        path.write_text(generate_markdown_report(file_snippets), encoding="utf-8")
        written.append(str(path))
    return written


def _write_html(output_path: Path, filenames: List[str], files: Sequence[FileSnippets]) -> List[str]:
    directory = _create_dir(output_path, OutputFormat.HTML)
    written = []
    for filename, file_snippets in zip(filenames, files):
        path = _report_path(directory, filename, "html")
        path.write_text(generate_html_report(file_snippets), encoding="utf-8")
        written.append(str(path))

    index_path = directory / "index.html"
    index_path.write_text(generate_html_index([Path(p).name for p in written]), encoding="utf-8")
    written.append(str(index_path))
    return written


def _write_json(output_path: Path, filenames: List[str], files: Sequence[FileSnippets]) -> List[str]:
    directory = _create_dir(output_path, OutputFormat.JSON)
    written = []
    for filename, file_snippets in zip(filenames, files):
        path = _report_path(directory, filename, "json")
        with open(path, "w", encoding="utf-8") as f:
            json.dump(file_snippets.to_dict(), f, indent=2)
        written.append(str(path))
    return written


_WRITERS = {
    OutputFormat.MARKDOWN: _write_markdown,
    OutputFormat.HTML: _write_html,
    OutputFormat.JSON: _write_json,
}


def write_reports(output_path: str, files: Sequence[FileSnippets], output_format: OutputFormat) -> Dict[str, List[str]]:
    """Write report files for every file that has snippets.

    Args:
        output_path: Directory receiving one subdirectory per format
        files: Per-file analysis results
        output_format: Format to write, or ALL

    Returns:
        Written file paths keyed by format name
    """
    files = [f for f in files if f.snippets]
    filenames = create_filenames(files)
    root = Path(output_path)

    written: Dict[str, List[str]] = {}
    for fmt in output_format.expand():
        written[fmt.value] = _WRITERS[fmt](root, filenames, files)

    logger.info(
        "reports_written",
        output_path=output_path,
        formats=list(written),
        file_count=sum(len(paths) for paths in written.values()),
    )
    return written
