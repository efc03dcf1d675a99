"""Shared pytest fixtures for complex-code-spotter test suite.

This module provides common fixtures used across unit and quality tests,
reducing duplication and standardizing test setup.
"""

import shutil
import tempfile
import textwrap
from pathlib import Path
from typing import Callable, Generator

import pytest

# ============================================================================
# Environment Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch):
    """Keep user-level configuration out of the tests."""
    for name in ("CCS_CONFIG", "LOG_LEVEL", "LOG_FILE", "SENTRY_DSN", "SENTRY_ENVIRONMENT"):
        monkeypatch.delenv(name, raising=False)


# ============================================================================
# Temporary Directory Fixtures
# ============================================================================


@pytest.fixture
def temp_dir() -> Generator[str, None, None]:
    """Create a temporary directory for test isolation.

    Automatically cleaned up after test completion.

    Yields:
        str: Path to temporary directory
    """
    tmp = tempfile.mkdtemp()
    yield tmp
    shutil.rmtree(tmp, ignore_errors=True)


@pytest.fixture
def write_file(temp_dir) -> Callable[..., str]:
    """Factory writing a file below temp_dir.

    Returns:
        Callable taking (relative_path, content) and returning the absolute path
    """
    def _write(relative_path: str, content="") -> str:
        path = Path(temp_dir) / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(textwrap.dedent(content), encoding="utf-8")
        return str(path)

    return _write


# ============================================================================
# Sample Code Fixtures
# ============================================================================


@pytest.fixture
def sample_python_code() -> str:
    """Provide sample Python code for testing.

    Returns:
        str: Sample Python function code with no branching
    """
    return """def calculate_sum(a, b):
    \"\"\"Calculate the sum of two numbers.\"\"\"
    result = a + b
    return result
"""


@pytest.fixture
def if_elif_else_code() -> str:
    """Function scoring cyclomatic 3 and cognitive 4."""
    return """def classify(x):
    if x > 0:
        return "positive"
    elif x < 0:
        return "negative"
    else:
        return "zero"
"""


@pytest.fixture
def complex_python_code() -> str:
    """Module with one simple function and one deeply nested function.

    process_items scores cyclomatic 9 and cognitive 23.
    """
    return """def helper(value):
    return value * 2


def process_items(items, limit, strict):
    total = 0
    for item in items:
        if item is None:
            continue
        for part in item.parts:
            if part.size > limit:
                if strict:
                    raise ValueError(part)
                else:
                    total += limit
            elif part.size < 0 or part.broken:
                while part.retries:
                    part.retry()
            else:
                total += part.size
    return total
"""
