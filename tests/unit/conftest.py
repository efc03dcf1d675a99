"""Shared pytest fixtures for unit tests.

This module provides reusable fixtures for all unit test modules, including:
- Core fixtures (MockFastMCP)
- Factory fixtures (node_factory, unit_factory, score_factory)
- A toy LanguageProfile for hand-built syntax trees
"""

from typing import Any, Dict, List, Optional

import pytest

from complex_code_spotter.models.complexity import CodeUnit, MetricKind, Score
from complex_code_spotter.models.syntax import LanguageProfile, NodeRole, Span, SyntaxNode


class MockFastMCP:
    """Mock FastMCP class for testing."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.tools: Dict[str, Any] = {}

    def tool(self, **kwargs: Any) -> Any:
        def decorator(func: Any) -> Any:
            self.tools[func.__name__] = func
            return func
        return decorator

    def run(self, **kwargs: Any) -> None:
        pass

    def get(self, name: str) -> Any:
        return self.tools.get(name)


@pytest.fixture
def mock_mcp() -> MockFastMCP:
    return MockFastMCP("test")


# Toy Language

TOY_ROLES = {
    "func": NodeRole.UNIT,
    "lambda": NodeRole.INLINE_UNIT,
    "if": NodeRole.BRANCH,
    "else-if": NodeRole.ELSE_IF,
    "else": NodeRole.ELSE,
    "ternary": NodeRole.TERNARY,
    "loop": NodeRole.LOOP,
    "switch": NodeRole.SWITCH,
    "case": NodeRole.CASE,
    "catch": NodeRole.CATCH,
    "and": NodeRole.BOOLEAN_AND,
    "or": NodeRole.BOOLEAN_OR,
    "goto": NodeRole.JUMP,
    "call": NodeRole.CALL,
}


@pytest.fixture
def toy_profile() -> LanguageProfile:
    """LanguageProfile for hand-built trees; kinds map directly to roles."""
    return LanguageProfile(
        name="toy",
        extensions=(".toy",),
        roles=TOY_ROLES,
        body_kinds=frozenset({"body"}),
        block_kinds=frozenset({"block"}),
    )


# Factory Fixtures


@pytest.fixture
def node_factory():
    """Factory building SyntaxNodes with a default single-line span.

    Scorers ignore spans, so hand-built trees for scoring tests can share
    the default one.
    """
    def _node(
        kind: str,
        *children: SyntaxNode,
        name: Optional[str] = None,
        span: Optional[Span] = None,
    ) -> SyntaxNode:
        return SyntaxNode(
            kind=kind,
            span=span or Span(1, 0, 1, 1),
            children=list(children),
            name=name,
        )

    return _node


@pytest.fixture
def unit_factory(node_factory):
    """Factory wrapping a unit node into a CodeUnit."""
    def _unit(root: Optional[SyntaxNode] = None, name: str = "unit", index: int = 0) -> CodeUnit:
        root = root or node_factory("func", name=name)
        return CodeUnit(name=name, qualified_name=name, span=root.span, index=index, root=root)

    return _unit


@pytest.fixture
def score_factory(unit_factory):
    """Factory building Scores for a fresh unit."""
    def _score(value: int, metric: MetricKind = MetricKind.CYCLOMATIC, unit: Optional[CodeUnit] = None) -> Score:
        return Score(metric=metric, unit=unit or unit_factory(), value=value)

    return _score


def deep_chain(kind: str, depth: int, leaf: SyntaxNode) -> SyntaxNode:
    """Nest leaf under depth nodes of the same kind, built without recursion."""
    node = leaf
    for _ in range(depth):
        node = SyntaxNode(kind=kind, span=Span(1, 0, 1, 1), children=[node])
    return node


@pytest.fixture
def chain_factory():
    return deep_chain


@pytest.fixture
def unit_names():
    """Helper listing qualified names of CodeUnits."""
    def _names(units: List[CodeUnit]) -> List[str]:
        return [unit.qualified_name for unit in units]

    return _names
