"""Structural checks on syntax trees handed over by a frontend."""

from typing import List, Optional, Set

from complex_code_spotter.core.exceptions import MalformedTreeError
from complex_code_spotter.models.syntax import Span, SyntaxNode
from complex_code_spotter.utils.text import count_lines


def _check_span(span: Span, line_count: int, kind: str) -> None:
    if span.start_line < 1 or span.start_column < 0 or span.end_column < 0:
        raise MalformedTreeError(f"Node '{kind}' has a negative position: {span}")
    if span.end < span.start:
        raise MalformedTreeError(f"Node '{kind}' ends before it starts: {span}")
    if span.end_line > line_count:
        raise MalformedTreeError(f"Node '{kind}' ends at line {span.end_line}, past the last line {line_count}")


def validate_tree(root: SyntaxNode, source: str) -> None:
    """Check span and acyclicity invariants of a tree.

    Every span must lie within the source text, every child inside its
    parent, siblings in source order without overlap, and no node may be
    reachable twice.

    Raises:
        MalformedTreeError: On the first violation found
    """
    line_count = count_lines(source)
    seen: Set[int] = set()
    stack: List[SyntaxNode] = [root]

    while stack:
        node = stack.pop()
        if id(node) in seen:
            raise MalformedTreeError(f"Node '{node.kind}' at {node.span} is reachable twice (cycle or shared child)")
        seen.add(id(node))
        _check_span(node.span, line_count, node.kind)

        previous: Optional[SyntaxNode] = None
        for child in node.children:
            if not node.span.contains(child.span):
                raise MalformedTreeError(
                    f"Child '{child.kind}' at {child.span} lies outside parent '{node.kind}' at {node.span}"
                )
            if previous is not None and not previous.span.precedes(child.span):
                raise MalformedTreeError(
                    f"Siblings '{previous.kind}' and '{child.kind}' overlap or are out of order under '{node.kind}'"
                )
            previous = child
        stack.extend(node.children)
