"""
Code unit discovery.

Finds the functions, methods, closures and lambdas of a syntax tree and
defines which nodes belong to each unit: a nested unit's header (decorators,
parameters, defaults) belongs to the enclosing unit, its body does not.
Qualified names join the enclosing unit and scope names with ".", so a
method ``m`` of class ``A`` is ``A.m``.
"""

from typing import Iterator, List, Tuple

from complex_code_spotter.models.complexity import CodeUnit
from complex_code_spotter.models.syntax import LanguageProfile, SyntaxNode

ANONYMOUS_UNIT_NAME = "<anonymous>"


def discover_units(root: SyntaxNode, profile: LanguageProfile) -> List[CodeUnit]:
    """Collect every code unit of a tree in source order.

    Args:
        root: Tree root for one source file
        profile: Classification table of the file's language

    Returns:
        CodeUnits in pre-order, empty when the tree defines no unit
    """
    units: List[CodeUnit] = []
    stack: List[Tuple[SyntaxNode, Tuple[str, ...]]] = [(root, ())]

    while stack:
        node, scope = stack.pop()
        child_scope = scope
        if profile.is_unit(node):
            name = node.name or ANONYMOUS_UNIT_NAME
            child_scope = scope + (name,)
            units.append(CodeUnit(
                name=name,
                qualified_name=".".join(child_scope),
                span=node.span,
                index=len(units),
                root=node,
            ))
        elif profile.is_scope(node):
            child_scope = scope + (node.name,)
        stack.extend((child, child_scope) for child in reversed(node.children))

    return units


def nested_unit_header(node: SyntaxNode, profile: LanguageProfile) -> List[SyntaxNode]:
    """Children of a nested unit node that still belong to the enclosing unit.

    A nested unit without a recognizable body is opaque: none of its
    children are attributed to the enclosing unit.
    """
    if not any(profile.is_body(child) for child in node.children):
        return []
    return [child for child in node.children if not profile.is_body(child)]


def unit_scope(unit: CodeUnit, profile: LanguageProfile) -> List[SyntaxNode]:
    """Top-level nodes scored for a unit: its body.

    The header of a unit is scored by the enclosing unit, if any. A unit
    without a recognizable body is scored over all of its children.
    """
    bodies = [child for child in unit.root.children if profile.is_body(child)]
    return bodies or list(unit.root.children)


def iter_unit_nodes(unit: CodeUnit, profile: LanguageProfile) -> Iterator[SyntaxNode]:
    """Yield the nodes scored for a unit, in pre-order.

    The unit root itself is not yielded. Nested unit nodes are yielded, but
    of their children only the header is visited.
    """
    stack = list(reversed(unit_scope(unit, profile)))
    while stack:
        node = stack.pop()
        yield node
        if profile.is_unit(node):
            stack.extend(reversed(nested_unit_header(node, profile)))
        else:
            stack.extend(reversed(node.children))
