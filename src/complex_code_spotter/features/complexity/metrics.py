"""
Code complexity metrics calculation.

This module scores code units over the language-agnostic syntax tree:
- Cyclomatic complexity (McCabe): 1 + number of decision points
- Cognitive complexity (SonarSource/Campbell): nesting-weighted increments

Both scorers only see NodeRoles, so they work for every frontend whose
LanguageProfile classifies its node kinds.
"""

from typing import Callable, Dict, Iterable, List, Tuple

from complex_code_spotter.models.complexity import CodeUnit, MetricKind, Score
from complex_code_spotter.models.syntax import BOOLEAN_ROLES, LanguageProfile, NodeRole, SyntaxNode

from .discovery import iter_unit_nodes, nested_unit_header, unit_scope

# Roles adding one path each to the cyclomatic count
CYCLOMATIC_DECISION_ROLES = frozenset({
    NodeRole.BRANCH,
    NodeRole.ELSE_IF,
    NodeRole.TERNARY,
    NodeRole.LOOP,
    NodeRole.CATCH,
})

# Roles adding 1 + nesting to the cognitive score and nesting their blocks
COGNITIVE_NESTING_ROLES = frozenset({
    NodeRole.BRANCH,
    NodeRole.TERNARY,
    NodeRole.LOOP,
    NodeRole.SWITCH,
    NodeRole.CATCH,
    NodeRole.INLINE_UNIT,
})

# Children continuing a construct: else-if and else arms, switch cases
COGNITIVE_ARM_ROLES = frozenset({NodeRole.ELSE_IF, NodeRole.ELSE, NodeRole.CASE})


def _boolean_operator_count(node: SyntaxNode) -> int:
    # An n-ary operator node with k operands stands for k - 1 operators
    return max(1, len(node.children) - 1)


def _switch_extra_cases(node: SyntaxNode, profile: LanguageProfile) -> int:
    cases = sum(1 for child in node.children if profile.role_of(child) is NodeRole.CASE)
    return max(0, cases - 1)


def calculate_cyclomatic_complexity(unit: CodeUnit, profile: LanguageProfile) -> int:
    """Calculate McCabe cyclomatic complexity.

    Simplified: 1 + number of decision points. Branches, else-ifs,
    ternaries, loops and exception handlers count once each, every
    short-circuit boolean operator counts once, and a switch counts each
    case beyond the first. Nested unit bodies are scored on their own.

    Args:
        unit: Code unit to score
        profile: Classification table of the unit's language

    Returns:
        Cyclomatic complexity score (minimum 1)
    """
    complexity = 1

    for node in iter_unit_nodes(unit, profile):
        role = profile.role_of(node)
        if role in CYCLOMATIC_DECISION_ROLES:
            complexity += 1
        elif role in BOOLEAN_ROLES:
            complexity += _boolean_operator_count(node)
        elif role is NodeRole.SWITCH:
            complexity += _switch_extra_cases(node, profile)

    return complexity


# =============================================================================
# COGNITIVE COMPLEXITY HELPER FUNCTIONS
# =============================================================================


def _collect_operator_sequence(node: SyntaxNode, profile: LanguageProfile) -> List[NodeRole]:
    """List the boolean operators of an expression from left to right.

    Operands that are boolean operators themselves are expanded in place;
    any other operand ends the expression.
    """
    operators: List[NodeRole] = []
    # Entries are either a node to expand or an operator to emit
    pending: List[object] = [node]

    while pending:
        item = pending.pop()
        if isinstance(item, NodeRole):
            operators.append(item)
            continue
        role = profile.role_of(item)
        if role not in BOOLEAN_ROLES:
            continue
        expanded: List[object] = []
        for position, operand in enumerate(item.children):
            if position > 0:
                expanded.append(role)
            expanded.append(operand)
        if len(item.children) < 2:
            expanded.append(role)
        pending.extend(reversed(expanded))

    return operators


def _count_operator_sequences(operators: List[NodeRole]) -> int:
    """Count logical operator sequences.

    The first operator opens a sequence and every change of operator type
    opens a new one: "a and b and c" = 1, "a and b or c" = 2.
    """
    if not operators:
        return 0

    sequences = 1
    for previous, current in zip(operators, operators[1:]):
        if current is not previous:
            sequences += 1
    return sequences


def _has_block(node: SyntaxNode, profile: LanguageProfile) -> bool:
    """Check whether a construct marks its body with block or arm children.

    Constructs without such children (ternaries, comprehensions) nest all
    of their operands.
    """
    return any(profile.is_block(child) or profile.role_of(child) in COGNITIVE_ARM_ROLES for child in node.children)


def _cognitive_increment(
    node: SyntaxNode,
    role: NodeRole,
    nesting: int,
    block_nesting: int,
    unit: CodeUnit,
    profile: LanguageProfile,
) -> Tuple[int, int, int]:
    """Return (increment, nesting for header children, nesting for block children)."""
    if role in COGNITIVE_NESTING_ROLES:
        if _has_block(node, profile):
            return 1 + nesting, nesting, nesting + 1
        return 1 + nesting, nesting + 1, nesting + 1
    if role in (NodeRole.ELSE_IF, NodeRole.CASE):
        # Arms sit one level below their construct; their headers do not
        increment = 1 + block_nesting if role is NodeRole.ELSE_IF else 0
        if _has_block(node, profile):
            return increment, nesting, block_nesting
        return increment, block_nesting, block_nesting
    if role is NodeRole.ELSE:
        return 1, nesting, nesting
    if role is NodeRole.JUMP:
        return 1, nesting, block_nesting
    if role is NodeRole.CALL and node.name is not None and node.name == unit.name:
        return 1, nesting, block_nesting
    return 0, nesting, block_nesting


def _scored_children(node: SyntaxNode, role: NodeRole, profile: LanguageProfile) -> List[SyntaxNode]:
    if role in (NodeRole.UNIT, NodeRole.INLINE_UNIT):
        return nested_unit_header(node, profile)
    return node.children


def calculate_cognitive_complexity(unit: CodeUnit, profile: LanguageProfile) -> int:
    """Calculate cognitive complexity with nesting penalties.

    Based on the SonarSource cognitive complexity specification:
    - +1 + nesting for if, ternary, loops, switch, catch and inline unit
      literals (lambdas); only their blocks sit one nesting level deeper,
      conditions and headers stay at the construct's own level
    - +1 + the if's block nesting for each else-if arm
    - +1 for else, without further nesting
    - +1 per sequence of like boolean operators in one expression
    - +1 for goto / labeled jumps and for each recursive call
    - nested definitions add nothing; their bodies are scored on their own

    Each stack entry carries its own nesting levels, so no nesting state is
    shared across the traversal.

    Args:
        unit: Code unit to score
        profile: Classification table of the unit's language

    Returns:
        Cognitive complexity score (minimum 0)
    """
    complexity = 0
    # (node, nesting level, nesting level once a block is entered, parent is a boolean operator)
    stack: List[Tuple[SyntaxNode, int, int, bool]] = [
        (child, 0, 0, False) for child in reversed(unit_scope(unit, profile))
    ]

    while stack:
        node, nesting, block_nesting, in_boolean = stack.pop()
        role = profile.role_of(node)
        if profile.is_block(node) or role is NodeRole.ELSE:
            nesting = block_nesting

        if role in BOOLEAN_ROLES:
            if not in_boolean:
                complexity += _count_operator_sequences(_collect_operator_sequence(node, profile))
            stack.extend((child, nesting, block_nesting, True) for child in reversed(node.children))
            continue

        increment, child_nesting, child_block_nesting = _cognitive_increment(
            node, role, nesting, block_nesting, unit, profile
        )
        complexity += increment
        stack.extend(
            (child, child_nesting, child_block_nesting, False)
            for child in reversed(_scored_children(node, role, profile))
        )

    return complexity


# =============================================================================
# METRIC REGISTRY
# =============================================================================

MetricCalculator = Callable[[CodeUnit, LanguageProfile], int]

METRIC_CALCULATORS: Dict[MetricKind, MetricCalculator] = {
    MetricKind.CYCLOMATIC: calculate_cyclomatic_complexity,
    MetricKind.COGNITIVE: calculate_cognitive_complexity,
}


def score_unit(unit: CodeUnit, profile: LanguageProfile, metrics: Iterable[MetricKind]) -> List[Score]:
    """Compute one Score per requested metric for a unit."""
    return [
        Score(metric=metric, unit=unit, value=METRIC_CALCULATORS[metric](unit, profile))
        for metric in metrics
    ]


def score_units(units: Iterable[CodeUnit], profile: LanguageProfile, metrics: Iterable[MetricKind]) -> List[Score]:
    """Score every unit, grouped by unit in discovery order."""
    metrics = tuple(metrics)
    return [score for unit in units for score in score_unit(unit, profile, metrics)]
