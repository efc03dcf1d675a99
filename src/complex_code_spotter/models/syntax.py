"""Language-agnostic syntax tree model.

A frontend turns source text into a tree of SyntaxNode objects and ships a
LanguageProfile describing which node kinds matter to the scorers. The
scorers never look at kind names directly, only at the NodeRole the profile
assigns to them.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, FrozenSet, List, Mapping, Optional, Tuple

from complex_code_spotter.core.exceptions import SourceParseError


@dataclass(frozen=True)
class Span:
    """Half-open source range.

    Lines are 1-based, columns 0-based. The start position is inclusive and
    the end position exclusive; positions compare as (line, column) tuples.
    """

    start_line: int
    start_column: int
    end_line: int
    end_column: int

    @property
    def start(self) -> Tuple[int, int]:
        return (self.start_line, self.start_column)

    @property
    def end(self) -> Tuple[int, int]:
        return (self.end_line, self.end_column)

    def contains(self, other: "Span") -> bool:
        """Check whether other lies entirely inside this span."""
        return self.start <= other.start and other.end <= self.end

    def precedes(self, other: "Span") -> bool:
        """Check whether this span ends before other starts."""
        return self.end <= other.start

    def union(self, other: "Span") -> "Span":
        """Smallest span covering both spans."""
        start = min(self.start, other.start)
        end = max(self.end, other.end)
        return Span(start[0], start[1], end[0], end[1])


@dataclass(eq=False)
class SyntaxNode:
    """One node of a parsed source file.

    Attributes:
        kind: Frontend-specific tag (e.g. "if", "function-definition")
        span: Source range covered by the node and all of its children
        children: Ordered child nodes, owned by this node. The operands of a
            boolean-operator node are its children.
        name: Identifier of a definition, or the callee name of a call
    """

    kind: str
    span: Span
    children: List["SyntaxNode"] = field(default_factory=list)
    name: Optional[str] = None


class NodeRole(str, Enum):
    """Closed set of roles a node kind can play for the scorers."""

    PLAIN = "plain"
    UNIT = "unit"
    INLINE_UNIT = "inline_unit"
    BRANCH = "branch"
    ELSE_IF = "else_if"
    ELSE = "else"
    TERNARY = "ternary"
    LOOP = "loop"
    SWITCH = "switch"
    CASE = "case"
    CATCH = "catch"
    BOOLEAN_AND = "boolean_and"
    BOOLEAN_OR = "boolean_or"
    JUMP = "jump"
    CALL = "call"


UNIT_ROLES = frozenset({NodeRole.UNIT, NodeRole.INLINE_UNIT})
BOOLEAN_ROLES = frozenset({NodeRole.BOOLEAN_AND, NodeRole.BOOLEAN_OR})


@dataclass(frozen=True)
class LanguageProfile:
    """Node-kind classification table supplied by a language frontend.

    Attributes:
        name: Language name used in reports (e.g. "python")
        extensions: File suffixes handled by the frontend, lowercase with dot
        roles: Kind name to role mapping; unmapped kinds are PLAIN
        body_kinds: Kinds marking the body child of a unit node
        block_kinds: Kinds holding the statements of a branch, loop or
            handler; only these children sit one nesting level deeper
        scope_kinds: Named non-unit kinds (classes, modules) that prefix
            the qualified names of the units they contain
        parser: Callable turning source text into a tree root
    """

    name: str
    extensions: Tuple[str, ...]
    roles: Mapping[str, NodeRole]
    body_kinds: FrozenSet[str] = frozenset({"body"})
    block_kinds: FrozenSet[str] = frozenset()
    scope_kinds: FrozenSet[str] = frozenset()
    parser: Optional[Callable[[str], SyntaxNode]] = field(default=None, compare=False, repr=False)

    def role_of(self, node: SyntaxNode) -> NodeRole:
        return self.roles.get(node.kind, NodeRole.PLAIN)

    def is_unit(self, node: SyntaxNode) -> bool:
        return self.role_of(node) in UNIT_ROLES

    def is_body(self, node: SyntaxNode) -> bool:
        return node.kind in self.body_kinds

    def is_block(self, node: SyntaxNode) -> bool:
        return node.kind in self.block_kinds or node.kind in self.body_kinds

    def is_scope(self, node: SyntaxNode) -> bool:
        return node.kind in self.scope_kinds and node.name is not None

    def parse(self, source: str) -> SyntaxNode:
        if self.parser is None:
            raise SourceParseError(f"No parser registered for {self.name}")
        return self.parser(source)
