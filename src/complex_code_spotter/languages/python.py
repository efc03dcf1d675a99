"""Python frontend: builds SyntaxNode trees from the standard ``ast`` module.

Nodes that matter to the scorers get dedicated kinds ("if", "elif", "else",
"for", "lambda", ...); every other node keeps its ``ast`` class name as kind
and is PLAIN for the scorers. Spans use the ``ast`` positions (columns are
UTF-8 byte offsets); nodes without positions take the union of their
children. f-strings are kept as leaves because their inner positions are
unreliable before Python 3.12.
"""

import ast
import warnings
from types import MappingProxyType
from typing import Iterable, List, Optional

from complex_code_spotter.core.exceptions import SourceParseError
from complex_code_spotter.models.syntax import LanguageProfile, NodeRole, Span, SyntaxNode

PYTHON_NODE_ROLES = MappingProxyType({
    "function-definition": NodeRole.UNIT,
    "lambda": NodeRole.INLINE_UNIT,
    "if": NodeRole.BRANCH,
    "elif": NodeRole.ELSE_IF,
    "else": NodeRole.ELSE,
    "ternary": NodeRole.TERNARY,
    "for": NodeRole.LOOP,
    "while": NodeRole.LOOP,
    "comprehension": NodeRole.LOOP,
    "comprehension-if": NodeRole.BRANCH,
    "match": NodeRole.SWITCH,
    "case": NodeRole.CASE,
    "except": NodeRole.CATCH,
    "and": NodeRole.BOOLEAN_AND,
    "or": NodeRole.BOOLEAN_OR,
    "call": NodeRole.CALL,
})

LAMBDA_NAME = "<lambda>"


def _span_of(node: ast.AST) -> Optional[Span]:
    lineno = getattr(node, "lineno", None)
    end_lineno = getattr(node, "end_lineno", None)
    if lineno is None or end_lineno is None:
        return None
    return Span(lineno, node.col_offset, end_lineno, node.end_col_offset)


def _callee_name(func: ast.expr) -> Optional[str]:
    if isinstance(func, ast.Name):
        return func.id
    if isinstance(func, ast.Attribute):
        return func.attr
    return None


class _PythonTreeBuilder(ast.NodeVisitor):
    """Converts an ``ast`` tree into SyntaxNodes, one visit_* per special kind."""

    def __init__(self, source: str) -> None:
        self._lines = source.encode("utf-8").split(b"\n")

    # -- helpers ------------------------------------------------------------

    def _children(self, nodes: Iterable[Optional[ast.AST]]) -> List[SyntaxNode]:
        built = [self.visit(node) for node in nodes if node is not None]
        return [child for child in built if child is not None]

    def _make(
        self,
        kind: str,
        node: Optional[ast.AST],
        children: List[Optional[SyntaxNode]],
        name: Optional[str] = None,
    ) -> Optional[SyntaxNode]:
        kept = sorted((c for c in children if c is not None), key=lambda c: c.span.start)
        span = _span_of(node) if node is not None else None
        for child in kept:
            span = child.span if span is None else span.union(child.span)
        if span is None:
            return None
        return SyntaxNode(kind=kind, span=span, children=kept, name=name)

    def _block(self, kind: str, statements: List[ast.stmt]) -> Optional[SyntaxNode]:
        return self._make(kind, None, self._children(statements))

    def _starts_with(self, node: ast.AST, keyword: bytes) -> bool:
        index = node.lineno - 1
        if not 0 <= index < len(self._lines):
            return False
        return self._lines[index][node.col_offset:].startswith(keyword)

    def generic_visit(self, node: ast.AST) -> Optional[SyntaxNode]:
        return self._make(type(node).__name__, node, self._children(ast.iter_child_nodes(node)))

    # -- definitions ----------------------------------------------------------

    def visit_Module(self, node: ast.Module) -> SyntaxNode:
        root = self._make("module", None, self._children(node.body))
        return root if root is not None else SyntaxNode(kind="module", span=Span(1, 0, 1, 0))

    def visit_FunctionDef(self, node: ast.FunctionDef) -> Optional[SyntaxNode]:
        header: List[Optional[ast.AST]] = [*node.decorator_list, node.args, node.returns]
        header.extend(getattr(node, "type_params", []))
        children = self._children(header)
        children.append(self._block("body", node.body))
        return self._make("function-definition", node, children, name=node.name)

    visit_AsyncFunctionDef = visit_FunctionDef

    def visit_Lambda(self, node: ast.Lambda) -> Optional[SyntaxNode]:
        children = self._children([node.args])
        children.append(self._make("body", None, self._children([node.body])))
        return self._make("lambda", node, children, name=LAMBDA_NAME)

    def visit_ClassDef(self, node: ast.ClassDef) -> Optional[SyntaxNode]:
        return self._make("class-definition", node, self._children(ast.iter_child_nodes(node)), name=node.name)

    # -- branches -------------------------------------------------------------

    def visit_If(self, node: ast.If) -> Optional[SyntaxNode]:
        # elif arms and the final else are siblings of the first block
        children = self._children([node.test])
        children.append(self._block("block", node.body))
        orelse = node.orelse
        while len(orelse) == 1 and isinstance(orelse[0], ast.If) and self._starts_with(orelse[0], b"elif"):
            arm = orelse[0]
            children.append(self._elif_arm(arm))
            orelse = arm.orelse
        if orelse:
            children.append(self._block("else", orelse))
        return self._make("if", node, children)

    def _elif_arm(self, node: ast.If) -> SyntaxNode:
        """Build one elif arm spanning its keyword, condition and block only."""
        children = self._children([node.test])
        block = self._block("block", node.body)
        if block is not None:
            children.append(block)
        span = Span(node.lineno, node.col_offset, node.lineno, node.col_offset + len("elif"))
        for child in children:
            span = span.union(child.span)
        return SyntaxNode(kind="elif", span=span, children=children)

    def visit_IfExp(self, node: ast.IfExp) -> Optional[SyntaxNode]:
        return self._make("ternary", node, self._children([node.body, node.test, node.orelse]))

    def visit_Match(self, node: ast.AST) -> Optional[SyntaxNode]:
        return self._make("match", node, self._children([node.subject, *node.cases]))

    def visit_match_case(self, node: ast.AST) -> Optional[SyntaxNode]:
        children = self._children([node.pattern, node.guard])
        children.append(self._block("block", node.body))
        return self._make("case", None, children)

    def visit_BoolOp(self, node: ast.BoolOp) -> Optional[SyntaxNode]:
        kind = "and" if isinstance(node.op, ast.And) else "or"
        return self._make(kind, node, self._children(node.values))

    # -- loops ----------------------------------------------------------------

    def visit_For(self, node: ast.For) -> Optional[SyntaxNode]:
        children = self._children([node.target, node.iter])
        children.append(self._block("block", node.body))
        children.append(self._block("block", node.orelse))
        return self._make("for", node, children)

    visit_AsyncFor = visit_For

    def visit_While(self, node: ast.While) -> Optional[SyntaxNode]:
        children = self._children([node.test])
        children.append(self._block("block", node.body))
        children.append(self._block("block", node.orelse))
        return self._make("while", node, children)

    def visit_comprehension(self, node: ast.comprehension) -> Optional[SyntaxNode]:
        children = self._children([node.target, node.iter])
        for condition in node.ifs:
            children.append(self._make("comprehension-if", None, self._children([condition])))
        return self._make("comprehension", None, children)

    # -- exceptions -----------------------------------------------------------

    def visit_Try(self, node: ast.Try) -> Optional[SyntaxNode]:
        children = [self._block("block", node.body)]
        children.extend(self._children(node.handlers))
        children.append(self._block("block", node.orelse))
        children.append(self._block("finally", node.finalbody))
        return self._make("try", node, children)

    visit_TryStar = visit_Try

    def visit_ExceptHandler(self, node: ast.ExceptHandler) -> Optional[SyntaxNode]:
        children = self._children([node.type])
        children.append(self._block("block", node.body))
        return self._make("except", node, children)

    # -- expressions ----------------------------------------------------------

    def visit_Call(self, node: ast.Call) -> Optional[SyntaxNode]:
        children = self._children(ast.iter_child_nodes(node))
        return self._make("call", node, children, name=_callee_name(node.func))

    def visit_JoinedStr(self, node: ast.JoinedStr) -> Optional[SyntaxNode]:
        return self._make("JoinedStr", node, [])


def parse_python(source: str) -> SyntaxNode:
    """Parse Python source into a SyntaxNode tree.

    Raises:
        SourceParseError: On syntax errors, null bytes or excessive nesting
    """
    try:
        with warnings.catch_warnings():
            warnings.simplefilter("ignore")
            tree = ast.parse(source)
    except SyntaxError as e:
        raise SourceParseError(f"Syntax error at line {e.lineno}: {e.msg}") from e
    except (ValueError, RecursionError) as e:
        raise SourceParseError(f"Unable to parse source: {e}") from e

    try:
        return _PythonTreeBuilder(source).visit(tree)
    except RecursionError as e:
        raise SourceParseError("Syntax tree is too deeply nested") from e


PYTHON = LanguageProfile(
    name="python",
    extensions=(".py", ".pyw"),
    roles=PYTHON_NODE_ROLES,
    body_kinds=frozenset({"body"}),
    block_kinds=frozenset({"block", "finally"}),
    scope_kinds=frozenset({"class-definition"}),
    parser=parse_python,
)
