"""Statement classification against the configurable statement types."""

from collections.abc import Iterable
from typing import Callable

from tree_sitter import Node

from padline.pipeline.rules.models import KEYWORD_STATEMENT_TYPES, StatementType
from padline.pipeline.tokens import TokenStore, is_closing_brace, is_not_semicolon

# Node types owning a closing brace that makes a statement block-like.
BLOCK_LIKE_OWNERS = frozenset({"statement_block", "switch_body", "class_body"})

StatementTester = Callable[[Node, TokenStore], bool]


def unwrap_labels(node: Node) -> Node:
    """Get the statement a (possibly multiply) labeled statement labels."""
    while node.type == "labeled_statement":
        node = node.child_by_field_name("body")
    return node


def _is_any(node: Node, tokens: TokenStore) -> bool:
    return True


def _is_block_like(node: Node, tokens: TokenStore) -> bool:
    last_token = tokens.last_token(node, is_not_semicolon)
    if last_token is None or not is_closing_brace(last_token):
        return False
    owner = last_token.node.parent
    return owner is not None and owner.type in BLOCK_LIKE_OWNERS


def _is_multiline_block_like(node: Node, tokens: TokenStore) -> bool:
    return node.start_point[0] != node.end_point[0] and _is_block_like(node, tokens)


def _is_directive(node: Node, tokens: TokenStore) -> bool:
    if node.type != "expression_statement":
        return False
    expressions = [child for child in node.named_children if child.type != "comment"]
    return len(expressions) == 1 and expressions[0].type == "string"


def _node_type_tester(node_type: str) -> StatementTester:
    """Create a tester checking the node's own type."""

    def test(node: Node, tokens: TokenStore) -> bool:
        return node.type == node_type

    return test


def _keyword_tester(keyword: str) -> StatementTester:
    """Create a tester checking that the statement starts with ``keyword``."""

    def test(node: Node, tokens: TokenStore) -> bool:
        token = tokens.first_token(node)
        return token is not None and token.is_keyword and token.type == keyword

    return test


def _build_testers() -> dict[StatementType, StatementTester]:
    """Build the mapping of statement types to their testers."""
    testers: dict[StatementType, StatementTester] = {
        StatementType.ANY: _is_any,
        StatementType.BLOCK_LIKE: _is_block_like,
        StatementType.MULTILINE_BLOCK_LIKE: _is_multiline_block_like,
        StatementType.DIRECTIVE: _is_directive,
        StatementType.BLOCK: _node_type_tester("statement_block"),
        StatementType.EMPTY: _node_type_tester("empty_statement"),
        StatementType.EXPRESSION: _node_type_tester("expression_statement"),
    }
    for statement_type in KEYWORD_STATEMENT_TYPES:
        testers[statement_type] = _keyword_tester(statement_type.value)

    missing = set(StatementType) - set(testers)
    if missing:
        raise RuntimeError(f"No tester for statement types: {sorted(t.value for t in missing)}")
    return testers


_TESTERS = _build_testers()


def classify(statement_type: StatementType, node: Node, tokens: TokenStore) -> bool:
    """Check whether ``node`` belongs to ``statement_type``.

    Labeled statements are classified by the statement they label.
    """
    return _TESTERS[statement_type](unwrap_labels(node), tokens)


def matches(
    node: Node,
    statement_types: StatementType | Iterable[StatementType],
    tokens: TokenStore,
) -> bool:
    """Check whether ``node`` belongs to any of ``statement_types``."""
    if isinstance(statement_types, StatementType):
        return classify(statement_types, node, tokens)
    return any(classify(t, node, tokens) for t in statement_types)


def statement_types_of(node: Node, tokens: TokenStore) -> list[StatementType]:
    """List every statement type ``node`` belongs to, wildcard excluded."""
    return [t for t in StatementType if t is not StatementType.ANY and classify(t, node, tokens)]
