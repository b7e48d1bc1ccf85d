"""Token navigation over a tree-sitter syntax tree.

Tree-sitter does not expose a token stream, so one is rebuilt from the leaves
of the tree. Nodes whose children are only fragments of one lexical token
(strings, template strings, regexes) are kept whole, and comments are kept as
tokens of their own so callers can choose to see or skip them.
"""

import logging
from bisect import bisect_left, bisect_right
from dataclasses import dataclass
from typing import Callable

from tree_sitter import Node

logger = logging.getLogger(__name__)

COMMENT_TYPES = frozenset({"comment", "html_comment", "hash_bang_line"})

# Nodes treated as a single token even though tree-sitter gives them children.
ATOMIC_TYPES = frozenset({"string", "template_string", "regex", "comment", "html_comment"})


@dataclass(frozen=True)
class Token:
    """A single lexical token (or comment) of the source."""

    type: str
    text: str
    start_byte: int
    end_byte: int
    start_line: int  # 1-indexed
    start_column: int  # 0-indexed
    end_line: int  # 1-indexed
    end_column: int  # 0-indexed
    is_comment: bool
    node: Node

    @property
    def is_keyword(self) -> bool:
        """True for anonymous tokens spelled like a reserved word."""
        return not self.node.is_named and self.type.isalpha()

    @classmethod
    def from_node(cls, node: Node) -> "Token":
        return cls(
            type=node.type,
            text=node.text.decode("utf-8", errors="replace") if node.text is not None else "",
            start_byte=node.start_byte,
            end_byte=node.end_byte,
            start_line=node.start_point[0] + 1,
            start_column=node.start_point[1],
            end_line=node.end_point[0] + 1,
            end_column=node.end_point[1],
            is_comment=node.type in COMMENT_TYPES,
            node=node,
        )


TokenFilter = Callable[[Token], bool]


def is_semicolon(token: Token) -> bool:
    return not token.is_comment and token.type == ";"


def is_not_semicolon(token: Token) -> bool:
    return not is_semicolon(token)


def is_closing_brace(token: Token) -> bool:
    return not token.is_comment and token.type == "}"


def _collect_tokens(root: Node) -> list[Token]:
    """Collect leaf tokens of the tree in document order."""
    tokens: list[Token] = []
    stack = [root]
    while stack:
        node = stack.pop()
        if node.child_count == 0 or node.type in ATOMIC_TYPES:
            # Zero-width leaves are MISSING nodes inserted by error recovery.
            if node.end_byte > node.start_byte:
                tokens.append(Token.from_node(node))
            continue
        stack.extend(reversed(node.children))
    tokens.sort(key=lambda t: t.start_byte)
    return tokens


class TokenStore:
    """Ordered tokens of one parsed file with position based lookups.

    Every lookup excludes comments unless ``include_comments`` is set.
    """

    def __init__(self, root: Node):
        self._all = _collect_tokens(root)
        self._all_starts = [t.start_byte for t in self._all]
        self._code = [t for t in self._all if not t.is_comment]
        self._code_starts = [t.start_byte for t in self._code]
        logger.debug(
            "Collected %d token(s), %d comment(s)",
            len(self._all),
            len(self._all) - len(self._code),
        )

    def _select(self, include_comments: bool) -> tuple[list[Token], list[int]]:
        if include_comments:
            return self._all, self._all_starts
        return self._code, self._code_starts

    def first_token(self, node: Node, include_comments: bool = False) -> Token | None:
        """Get the first token inside ``node``."""
        tokens, starts = self._select(include_comments)
        index = bisect_left(starts, node.start_byte)
        if index < len(tokens) and tokens[index].start_byte < node.end_byte:
            return tokens[index]
        return None

    def last_token(
        self,
        node: Node,
        predicate: TokenFilter | None = None,
        include_comments: bool = False,
    ) -> Token | None:
        """Get the last token inside ``node``, optionally the last one passing ``predicate``."""
        tokens, starts = self._select(include_comments)
        index = bisect_left(starts, node.end_byte) - 1
        while index >= 0 and tokens[index].start_byte >= node.start_byte:
            token = tokens[index]
            if predicate is None or predicate(token):
                return token
            index -= 1
        return None

    def token_before(self, token: Token, include_comments: bool = False) -> Token | None:
        tokens, starts = self._select(include_comments)
        index = bisect_left(starts, token.start_byte) - 1
        return tokens[index] if index >= 0 else None

    def token_after(self, token: Token, include_comments: bool = False) -> Token | None:
        tokens, starts = self._select(include_comments)
        index = bisect_right(starts, token.start_byte)
        return tokens[index] if index < len(tokens) else None

    def tokens_between(
        self, left: Token, right: Token, include_comments: bool = False
    ) -> list[Token]:
        """Get the tokens strictly between ``left`` and ``right``."""
        tokens, starts = self._select(include_comments)
        low = bisect_left(starts, left.end_byte)
        high = bisect_left(starts, right.start_byte)
        return tokens[low:high]

    def comments_between(self, left: Token, right: Token) -> list[Token]:
        return [t for t in self.tokens_between(left, right, include_comments=True) if t.is_comment]
