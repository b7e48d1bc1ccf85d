"""Traversal of statement lists checking the line breaks between statements."""

import logging
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from pathlib import Path

from tree_sitter import Node

from padline.models.lint import Violation
from padline.pipeline.linebreaks import count_linebreaks
from padline.pipeline.resolver import resolve_requirement
from padline.pipeline.rules.models import PaddingRule
from padline.pipeline.tokens import TokenStore

logger = logging.getLogger(__name__)

# Containers holding a list of statements; each opens a scope.
STATEMENT_LIST_PARENTS = frozenset({"program", "statement_block", "switch_case", "switch_default"})

STATEMENT_TYPES = frozenset(
    {
        "break_statement",
        "continue_statement",
        "debugger_statement",
        "do_statement",
        "empty_statement",
        "expression_statement",
        "for_in_statement",
        "for_statement",
        "if_statement",
        "labeled_statement",
        "return_statement",
        "statement_block",
        "switch_statement",
        "throw_statement",
        "try_statement",
        "while_statement",
        "with_statement",
        "class_declaration",
        "export_statement",
        "function_declaration",
        "generator_function_declaration",
        "import_statement",
        "lexical_declaration",
        "variable_declaration",
    }
)


@dataclass
class ScopeFrame:
    """The statement most recently visited in one statement list."""

    previous: Node | None = None


class PaddingChecker:
    """Checks every pair of adjacent statements of a tree against padding rules."""

    def __init__(self, rules: Sequence[PaddingRule], tokens: TokenStore, path: Path | None = None):
        self.rules = list(rules)
        self.tokens = tokens
        self.path = path

    def check(self, root: Node) -> list[Violation]:
        """Walk the tree in document order and collect violations."""
        frames: list[ScopeFrame] = []
        violations: list[Violation] = []

        # (node, exiting) pairs; exits are scheduled after a node's children.
        stack: list[tuple[Node, bool]] = [(root, False)]
        while stack:
            node, exiting = stack.pop()
            if exiting:
                frames.pop()
                continue

            if node.type in STATEMENT_TYPES:
                violation = self._verify(node, frames)
                if violation is not None:
                    violations.append(violation)

            if node.type in STATEMENT_LIST_PARENTS:
                frames.append(ScopeFrame())
                stack.append((node, True))
            stack.extend((child, False) for child in reversed(node.children))

        if frames:
            raise RuntimeError(f"{len(frames)} scope(s) left open after traversal")
        return violations

    def _verify(self, node: Node, frames: list[ScopeFrame]) -> Violation | None:
        """Verify the line breaks between ``node`` and the statement before it."""
        parent = node.parent
        if parent is None or parent.type not in STATEMENT_LIST_PARENTS:
            return None

        frame = frames[-1]
        previous = frame.previous
        frame.previous = node
        if previous is None:
            return None

        requirement = resolve_requirement(self.rules, previous, node, self.tokens)
        count = count_linebreaks(previous, node, self.tokens)
        if requirement.test(count):
            return None

        fix = requirement.fix(previous, node, self.tokens)
        logger.debug(
            "Line %d: %d linebreak(s) fail '%s' (%s)",
            node.start_point[0] + 1,
            count,
            requirement.type.value,
            "fixable" if fix is not None else "not fixable",
        )
        return Violation(
            path=self.path,
            node=node,
            requirement=requirement.type,
            message=requirement.message,
            line=node.start_point[0] + 1,
            column=node.start_point[1] + 1,
            end_line=node.end_point[0] + 1,
            end_column=node.end_point[1] + 1,
            fix=fix,
        )


def check_padding(
    root: Node,
    rules: Sequence[PaddingRule],
    tokens: TokenStore | None = None,
    path: Path | None = None,
) -> list[Violation]:
    """Check the line breaks between adjacent statements of a tree.

    Args:
        root: Root node of the parsed file
        rules: Padding rules, later rules taking precedence
        tokens: Token store of the file, built from ``root`` if not given
        path: Path reported with each violation

    Returns:
        Violations in document order
    """
    if not rules:
        return []
    if tokens is None:
        tokens = TokenStore(root)
    return PaddingChecker(rules, tokens, path).check(root)


def iter_statements(root: Node) -> Iterator[tuple[Node, int]]:
    """Yield the statements checked against padding rules with their nesting depth.

    Depth counts the statement lists enclosing the statement, the top level
    of the program being 0.
    """
    depth = -1
    stack: list[tuple[Node, bool]] = [(root, False)]
    while stack:
        node, exiting = stack.pop()
        if exiting:
            depth -= 1
            continue

        parent = node.parent
        if node.type in STATEMENT_TYPES and parent is not None and parent.type in STATEMENT_LIST_PARENTS:
            yield node, depth

        if node.type in STATEMENT_LIST_PARENTS:
            depth += 1
            stack.append((node, True))
        stack.extend((child, False) for child in reversed(node.children))
