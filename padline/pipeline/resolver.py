"""Resolution of the padding rule that applies to a statement pair."""

from collections.abc import Sequence

from tree_sitter import Node

from padline.pipeline.classifier import matches
from padline.pipeline.requirements import ANY, Requirement, get_requirement
from padline.pipeline.rules.models import PaddingRule
from padline.pipeline.tokens import TokenStore


def find_matching_rule(
    rules: Sequence[PaddingRule], previous: Node, current: Node, tokens: TokenStore
) -> PaddingRule | None:
    """Find the last declared rule matching the statement pair."""
    for rule in reversed(rules):
        if matches(previous, rule.prev, tokens) and matches(current, rule.next, tokens):
            return rule
    return None


def resolve_requirement(
    rules: Sequence[PaddingRule], previous: Node, current: Node, tokens: TokenStore
) -> Requirement:
    """Get the line break requirement between two adjacent statements.

    Later rules take precedence over earlier ones; only declaration order
    matters, not how specific a rule is. Without a matching rule anything goes.
    """
    rule = find_matching_rule(rules, previous, current, tokens)
    if rule is None:
        return ANY
    return get_requirement(rule.requirement)
