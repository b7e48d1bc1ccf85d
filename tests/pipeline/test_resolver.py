"""Tests for resolving the rule that applies to a statement pair."""

from padline.pipeline.requirements import ALWAYS, ANY, BLANKLINE, NEVER
from padline.pipeline.resolver import find_matching_rule, resolve_requirement

from tests.conftest import parse_js, rules_of, top_level_statements


def pair(source: str):
    parsed = parse_js(source)
    previous, current = top_level_statements(parsed)[:2]
    return previous, current, parsed.tokens


class TestResolveRequirement:
    """Tests for resolve_requirement."""

    def test_no_rules_is_any(self):
        previous, current, tokens = pair("foo();\nbar();")
        assert resolve_requirement([], previous, current, tokens) is ANY

    def test_no_matching_rule_is_any(self):
        previous, current, tokens = pair("foo();\nbar();")
        rules = rules_of("never:const:*", "always:*:return")
        assert resolve_requirement(rules, previous, current, tokens) is ANY

    def test_last_declared_rule_wins(self):
        """Test that later rules override earlier ones regardless of specificity."""
        previous, current, tokens = pair("{ foo() }\n{ foo() }")

        rules = rules_of("never:*:*", "always:block-like:block-like")
        assert resolve_requirement(rules, previous, current, tokens) is ALWAYS

        rules = rules_of("always:block-like:block-like", "never:*:*")
        assert resolve_requirement(rules, previous, current, tokens) is NEVER

    def test_both_sides_must_match(self):
        previous, current, tokens = pair("const a = 1;\nreturn_value();")
        rules = rules_of("blankline:const:*", "never:const:return")
        assert resolve_requirement(rules, previous, current, tokens) is BLANKLINE

    def test_alternatives(self):
        previous, current, tokens = pair("let a;\nvar b;")
        rules = rules_of("blankline:*:*", "any:const|let|var:const|let|var")
        assert resolve_requirement(rules, previous, current, tokens) is ANY

    def test_find_matching_rule(self):
        previous, current, tokens = pair("let a;\nvar b;")
        rules = rules_of("blankline:*:*", "never:const:*")

        assert find_matching_rule(rules, previous, current, tokens) == rules[0]
        assert find_matching_rule(rules[1:], previous, current, tokens) is None
