"""Padding rules: models, configuration parsing and built-in rulesets."""

from .models import LinebreakType, PaddingRule, StatementType
from .parser import (
    RuleConfigError,
    parse_rule,
    parse_rule_entry,
    parse_rules,
    parse_rules_file,
    parse_yaml_rules_file,
)
from .rulesets import RULESETS, get_ruleset, get_ruleset_with_descriptions

__all__ = [
    "LinebreakType",
    "PaddingRule",
    "RULESETS",
    "RuleConfigError",
    "StatementType",
    "get_ruleset",
    "get_ruleset_with_descriptions",
    "parse_rule",
    "parse_rule_entry",
    "parse_rules",
    "parse_rules_file",
    "parse_yaml_rules_file",
]
