"""Factory for building padding rules from settings."""

import logging
from pathlib import Path

from padline.config import LintSettings
from padline.pipeline.rules import (
    PaddingRule,
    get_ruleset,
    parse_rules,
    parse_rules_file,
    parse_yaml_rules_file,
)

logger = logging.getLogger(__name__)

YAML_SUFFIXES = (".yaml", ".yml")


def _load_rules_from_file(rules_file: str, ruleset_name: str) -> list[PaddingRule]:
    """Load a YAML ruleset or a plain rules file, chosen by the file extension."""
    if Path(rules_file).suffix.lower() in YAML_SUFFIXES:
        rules = parse_yaml_rules_file(rules_file, ruleset_name)
        logger.info("Ruleset '%s' from %s: %d rule(s)", ruleset_name, rules_file, len(rules))
    else:
        rules = parse_rules_file(rules_file)
        logger.info("Rules file %s: %d rule(s)", rules_file, len(rules))
    return rules


def _log_active_rules(rules: list[PaddingRule]) -> None:
    if not rules:
        logger.warning("No padding rules configured - nothing will be reported")
        return

    logger.debug("Active rules, last match wins:")
    for position, rule in enumerate(rules, 1):
        logger.debug("  %d. %s", position, rule)


def build_rules(settings: LintSettings) -> list[PaddingRule]:
    """Build the ordered padding rules from settings.

    Inline rules take priority over a rules file, which takes priority over
    the built-in ruleset.

    Args:
        settings: Settings containing rule configuration

    Returns:
        Validated rules in precedence order

    Raises:
        RuleConfigError: If the configuration is invalid
        FileNotFoundError: If the rules file doesn't exist
    """
    rules_settings = settings.rules
    if rules_settings.rules:
        rules = parse_rules(rules_settings.rules)
    elif rules_settings.rules_file:
        rules = _load_rules_from_file(rules_settings.rules_file, rules_settings.rules_file_ruleset)
    else:
        rules = get_ruleset(rules_settings.ruleset)
        logger.info("Using built-in '%s' ruleset", rules_settings.ruleset)

    _log_active_rules(rules)
    return rules
