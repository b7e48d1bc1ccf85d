"""Built-in padding rulesets."""

from .models import PaddingRule
from .parser import RuleConfigError, parse_rule


def build_recommended_rules() -> list[tuple[PaddingRule, str]]:
    """Build the recommended ruleset.

    Returns:
        List of (rule, description) tuples in declaration order
    """
    return [
        (
            parse_rule("blankline:directive:*"),
            "Blank line after the directive prologue",
        ),
        (
            parse_rule("any:directive:directive"),
            "Directives may be grouped",
        ),
        (
            parse_rule("blankline:import:*"),
            "Blank line after imports",
        ),
        (
            parse_rule("any:import:import"),
            "Imports may be grouped",
        ),
        (
            parse_rule("blankline:const|let|var:*"),
            "Blank line after variable declarations",
        ),
        (
            parse_rule("any:const|let|var:const|let|var"),
            "Variable declarations may be grouped",
        ),
        (
            parse_rule("blankline:multiline-block-like:*"),
            "Blank line after multiline blocks",
        ),
        (
            parse_rule("blankline:*:return"),
            "Blank line before return statements",
        ),
    ]


RULESETS = {
    "none": list,
    "recommended": build_recommended_rules,
}


def get_ruleset_with_descriptions(ruleset: str) -> list[tuple[PaddingRule, str]]:
    """Get a built-in ruleset with rule descriptions for display purposes.

    Args:
        ruleset: Name of the ruleset (none, recommended)

    Returns:
        List of tuples containing (PaddingRule, description)

    Raises:
        RuleConfigError: If the ruleset does not exist
    """
    builder = RULESETS.get(ruleset.lower())
    if builder is None:
        raise RuleConfigError(
            f"Unknown ruleset '{ruleset}'. Available rulesets: {', '.join(RULESETS)}"
        )
    return builder()


def get_ruleset(ruleset: str) -> list[PaddingRule]:
    """Get the rules of a built-in ruleset (without descriptions)."""
    return [rule for rule, _ in get_ruleset_with_descriptions(ruleset)]
