"""Parser and validator for padding rule configuration."""

from collections.abc import Sequence
from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]

from .models import LinebreakType, PaddingRule, StatementType


class RuleConfigError(Exception):
    """Raised when a padding rule configuration is malformed."""

    pass


def _parse_requirement(requirement_str: Any) -> LinebreakType:
    """Parse requirement string into LinebreakType enum."""
    try:
        return LinebreakType(requirement_str)
    except ValueError:
        valid = [t.value for t in LinebreakType]
        raise RuleConfigError(
            f"Invalid requirement '{requirement_str}'. Valid requirements: {', '.join(valid)}"
        )


def _parse_statement_type(name: Any) -> StatementType:
    """Parse a statement type name into StatementType enum."""
    if not isinstance(name, str):
        raise RuleConfigError(f"Statement type must be a string, got {name!r}")
    try:
        return StatementType(name)
    except ValueError:
        valid = [t.value for t in StatementType]
        raise RuleConfigError(
            f"Invalid statement type '{name}'. Valid statement types: {', '.join(valid)}"
        )


def _parse_matcher(matcher: Any) -> tuple[StatementType, ...]:
    """Parse a statement type name or a list of names."""
    if isinstance(matcher, str):
        return (_parse_statement_type(matcher),)

    if not isinstance(matcher, (list, tuple)):
        raise RuleConfigError(
            f"Statement types must be a name or a list of names, got {matcher!r}"
        )
    if not matcher:
        raise RuleConfigError("Statement type list must not be empty")

    types = tuple(_parse_statement_type(name) for name in matcher)
    if len(set(types)) != len(types):
        raise RuleConfigError(f"Statement type list contains duplicates: {list(matcher)}")
    return types


def parse_rule_entry(entry: Any) -> PaddingRule:
    """
    Parse one configuration entry into a PaddingRule.

    The entry is either a ``[requirement, prev, next]`` list, where ``prev``
    and ``next`` are a statement type name or a list of names, or a rule
    string (see ``parse_rule``).

    Raises:
        RuleConfigError: If the entry is malformed
    """
    if isinstance(entry, str):
        return parse_rule(entry)

    if not isinstance(entry, (list, tuple)) or len(entry) != 3:
        raise RuleConfigError(
            f"Invalid rule {entry!r}: expected [requirement, prev, next]"
        )

    requirement, prev, next_ = entry
    return PaddingRule(
        requirement=_parse_requirement(requirement),
        prev=_parse_matcher(prev),
        next=_parse_matcher(next_),
    )


def _split_alternatives(matcher: str) -> str | list[str]:
    names = [n.strip() for n in matcher.split("|")]
    return names[0] if len(names) == 1 else names


def parse_rule(rule_string: str) -> PaddingRule:
    """
    Parse a rule string into a PaddingRule.

    Format: <requirement> : <prev> : <next>, where alternatives in <prev> and
    <next> are separated by ``|``.

    Examples:
        blankline:*:return
        always:directive:*
        any:const|let|var:const|let|var

    Args:
        rule_string: The rule string to parse

    Returns:
        A PaddingRule

    Raises:
        RuleConfigError: If the rule string is invalid
    """
    rule_string = rule_string.strip()
    if not rule_string:
        raise RuleConfigError("Empty rule string")

    parts = rule_string.split(":")
    if len(parts) != 3:
        raise RuleConfigError(
            f"Invalid rule format: expected 'requirement:prev:next' but got '{rule_string}'"
        )

    requirement, prev, next_ = (p.strip() for p in parts)
    return parse_rule_entry([requirement, _split_alternatives(prev), _split_alternatives(next_)])


def parse_rules(entries: Sequence[Any] | None) -> list[PaddingRule]:
    """
    Parse and validate an ordered list of rule entries.

    Args:
        entries: Rule entries; None or an empty list means no rules

    Returns:
        List of PaddingRule objects in declaration order

    Raises:
        RuleConfigError: If any entry is invalid
    """
    if entries is None:
        return []
    if isinstance(entries, str) or not isinstance(entries, (list, tuple)):
        raise RuleConfigError(f"Rules must be a list, got {entries!r}")

    rules = []
    for index, entry in enumerate(entries):
        try:
            rules.append(parse_rule_entry(entry))
        except RuleConfigError as e:
            raise RuleConfigError(f"Error in rule {index + 1}: {e}") from e
    return rules


def parse_rules_file(file_path: str) -> list[PaddingRule]:
    """
    Parse a plain rules file holding one rule string per line.

    Blank lines and lines starting with ``#`` are skipped.

    Raises:
        RuleConfigError: If a line is not a valid rule, naming the line
        FileNotFoundError: If the file doesn't exist
    """
    rules = []
    with open(file_path, "r", encoding="utf-8") as f:
        for line_number, raw_line in enumerate(f, 1):
            text = raw_line.strip()
            if not text or text.startswith("#"):
                continue
            try:
                rules.append(parse_rule(text))
            except RuleConfigError as e:
                raise RuleConfigError(f"Error on line {line_number}: {e}") from e
    return rules


def _extends_chain(rulesets: dict[str, Any], ruleset_name: str) -> list[str]:
    """Follow ``extends`` from a ruleset up to its root, returning the names root first."""
    chain: list[str] = []
    name: Any = ruleset_name
    while name is not None:
        if not isinstance(name, str):
            raise RuleConfigError(f"Ruleset '{chain[-1]}': 'extends' must be a ruleset name, got {name!r}")
        if name in chain:
            cycle = " -> ".join([*chain, name])
            raise RuleConfigError(f"Circular dependency detected in ruleset '{name}': {cycle}")
        if name not in rulesets:
            raise RuleConfigError(f"Ruleset '{name}' not found (referenced by 'extends')")
        ruleset = rulesets[name]
        if not isinstance(ruleset, dict):
            raise RuleConfigError(f"Ruleset '{name}' must be a dictionary")
        chain.append(name)
        name = ruleset.get("extends")
    return list(reversed(chain))


def _resolve_ruleset(rulesets: dict[str, Any], ruleset_name: str) -> list[PaddingRule]:
    """Collect the rules of a ruleset and the rulesets it extends.

    Extended rules come first so the extending ruleset's own rules override them.
    """
    rules: list[PaddingRule] = []
    for name in _extends_chain(rulesets, ruleset_name):
        try:
            rules.extend(parse_rules(rulesets[name].get("rules")))
        except RuleConfigError as e:
            raise RuleConfigError(f"Ruleset '{name}': {e}") from e
    return rules


def _read_rulesets(file_path: str) -> dict[str, Any]:
    """Load the ``rulesets`` mapping of a YAML rules file."""
    path = Path(file_path)
    if not path.is_file():
        raise FileNotFoundError(f"Rules file not found: {file_path}")

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise RuleConfigError(f"Invalid YAML in {file_path}: {e}") from e

    if not isinstance(data, dict):
        raise RuleConfigError("YAML rules file must contain a dictionary")
    if "rulesets" not in data:
        raise RuleConfigError("YAML rules file missing 'rulesets' key")
    if not isinstance(data["rulesets"], dict):
        raise RuleConfigError("'rulesets' must be a dictionary")
    return data["rulesets"]


def parse_yaml_rules_file(file_path: str, ruleset_name: str = "default") -> list[PaddingRule]:
    """
    Parse one ruleset of a YAML rules file.

    Example::

        rulesets:
          default:
            rules:
              - [blankline, "*", return]
          strict:
            extends: default
            rules:
              - [always, "*", "*"]

    Args:
        file_path: Path to the YAML rules file
        ruleset_name: Ruleset to load

    Returns:
        Rules of the ruleset, preceded by the rules of the rulesets it extends

    Raises:
        RuleConfigError: If the YAML is invalid or a ruleset is malformed
        FileNotFoundError: If the file doesn't exist
    """
    rulesets = _read_rulesets(file_path)
    if ruleset_name not in rulesets:
        available = ", ".join(rulesets)
        raise RuleConfigError(f"Ruleset '{ruleset_name}' not found. Available rulesets: {available}")
    return _resolve_ruleset(rulesets, ruleset_name)
