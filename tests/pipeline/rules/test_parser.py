"""Tests for padding rule parsing."""

import pytest

from padline.pipeline.rules import (
    LinebreakType,
    PaddingRule,
    RuleConfigError,
    StatementType,
    parse_rule,
    parse_rule_entry,
    parse_rules,
    parse_rules_file,
    parse_yaml_rules_file,
)


class TestParseRule:
    """Tests for parse_rule function."""

    def test_parse_simple_rule(self):
        rule = parse_rule("blankline:*:return")
        assert rule.requirement == LinebreakType.BLANKLINE
        assert rule.prev == (StatementType.ANY,)
        assert rule.next == (StatementType.RETURN,)

    def test_parse_alternatives(self):
        rule = parse_rule("any:const|let|var:const|let|var")
        assert rule.requirement == LinebreakType.ANY
        assert rule.prev == (StatementType.CONST, StatementType.LET, StatementType.VAR)
        assert rule.next == rule.prev

    def test_parse_hyphenated_types(self):
        rule = parse_rule("blankline:multiline-block-like:block-like")
        assert rule.prev == (StatementType.MULTILINE_BLOCK_LIKE,)
        assert rule.next == (StatementType.BLOCK_LIKE,)

    def test_whitespace_is_ignored(self):
        assert parse_rule("  never : const | let : * ") == parse_rule("never:const|let:*")

    def test_str_round_trip(self):
        rule = parse_rule("always:directive|import:*")
        assert str(rule) == "always:directive|import:*"
        assert parse_rule(str(rule)) == rule

    def test_empty_rule(self):
        with pytest.raises(RuleConfigError, match="Empty rule string"):
            parse_rule("   ")

    @pytest.mark.parametrize("rule_string", ["never:*", "never:*:*:*", "never"])
    def test_wrong_number_of_parts(self, rule_string):
        with pytest.raises(RuleConfigError, match="Invalid rule format"):
            parse_rule(rule_string)

    def test_unknown_requirement(self):
        with pytest.raises(RuleConfigError, match="Invalid requirement 'sometimes'"):
            parse_rule("sometimes:*:*")

    def test_unknown_statement_type(self):
        with pytest.raises(RuleConfigError, match="Invalid statement type 'statement'"):
            parse_rule("never:statement:*")

    def test_duplicate_alternatives(self):
        with pytest.raises(RuleConfigError, match="duplicates"):
            parse_rule("never:let|let:*")

    def test_empty_alternative(self):
        with pytest.raises(RuleConfigError):
            parse_rule("never:let|:*")


class TestParseRuleEntry:
    """Tests for the list form of rules."""

    def test_single_names(self):
        rule = parse_rule_entry(["never", "*", "*"])
        assert rule == PaddingRule(LinebreakType.NEVER, (StatementType.ANY,), (StatementType.ANY,))

    def test_lists(self):
        rule = parse_rule_entry(("always", ["if", "for"], "block"))
        assert rule.prev == (StatementType.IF, StatementType.FOR)
        assert rule.next == (StatementType.BLOCK,)

    def test_to_config(self):
        entry = ["blankline", ["const", "let"], "*"]
        assert parse_rule_entry(entry).to_config() == entry

    def test_string_entry(self):
        assert parse_rule_entry("never:*:*") == parse_rule_entry(["never", "*", "*"])

    @pytest.mark.parametrize(
        "entry",
        [
            ["never", "*"],
            ["never", "*", "*", "*"],
            {"requirement": "never"},
            42,
        ],
    )
    def test_malformed_entry(self, entry):
        with pytest.raises(RuleConfigError, match="expected \\[requirement, prev, next\\]"):
            parse_rule_entry(entry)

    def test_empty_list(self):
        with pytest.raises(RuleConfigError, match="must not be empty"):
            parse_rule_entry(["never", [], "*"])

    def test_non_string_type(self):
        with pytest.raises(RuleConfigError, match="must be a string"):
            parse_rule_entry(["never", [1], "*"])

    def test_list_names_are_not_stripped(self):
        with pytest.raises(RuleConfigError, match="Invalid statement type ' \*'"):
            parse_rule_entry(["never", " *", "*"])

    def test_matcher_must_be_name_or_list(self):
        with pytest.raises(RuleConfigError, match="must be a name or a list"):
            parse_rule_entry(["never", {"if": True}, "*"])


class TestParseRules:
    """Tests for parse_rules function."""

    def test_none_and_empty(self):
        assert parse_rules(None) == []
        assert parse_rules([]) == []

    def test_keeps_order(self):
        rules = parse_rules([["never", "*", "*"], "always:block-like:block-like"])
        assert [str(r) for r in rules] == ["never:*:*", "always:block-like:block-like"]

    def test_error_names_rule(self):
        with pytest.raises(RuleConfigError, match="Error in rule 2"):
            parse_rules(["never:*:*", ["never", "nope", "*"]])

    def test_not_a_list(self):
        with pytest.raises(RuleConfigError, match="Rules must be a list"):
            parse_rules("never:*:*")


class TestParseRulesFile:
    """Tests for plain rules files."""

    def test_parse_file(self, tmp_path):
        rules_file = tmp_path / "rules.txt"
        rules_file.write_text("# comment\n\nnever:*:*\nblankline:*:return\n")

        rules = parse_rules_file(str(rules_file))
        assert [str(r) for r in rules] == ["never:*:*", "blankline:*:return"]

    def test_error_names_line(self, tmp_path):
        rules_file = tmp_path / "rules.txt"
        rules_file.write_text("never:*:*\n\nnever:*\n")

        with pytest.raises(RuleConfigError, match="Error on line 3"):
            parse_rules_file(str(rules_file))


class TestParseYamlRulesFile:
    """Tests for YAML rulesets."""

    def write(self, tmp_path, content: str) -> str:
        path = tmp_path / "rules.yaml"
        path.write_text(content)
        return str(path)

    def test_default_ruleset(self, tmp_path):
        path = self.write(
            tmp_path,
            "rulesets:\n"
            "  default:\n"
            "    rules:\n"
            "      - [blankline, [const, let, var], '*']\n"
            "      - [any, [const, let, var], [const, let, var]]\n",
        )

        rules = parse_yaml_rules_file(path)
        assert [str(r) for r in rules] == [
            "blankline:const|let|var:*",
            "any:const|let|var:const|let|var",
        ]

    def test_extends_puts_base_rules_first(self, tmp_path):
        path = self.write(
            tmp_path,
            "rulesets:\n"
            "  base:\n"
            "    rules:\n"
            "      - never:*:*\n"
            "  default:\n"
            "    extends: base\n"
            "    rules:\n"
            "      - always:block-like:block-like\n",
        )

        rules = parse_yaml_rules_file(path, "default")
        assert [str(r) for r in rules] == ["never:*:*", "always:block-like:block-like"]

    def test_ruleset_without_rules(self, tmp_path):
        path = self.write(tmp_path, "rulesets:\n  default: {}\n")
        assert parse_yaml_rules_file(path) == []

    def test_circular_extends(self, tmp_path):
        path = self.write(
            tmp_path,
            "rulesets:\n"
            "  a:\n"
            "    extends: b\n"
            "  b:\n"
            "    extends: a\n",
        )

        with pytest.raises(RuleConfigError, match="Circular dependency"):
            parse_yaml_rules_file(path, "a")

    @pytest.mark.parametrize("extends", ["[base]", "{base: true}", "1"])
    def test_extends_must_be_a_name(self, tmp_path, extends):
        path = self.write(tmp_path, f"rulesets:\n  default:\n    extends: {extends}\n  base: {{}}\n")

        with pytest.raises(RuleConfigError, match="'extends' must be a ruleset name"):
            parse_yaml_rules_file(path)

    def test_missing_extended_ruleset(self, tmp_path):
        path = self.write(tmp_path, "rulesets:\n  default:\n    extends: nowhere\n")

        with pytest.raises(RuleConfigError, match="'nowhere' not found"):
            parse_yaml_rules_file(path)

    def test_unknown_ruleset(self, tmp_path):
        path = self.write(tmp_path, "rulesets:\n  default: {}\n")

        with pytest.raises(RuleConfigError, match="Available rulesets: default"):
            parse_yaml_rules_file(path, "strict")

    def test_invalid_rule_names_ruleset(self, tmp_path):
        path = self.write(tmp_path, "rulesets:\n  default:\n    rules:\n      - [never, '*']\n")

        with pytest.raises(RuleConfigError, match="Ruleset 'default': Error in rule 1"):
            parse_yaml_rules_file(path)

    @pytest.mark.parametrize(
        "content,message",
        [
            ("- a\n- b\n", "must contain a dictionary"),
            ("other: 1\n", "missing 'rulesets' key"),
            ("rulesets: [a]\n", "'rulesets' must be a dictionary"),
            ("rulesets: {default: [a]\n", "Invalid YAML"),
        ],
    )
    def test_invalid_structure(self, tmp_path, content, message):
        path = self.write(tmp_path, content)

        with pytest.raises(RuleConfigError, match=message):
            parse_yaml_rules_file(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            parse_yaml_rules_file(str(tmp_path / "missing.yaml"))
