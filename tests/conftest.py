from pathlib import Path

import pytest
from tree_sitter import Node

from padline.config import LintSettings, get_settings, set_settings
from padline.models import ParsedFile
from padline.pipeline.parse import parse_source_code
from padline.pipeline.rules import PaddingRule, parse_rule

fixtures_dir = Path(__file__).parent / "fixtures" / "javascript"
fixture_sample = fixtures_dir / "sample.js"


def parse_js(source: str) -> ParsedFile:
    """Parse a JavaScript snippet."""
    return parse_source_code(source)


def rules_of(*rule_strings: str) -> list[PaddingRule]:
    """Build padding rules from rule strings."""
    return [parse_rule(rule) for rule in rule_strings]


def top_level_statements(parsed: ParsedFile) -> list[Node]:
    """Get the statements directly under the program node."""
    return [child for child in parsed.root_node.named_children if child.type != "comment"]


def find_node_by_type(node: Node, node_type: str) -> Node | None:
    """Find the first node of the given type in document order."""
    stack = [node]
    while stack:
        current = stack.pop()
        if current.type == node_type:
            return current
        stack.extend(reversed(current.children))
    return None


@pytest.fixture(autouse=True)
def default_settings():
    """Run every test with default settings, ignoring the environment."""
    original_settings = get_settings()
    set_settings(LintSettings())

    yield

    set_settings(original_settings)
