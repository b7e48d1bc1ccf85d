"""Top-level pipeline orchestration.

Parse → Check padding → (optionally) Apply fixes
"""

import logging
from collections.abc import Sequence
from pathlib import Path

from padline.models import FileReport, LintResult, ParsedFile, Violation
from padline.pipeline.fixer import apply_edits, select_edits
from padline.pipeline.parse import parse_path, parse_source_code
from padline.pipeline.rules import PaddingRule
from padline.pipeline.traversal import check_padding

logger = logging.getLogger(__name__)


def lint_parsed_file(parsed: ParsedFile, rules: Sequence[PaddingRule]) -> list[Violation]:
    """Check one parsed file against the padding rules."""
    return check_padding(parsed.root_node, rules, parsed.tokens, parsed.path)


def lint_source(source: bytes | str, rules: Sequence[PaddingRule]) -> list[Violation]:
    """Parse JavaScript source and check it against the padding rules."""
    return lint_parsed_file(parse_source_code(source), rules)


def fix_parsed_file(
    parsed: ParsedFile, violations: Sequence[Violation]
) -> tuple[bytes, list[Violation]]:
    """Apply the fixes proposed by ``violations`` to the file's source.

    A fix overlapping one applied before it is skipped, and its violation
    stays unfixed.

    Returns:
        Tuple of (fixed source, violations whose fix was applied)
    """
    fixable = [v for v in violations if v.fix is not None]
    selected = {id(edit) for edit in select_edits(v.fix for v in fixable if v.fix is not None)}
    fixed = [v for v in fixable if id(v.fix) in selected]
    if not fixed:
        return parsed.source, []
    source, _ = apply_edits(parsed.source, [v.fix for v in fixed if v.fix is not None])
    return source, fixed


def fix_source(source: str, rules: Sequence[PaddingRule]) -> str:
    """Lint JavaScript source and return it with every safe fix applied once."""
    parsed = parse_source_code(source)
    fixed_source, _ = fix_parsed_file(parsed, lint_parsed_file(parsed, rules))
    return fixed_source.decode("utf-8")


def _lint_file(parsed: ParsedFile, rules: Sequence[PaddingRule], fix: bool) -> FileReport:
    """Lint one file and, when asked, write the fixed source back."""
    violations = lint_parsed_file(parsed, rules)
    report = FileReport(path=parsed.path, violations=violations)
    if not fix or not violations:
        return report

    fixed_source, fixed = fix_parsed_file(parsed, violations)
    if fixed:
        parsed.path.write_bytes(fixed_source)
        logger.info("Applied %d fix(es) to %s", len(fixed), parsed.path)
    fixed_ids = {id(v) for v in fixed}
    report.fixed = len(fixed)
    report.violations = [v for v in violations if id(v) not in fixed_ids]
    return report


def run_pipeline(target_path: Path, rules: Sequence[PaddingRule], fix: bool = False) -> LintResult:
    """Run the full lint pipeline on a file or directory.

    Args:
        target_path: File or directory to lint
        rules: Padding rules, later rules taking precedence
        fix: If True, write fixes back and only report what stays unfixed

    Returns:
        LintResult with per file reports and failures
    """
    logger.info("Stage 1/2: Parsing...")
    parse_result = parse_path(target_path)

    logger.info("Stage 2/2: Checking %d file(s) against %d rule(s)...", parse_result.success_count, len(rules))
    reports = [_lint_file(parsed, rules, fix) for parsed in parse_result.parsed_files]

    result = LintResult(reports=reports, failed_files=parse_result.failed_files)
    logger.info(
        "Lint complete: %d violation(s), %d fix(es) applied, %d file(s) failed",
        result.violation_count,
        result.fixed_count,
        result.failure_count,
    )
    return result
