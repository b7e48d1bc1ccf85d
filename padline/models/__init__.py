"""Domain models for padline."""

from padline.models.ast import ParsedFile, ParseResult
from padline.models.lint import RULE_ID, Edit, FileReport, LintResult, Violation

__all__ = [
    "RULE_ID",
    "Edit",
    "FileReport",
    "LintResult",
    "ParseResult",
    "ParsedFile",
    "Violation",
]
