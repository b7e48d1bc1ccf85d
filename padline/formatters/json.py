"""JSON formatter for padline results."""

import json
from typing import Any

from padline.models import RULE_ID, FileReport, LintResult, Violation


def _violation_to_dict(violation: Violation) -> dict[str, Any]:
    """Convert a Violation to a dictionary."""
    data: dict[str, Any] = {
        "rule_id": RULE_ID,
        "requirement": violation.requirement.value,
        "message": violation.message,
        "line": violation.line,
        "column": violation.column,
        "end_line": violation.end_line,
        "end_column": violation.end_column,
        "fix": None,
    }
    if violation.fix is not None:
        data["fix"] = violation.fix.model_dump()
    return data


def _report_to_dict(report: FileReport) -> dict[str, Any]:
    """Convert a FileReport to a dictionary."""
    return {
        "file_path": str(report.path),
        "fixed": report.fixed,
        "violations": [_violation_to_dict(v) for v in report.violations],
    }


def format_as_json(result: LintResult, *, pretty: bool = True) -> str:
    """Format lint results as JSON.

    Args:
        result: The lint result to format
        pretty: If True, format with indentation for readability

    Returns:
        JSON-formatted string
    """
    data = {
        "total_files": result.total_files,
        "total_violations": result.violation_count,
        "fixed": result.fixed_count,
        "files": [_report_to_dict(report) for report in result.reports],
        "parse_errors": [
            {"file_path": str(path), "error": error}
            for path, error in result.failed_files.items()
        ],
    }

    if pretty:
        return json.dumps(data, indent=2)
    return json.dumps(data)
