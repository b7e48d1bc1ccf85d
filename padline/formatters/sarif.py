"""SARIF (Static Analysis Results Interchange Format) formatter for padline.

SARIF is a standard format for static analysis tool output.
Specification: https://docs.oasis-open.org/sarif/sarif/v2.1.0/sarif-v2.1.0.html
"""

from sarif_pydantic import (  # type: ignore[import-untyped]
    ArtifactLocation,
    Level,
    Location,
    Message,
    PhysicalLocation,
    Region,
    ReportingDescriptor,
    Result,
    Run,
    Sarif,
    Tool,
    ToolDriver,
)

from padline import __version__
from padline.models import RULE_ID, LintResult, Violation


def format_as_sarif(result: LintResult, *, pretty: bool = True) -> str:
    """Format lint results as SARIF JSON.

    Args:
        result: The lint result to format
        pretty: If True, format with indentation for readability

    Returns:
        SARIF-formatted JSON string
    """
    sarif_log = _create_sarif_log(result)

    if pretty:
        json_output: str = sarif_log.model_dump_json(indent=2, exclude_none=True, by_alias=True)
        return json_output
    json_output = sarif_log.model_dump_json(exclude_none=True, by_alias=True)
    return json_output


def _create_sarif_log(result: LintResult) -> Sarif:
    """Create a SARIF log object from lint results."""
    return Sarif(
        version="2.1.0",
        schema_uri="https://json.schemastore.org/sarif-2.1.0.json",
        runs=[_create_run(result)],
    )


def _create_run(result: LintResult) -> Run:
    """Create a SARIF run object."""
    return Run(
        tool=_create_tool(),
        results=[_create_result(v) for v in result.violations],
    )


def _create_tool() -> Tool:
    """Create the SARIF tool descriptor."""
    return Tool(
        driver=ToolDriver(
            name="padline",
            version=__version__,
            semanticVersion=__version__,
            rules=[
                ReportingDescriptor(
                    id=RULE_ID,
                    name="NewlineBetweenStatements",
                    shortDescription=Message(text="Require or disallow newlines between statements"),
                    fullDescription=Message(
                        text="This rule checks the line breaks between adjacent statements of the same statement list against an ordered list of padding rules. The last declared rule matching both statements decides whether the statements must share a line, be on separate lines, or be separated by a blank line."
                    ),
                    help=Message(
                        text="Run padline with --fix to insert or remove the line breaks. Violations with comments between the statements are not fixed automatically."
                    ),
                    defaultConfiguration={"level": "warning"},
                    properties={
                        "tags": ["style", "formatting"],
                        "precision": "very-high",
                    },
                )
            ],
        )
    )


def _create_result(violation: Violation) -> Result:
    """Create a SARIF result from a violation."""
    return Result(
        ruleId=RULE_ID,
        level=Level.WARNING,
        message=Message(text=violation.message),
        locations=[
            Location(
                physicalLocation=PhysicalLocation(
                    artifactLocation=ArtifactLocation(
                        uri=str(violation.path),
                        uriBaseId="%SRCROOT%",
                    ),
                    region=Region(
                        startLine=violation.line,
                        startColumn=violation.column,
                        endLine=violation.end_line,
                        endColumn=violation.end_column,
                    ),
                )
            )
        ],
        properties={
            "requirement": violation.requirement.value,
            "fixable": violation.fixable,
        },
    )
