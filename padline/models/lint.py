"""Models for lint results."""

from pathlib import Path

from pydantic import BaseModel, Field
from tree_sitter import Node

from padline.pipeline.rules.models import LinebreakType

RULE_ID = "newline-between-statements"


class Edit(BaseModel):
    """A single contiguous replacement of source bytes.

    Offsets index the UTF-8 encoded source, as reported by tree-sitter.
    """

    model_config = {"frozen": True}

    start_byte: int = Field(ge=0, description="Start offset of the replaced range")
    end_byte: int = Field(ge=0, description="End offset (exclusive) of the replaced range")
    text: str = Field(description="Replacement text")

    @classmethod
    def insert(cls, offset: int, text: str) -> "Edit":
        return cls(start_byte=offset, end_byte=offset, text=text)

    @classmethod
    def remove(cls, start_byte: int, end_byte: int) -> "Edit":
        return cls(start_byte=start_byte, end_byte=end_byte, text="")


class Violation(BaseModel):
    """A statement whose preceding line breaks break a padding rule."""

    model_config = {"arbitrary_types_allowed": True}

    path: Path | None = Field(default=None, description="Path to the source file")
    node: Node = Field(exclude=True, description="The offending statement node")
    requirement: LinebreakType = Field(description="Requirement that failed")
    message: str = Field(description="Message of the failed requirement")
    line: int = Field(ge=1, description="Start line of the statement (1-indexed)")
    column: int = Field(ge=1, description="Start column of the statement (1-indexed)")
    end_line: int = Field(ge=1, description="End line of the statement (1-indexed)")
    end_column: int = Field(ge=1, description="End column of the statement (1-indexed)")
    fix: Edit | None = Field(default=None, description="Proposed fix, if one is safe")

    @property
    def fixable(self) -> bool:
        return self.fix is not None

    def __str__(self) -> str:
        """Format as human-readable string."""
        location = f"{self.path}:" if self.path else ""
        return f"{location}{self.line}:{self.column} {self.message}"


class FileReport(BaseModel):
    """Violations found in one file."""

    path: Path = Field(description="Path to the source file")
    violations: list[Violation] = Field(default_factory=list, description="Violations found")
    fixed: int = Field(default=0, ge=0, description="Number of fixes applied to the file")

    @property
    def fixable_count(self) -> int:
        return sum(1 for v in self.violations if v.fixable)


class LintResult(BaseModel):
    """Result of linting one or more files."""

    reports: list[FileReport] = Field(default_factory=list, description="Per file reports")
    failed_files: dict[Path, str] = Field(
        default_factory=dict, description="Files that failed processing"
    )

    @property
    def total_files(self) -> int:
        """Total number of files processed."""
        return len(self.reports) + len(self.failed_files)

    @property
    def success_count(self) -> int:
        return len(self.reports)

    @property
    def failure_count(self) -> int:
        return len(self.failed_files)

    @property
    def violations(self) -> list[Violation]:
        return [v for report in self.reports for v in report.violations]

    @property
    def violation_count(self) -> int:
        return sum(len(report.violations) for report in self.reports)

    @property
    def fixed_count(self) -> int:
        return sum(report.fixed for report in self.reports)
