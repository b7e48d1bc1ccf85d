"""Data models for the padding rules system."""

from dataclasses import dataclass
from enum import Enum


class LinebreakType(Enum):
    """Line break requirements a rule can impose between two statements."""

    ANY = "any"
    NEVER = "never"
    ALWAYS = "always"
    BLANKLINE = "blankline"


class StatementType(Enum):
    """Statement categories a rule can match against."""

    ANY = "*"
    BLOCK_LIKE = "block-like"
    MULTILINE_BLOCK_LIKE = "multiline-block-like"
    DIRECTIVE = "directive"
    BLOCK = "block"
    EMPTY = "empty"
    EXPRESSION = "expression"
    BREAK = "break"
    CLASS = "class"
    CONST = "const"
    CONTINUE = "continue"
    DEBUGGER = "debugger"
    DO = "do"
    EXPORT = "export"
    FOR = "for"
    FUNCTION = "function"
    IF = "if"
    IMPORT = "import"
    LET = "let"
    RETURN = "return"
    SWITCH = "switch"
    THROW = "throw"
    TRY = "try"
    VAR = "var"
    WHILE = "while"
    WITH = "with"


# Categories decided by the statement's first keyword token.
KEYWORD_STATEMENT_TYPES = frozenset(
    {
        StatementType.BREAK,
        StatementType.CLASS,
        StatementType.CONST,
        StatementType.CONTINUE,
        StatementType.DEBUGGER,
        StatementType.DO,
        StatementType.EXPORT,
        StatementType.FOR,
        StatementType.FUNCTION,
        StatementType.IF,
        StatementType.IMPORT,
        StatementType.LET,
        StatementType.RETURN,
        StatementType.SWITCH,
        StatementType.THROW,
        StatementType.TRY,
        StatementType.VAR,
        StatementType.WHILE,
        StatementType.WITH,
    }
)


def _format_matcher(types: tuple[StatementType, ...]) -> str:
    return "|".join(t.value for t in types)


@dataclass(frozen=True)
class PaddingRule:
    """One ``[requirement, prev, next]`` entry of the padding configuration.

    ``prev`` and ``next`` hold one or more statement types; a statement matches
    when it belongs to any of them.
    """

    requirement: LinebreakType
    prev: tuple[StatementType, ...]
    next: tuple[StatementType, ...]

    def __str__(self) -> str:
        """Format in the ``requirement:prev:next`` rule string syntax."""
        return f"{self.requirement.value}:{_format_matcher(self.prev)}:{_format_matcher(self.next)}"

    def to_config(self) -> list[object]:
        """Convert back to the list form used in configuration files."""

        def dump(types: tuple[StatementType, ...]) -> object:
            if len(types) == 1:
                return types[0].value
            return [t.value for t in types]

        return [self.requirement.value, dump(self.prev), dump(self.next)]
