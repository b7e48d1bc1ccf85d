"""Line break requirements and the fixes that satisfy them."""

import logging
from dataclasses import dataclass
from typing import Callable

from tree_sitter import Node

from padline.models.lint import Edit
from padline.pipeline.linebreaks import get_actual_last_token
from padline.pipeline.rules.models import LinebreakType
from padline.pipeline.tokens import TokenStore

logger = logging.getLogger(__name__)

LINEBREAK = "\n"

FixFunction = Callable[[Node, Node, TokenStore], Edit | None]


@dataclass(frozen=True)
class Requirement:
    """What a line break type demands, how it is reported and how it is fixed."""

    type: LinebreakType
    message: str
    test: Callable[[int], bool]
    fix: FixFunction


def _no_fix(previous: Node, current: Node, tokens: TokenStore) -> Edit | None:
    return None


def _fix_never(previous: Node, current: Node, tokens: TokenStore) -> Edit | None:
    """Join the statements, unless a comment sits between them."""
    prev_token = get_actual_last_token(previous, tokens)
    first_token = tokens.first_token(current)
    if first_token is None:
        raise ValueError(f"Statement {current.type} at line {current.start_point[0] + 1} has no tokens")

    comments = tokens.comments_between(prev_token, first_token)
    if comments:
        logger.debug(
            "Not joining statements at line %d: %d comment(s) in between",
            first_token.start_line,
            len(comments),
        )
        return None

    # With a semicolon-less style semicolon this stops at the semicolon, which
    # already shares a line with the current statement.
    next_token = tokens.token_after(prev_token)
    if next_token is None:
        raise ValueError(f"No token after line {prev_token.end_line}")
    return Edit.remove(prev_token.end_byte, next_token.start_byte)


def _fix_always(previous: Node, current: Node, tokens: TokenStore) -> Edit | None:
    prev_token = get_actual_last_token(previous, tokens)
    return Edit.insert(prev_token.end_byte, LINEBREAK)


def _fix_blankline(previous: Node, current: Node, tokens: TokenStore) -> Edit | None:
    """Insert a blank line after the previous statement.

    When a comment already starts the next line only one more line break is
    needed to open a blank line.
    """
    prev_token = get_actual_last_token(previous, tokens)
    next_token = tokens.token_after(prev_token, include_comments=True)
    if next_token is None:
        raise ValueError(f"No token after line {prev_token.end_line}")
    linebreaks = LINEBREAK * 2 if prev_token.end_line == next_token.start_line else LINEBREAK
    return Edit.insert(prev_token.end_byte, linebreaks)


ANY = Requirement(
    type=LinebreakType.ANY,
    message="",
    test=lambda linebreaks: True,
    fix=_no_fix,
)

NEVER = Requirement(
    type=LinebreakType.NEVER,
    message="Unexpected linebreaks before this statement.",
    test=lambda linebreaks: linebreaks == 0,
    fix=_fix_never,
)

ALWAYS = Requirement(
    type=LinebreakType.ALWAYS,
    message="Expected one or more linebreaks before this statement.",
    test=lambda linebreaks: linebreaks >= 1,
    fix=_fix_always,
)

BLANKLINE = Requirement(
    type=LinebreakType.BLANKLINE,
    message="Expected one or more blank lines before this statement.",
    test=lambda linebreaks: linebreaks >= 2,
    fix=_fix_blankline,
)

REQUIREMENTS: dict[LinebreakType, Requirement] = {
    requirement.type: requirement for requirement in (ANY, NEVER, ALWAYS, BLANKLINE)
}


def get_requirement(linebreak_type: LinebreakType) -> Requirement:
    return REQUIREMENTS[linebreak_type]


def propose_fix(
    linebreak_type: LinebreakType, previous: Node, current: Node, tokens: TokenStore
) -> Edit | None:
    """Propose an edit making the line breaks between two statements satisfy a requirement.

    Args:
        linebreak_type: The requirement to satisfy
        previous: The earlier statement
        current: The statement following it
        tokens: Token store of the file

    Returns:
        The edit, or None when no fix is safe
    """
    return REQUIREMENTS[linebreak_type].fix(previous, current, tokens)
