"""Counting of line breaks between adjacent statements."""

from tree_sitter import Node

from padline.pipeline.tokens import Token, TokenStore, is_semicolon

# Counts at or above this value are all treated the same.
MAX_LINEBREAKS = 2


def get_actual_last_token(node: Node, tokens: TokenStore) -> Token:
    """Get the token that actually ends a statement.

    A semicolon written at the start of the next line in semicolon-less style
    is skipped, since it does not reflect where the statement ends::

        foo()
        ;[1, 2, 3].forEach(bar)

    Args:
        node: The statement node
        tokens: Token store of the file

    Returns:
        The last token of the statement, or the token before a semicolon-less
        style semicolon
    """
    token = tokens.last_token(node)
    if token is None:
        raise ValueError(f"Statement {node.type} at line {node.start_point[0] + 1} has no tokens")

    prev_token = tokens.token_before(token)
    next_token = tokens.token_after(token)
    is_semicolon_less_style = (
        prev_token is not None
        and next_token is not None
        and is_semicolon(token)
        and token.start_line != prev_token.end_line
        and token.end_line == next_token.start_line
    )
    return prev_token if is_semicolon_less_style else token  # type: ignore[return-value]


def count_linebreaks(previous: Node, current: Node, tokens: TokenStore) -> int:
    """Count line breaks between two adjacent statements, capped at 2.

    Line breaks next to comments do not add up: a comment alone on what would
    otherwise be a blank line uses that blank line, so the statements count as
    separated by a single line break.
    """
    prev_token = get_actual_last_token(previous, tokens)
    line_a = prev_token.end_line
    line_b = current.start_point[0] + 1

    if line_a == line_b:
        return 0
    if line_a + 1 == line_b:
        return 1

    while True:
        token = tokens.token_after(prev_token, include_comments=True)
        if token is None:
            raise ValueError(
                f"No token between line {prev_token.end_line} and the statement at line {line_b}"
            )
        if token.start_line - prev_token.end_line >= MAX_LINEBREAKS:
            return MAX_LINEBREAKS
        prev_token = token
        if prev_token.start_byte >= current.start_byte:
            return 1
