"""Application of proposed edits to source text."""

import logging
from collections.abc import Iterable

from padline.models.lint import Edit

logger = logging.getLogger(__name__)


def select_edits(edits: Iterable[Edit]) -> list[Edit]:
    """Order edits by offset, dropping each one that overlaps an edit kept before it."""
    selected: list[Edit] = []
    last_offset = 0
    for edit in sorted(edits, key=lambda e: (e.start_byte, e.end_byte)):
        if edit.start_byte < last_offset:
            logger.debug("Skipping edit overlapping a previous one at byte %d", edit.start_byte)
            continue
        selected.append(edit)
        last_offset = edit.end_byte
    return selected


def apply_edits(source: bytes, edits: Iterable[Edit]) -> tuple[bytes, int]:
    """Apply non-overlapping edits in a single pass.

    Edits are applied in offset order; an edit overlapping one already applied
    is skipped and left for a later run.

    Args:
        source: UTF-8 encoded source the edit offsets refer to
        edits: Edits to apply

    Returns:
        Tuple of (new source, number of edits applied)
    """
    selected = select_edits(edits)
    parts: list[bytes] = []
    last_offset = 0
    for edit in selected:
        parts.append(source[last_offset : edit.start_byte])
        parts.append(edit.text.encode("utf-8"))
        last_offset = edit.end_byte
    parts.append(source[last_offset:])
    return b"".join(parts), len(selected)
