"""Parse stage: find JavaScript sources and build their syntax trees."""

import logging
from fnmatch import fnmatch
from pathlib import Path
from typing import Literal

from tree_sitter import Parser
from tree_sitter_language_pack import get_parser

from padline.config import get_settings
from padline.models import ParsedFile, ParseResult

logger = logging.getLogger(__name__)

LanguageName = Literal["javascript"]

# Extensions linted as JavaScript; JSX shares the grammar.
LANGUAGE_MAP: dict[str, LanguageName] = {
    ".js": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".jsx": "javascript",
}

NO_SOURCES_MESSAGE = "No JavaScript sources found"


def detect_language(file_path: Path) -> LanguageName | None:
    """Get the grammar for a file from its extension, None if it is not JavaScript."""
    return LANGUAGE_MAP.get(file_path.suffix.lower())


def _load_parser(language_name: LanguageName) -> Parser:
    try:
        return get_parser(language_name)
    except Exception as e:
        raise RuntimeError(f"No tree-sitter parser available for {language_name}: {e}") from e


def parse_source_code(
    source: bytes | str,
    language_name: LanguageName = "javascript",
    file_path: Path = Path("<string>"),
) -> ParsedFile:
    """
    Build the syntax tree of a source text.

    Trees with syntax errors are returned as well; tree-sitter recovers around
    the error and the statements it could parse are still linted.

    Args:
        source: Source text, str is encoded as UTF-8
        language_name: Grammar to parse with
        file_path: Path reported for this source

    Returns:
        ParsedFile holding the tree and the source bytes
    """
    source_bytes = source.encode("utf-8") if isinstance(source, str) else source
    tree = _load_parser(language_name).parse(source_bytes)
    if tree.root_node.has_error:
        logger.warning("Syntax errors in %s, linting the recovered tree", file_path)
    return ParsedFile(path=file_path, language=language_name, tree=tree, source=source_bytes)


def parse_file(file_path: Path) -> ParsedFile:
    """
    Read and parse one JavaScript file.

    Raises:
        ValueError: If the file is not JavaScript or cannot be read
        RuntimeError: If no parser is available
    """
    language_name = detect_language(file_path)
    if language_name is None:
        raise ValueError(f"Cannot detect language for file: {file_path}")

    try:
        source = file_path.read_bytes()
    except OSError as e:
        raise ValueError(f"Cannot read {file_path}: {e}") from e

    logger.debug("Parsing %s (%d bytes)", file_path, len(source))
    return parse_source_code(source, language_name, file_path)


def parse_ignore_file(ignore_file: Path) -> list[str]:
    """Read the glob patterns of an ignore file, skipping blank lines and ``#`` comments."""
    try:
        text = ignore_file.read_text(encoding="utf-8")
    except OSError as e:
        logger.warning("Skipping unreadable ignore file %s: %s", ignore_file, e)
        return []

    patterns = []
    for line in text.splitlines():
        line = line.strip()
        if line and not line.startswith("#"):
            patterns.append(line)
    return patterns


def find_ignore_files(root: Path, ignore_file_patterns: list[str]) -> dict[Path, list[str]]:
    """Collect the patterns of every ignore file under ``root``, keyed by the directory holding it."""
    patterns_by_dir: dict[Path, list[str]] = {}
    if not root.is_dir():
        return patterns_by_dir

    for file_pattern in ignore_file_patterns:
        for ignore_file in sorted(root.glob(file_pattern)):
            if not ignore_file.is_file():
                continue
            patterns = parse_ignore_file(ignore_file)
            if patterns:
                logger.debug("%s: %d ignore pattern(s)", ignore_file, len(patterns))
                patterns_by_dir.setdefault(ignore_file.parent, []).extend(patterns)
    return patterns_by_dir


def matches_pattern(file_path: Path, pattern: str, base_path: Path) -> bool:
    """Check a path against one gitignore-style glob, relative to ``base_path``.

    A trailing ``/`` restricts the pattern to directories (a file matches when
    one of its parent directories does), a leading ``/`` anchors it to
    ``base_path``, and any other pattern may match the relative path, the file
    name or one of the parent directory names.
    """
    try:
        relative = file_path.relative_to(base_path)
    except ValueError:
        return False
    relative_str = relative.as_posix()
    parents = relative.parts[:-1]

    if pattern.endswith("/"):
        directory_pattern = pattern.rstrip("/")
        if file_path.is_dir():
            return fnmatch(relative_str, directory_pattern) or fnmatch(file_path.name, directory_pattern)
        return any(fnmatch(part, directory_pattern) for part in parents)

    if pattern.startswith("/"):
        return fnmatch(relative_str, pattern[1:])

    names = (relative_str, file_path.name)
    variants = (pattern, pattern[3:]) if pattern.startswith("**/") else (pattern,)
    if any(fnmatch(name, variant) for name in names for variant in variants):
        return True
    return any(fnmatch(part, pattern) for part in parents)


def should_ignore_file(
    file_path: Path,
    target_path: Path,
    ignore_patterns: list[str],
    ignore_files_map: dict[Path, list[str]],
) -> bool:
    """Check a file against the command line patterns, then the ignore files above it."""
    matched = next((p for p in ignore_patterns if matches_pattern(file_path, p, target_path)), None)
    if matched is not None:
        logger.debug("Ignoring %s (pattern '%s')", file_path, matched)
        return True

    for directory in (file_path.parent, *file_path.parent.parents):
        for pattern in ignore_files_map.get(directory, ()):
            if matches_pattern(file_path, pattern, directory):
                logger.debug("Ignoring %s ('%s' from ignore file in %s)", file_path, pattern, directory)
                return True
        if directory == target_path:
            break
    return False


def collect_source_files(target_path: Path) -> list[Path]:
    """List the JavaScript files to lint under ``target_path``, in path order."""
    settings = get_settings()
    root = target_path if target_path.is_dir() else target_path.parent
    ignore_files_map = find_ignore_files(root, settings.ignore_file_patterns)

    if target_path.is_file():
        candidates = [target_path]
    elif target_path.is_dir():
        candidates = sorted({f for ext in LANGUAGE_MAP for f in target_path.rglob(f"*{ext}") if f.is_file()})
    else:
        return []

    files = [
        f for f in candidates if not should_ignore_file(f, root, settings.ignore_patterns, ignore_files_map)
    ]
    logger.info("%d source file(s) to lint, %d ignored", len(files), len(candidates) - len(files))
    return files


def parse_files(files: list[Path], result: ParseResult) -> None:
    """Parse each file into ``result``, recording failures instead of raising."""
    for file_path in files:
        try:
            result.parsed_files.append(parse_file(file_path))
        except (ValueError, RuntimeError) as e:
            logger.error("Cannot parse %s: %s", file_path, e)
            result.failed_files[file_path] = str(e)


def parse_path(target_path: Path) -> ParseResult:
    """
    Parse a JavaScript file, or every JavaScript file under a directory.

    A path without any source to lint is recorded as a failure.

    Args:
        target_path: File or directory to parse

    Returns:
        ParseResult with the parsed files and the failures
    """
    result = ParseResult()
    files = collect_source_files(target_path)
    if not files:
        logger.error("%s: %s", target_path, NO_SOURCES_MESSAGE)
        result.failed_files[target_path] = NO_SOURCES_MESSAGE
        return result

    parse_files(files, result)
    logger.info("Parsed %d file(s), %d failure(s)", result.success_count, result.failure_count)
    return result
