"""Output formatters for padline results."""

from padline.formatters.sarif import format_as_sarif
from padline.formatters.json import format_as_json

__all__ = ["format_as_sarif", "format_as_json"]
