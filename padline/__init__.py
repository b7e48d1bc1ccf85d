"""Tree-sitter based linter for line breaks between JavaScript statements."""

__version__ = "0.1.0"
