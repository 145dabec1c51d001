"""Test fixtures for Codeloom.

This package provides template files for integration and CLI testing.

Templates:
- templates/struct.tmpl: a C struct with a nested field list
- templates/guard.tmpl: a header guard repeating one placeholder
- templates/plain.tmpl: text without placeholders
"""

import re
from pathlib import Path

# Path to fixtures directory
FIXTURES_DIR = Path(__file__).parent

# Path to template files
TEMPLATES_DIR = FIXTURES_DIR / "templates"

ANSI_ESCAPE = re.compile(r"\x1b\[[0-9;]*m")


def get_template(name: str) -> Path:
    """Get path to a template fixture.

    Args:
        name: File name of the template

    Returns:
        Path to the template

    Raises:
        ValueError: If the template doesn't exist
    """
    template_path = TEMPLATES_DIR / name
    if not template_path.exists():
        raise ValueError(f"Template fixture not found: {name}")
    return template_path


def strip_ansi(text: str) -> str:
    """Remove ANSI styling from rendered debug output."""
    return ANSI_ESCAPE.sub("", text)
