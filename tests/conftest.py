"""Shared pytest fixtures for Codeloom tests.

Fixtures are organized by category:
- Registry fixtures: isolated provenance registries and tokens
- Document fixtures: pre-built documents for renderer tests
- Configuration fixtures: config dictionaries
"""

import logging
from collections.abc import Iterator
from typing import Any

import pytest

from codeloom.models import Document, ProvenanceToken
from codeloom.provenance import ProvenanceRegistry

# =============================================================================
# Logging Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_codeloom_logger() -> Iterator[None]:
    """Undo handlers installed by CLI invocations so records reach caplog."""
    logger = logging.getLogger("codeloom")
    yield
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


# =============================================================================
# Registry Fixtures
# =============================================================================


@pytest.fixture
def registry() -> ProvenanceRegistry:
    """Return a fresh registry so colour assignment starts from the first entry."""
    return ProvenanceRegistry()


@pytest.fixture
def token_a(registry: ProvenanceRegistry) -> ProvenanceToken:
    """Return a token for a first call site."""
    return registry.register("gen/structs.py", 10, 5)


@pytest.fixture
def token_b(registry: ProvenanceRegistry) -> ProvenanceToken:
    """Return a token for a second call site."""
    return registry.register("gen/fields.py", 22, 9)


# =============================================================================
# Document Fixtures
# =============================================================================


@pytest.fixture
def struct_fields() -> list[tuple[str, str]]:
    """Return (type, name) field pairs for the struct examples."""
    return [("uint32_t", "a"), ("char*", "b")]


@pytest.fixture
def two_source_document(
    token_a: ProvenanceToken,
    token_b: ProvenanceToken,
    struct_fields: list[tuple[str, str]],
) -> Document:
    """Return a struct Document compiled from exactly two call sites."""
    from codeloom.compiler import compile_template

    fields = Document.from_sequence(
        compile_template("$ty $name;\n", token_b, [("ty", ty), ("name", name)])
        for ty, name in struct_fields
    )
    return compile_template(
        "struct $name {\n    $fields\n};\n",
        token_a,
        [("name", "peaches"), ("fields", fields)],
    )


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture
def full_config() -> dict[str, Any]:
    """Return a configuration dictionary with every setting changed."""
    return {
        "render": {
            "max_newlines": 3,
            "max_newlines_after_open": 2,
            "max_newlines_before_close": 2,
            "trailing_newline": False,
        },
        "debug": {
            "legend_title": "Sources",
            "color_system": "truecolor",
            "boundary_style": "bold",
        },
    }
