"""Shared fixtures and helpers for tests."""

from collections.abc import Callable
from pathlib import Path

import pytest
from tree_sitter import Node, Parser
from tree_sitter_language_pack import get_parser

from fragment_key.core.traversal import iter_preorder

_REPO_ROOT = Path(__file__).parent.parent


# ---------------------------------------------------------------------------
# Auto-marker: tag every test under tests/unit as "unit"
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        if rel.parts and rel.parts[0] == "unit":
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Shared unit-test fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def javascript_parser() -> Parser:
    """Return a tree-sitter parser for JavaScript (with JSX)."""
    return get_parser("javascript")


@pytest.fixture
def tsx_parser() -> Parser:
    """Return a tree-sitter parser for TSX."""
    return get_parser("tsx")


@pytest.fixture
def parse_js(javascript_parser: Parser) -> Callable[[str], Node]:
    """Parse JavaScript source and return the root node."""

    def _parse(source: str) -> Node:
        return javascript_parser.parse(source.encode("utf-8")).root_node

    return _parse


@pytest.fixture
def find_node() -> Callable[..., Node]:
    """Return the n-th node (pre-order) whose type is in ``types``."""

    def _find(root: Node, *types: str, index: int = 0) -> Node:
        matches = [node for node in iter_preorder(root) if node.type in types]
        return matches[index]

    return _find
