import logging
from typing import cast

from tree_sitter import Node, Tree
from tree_sitter_language_pack import SupportedLanguage, get_parser

logger = logging.getLogger(__name__)


def parse_source(source_bytes: bytes, language: str) -> Tree:
    parser = get_parser(cast(SupportedLanguage, language))
    tree = parser.parse(source_bytes)
    if tree.root_node.has_error:
        logger.warning("Source parsed with errors (language: %s); malformed regions are left untouched", language)
    return tree


def node_text(node: Node) -> str:
    text = node.text
    return text.decode("utf-8") if text is not None else ""


def first_named_child(node: Node) -> Node | None:
    """Return the first named child that is not a comment."""
    for child in node.named_children:
        if child.type != "comment":
            return child
    return None


def unwrap_parentheses(node: Node | None) -> Node | None:
    while node is not None and node.type == "parenthesized_expression":
        node = first_named_child(node)
    return node
