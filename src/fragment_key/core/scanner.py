"""Find the nodes a component returns at its top level and classify them."""

from collections.abc import Iterator
from enum import Enum

from tree_sitter import Node

from fragment_key.core.names import ARROW_FUNCTION_TYPES, COMPONENT_FUNCTION_TYPES
from fragment_key.core.parse import first_named_child, node_text, unwrap_parentheses

FRAGMENT_TAG = "Fragment"

# Any of these owns the return statements inside it.
_FUNCTION_BOUNDARY_TYPES = COMPONENT_FUNCTION_TYPES | {"method_definition"}

_JSX_TYPES = frozenset({"jsx_element", "jsx_self_closing_element", "jsx_fragment"})


class CandidateKind(Enum):
    SHORTHAND_FRAGMENT = "shorthand"
    NAMED_FRAGMENT = "named"
    OTHER_ELEMENT = "element"
    NOT_ELEMENT = "other"


def element_name(node: Node) -> Node | None:
    """Return the tag name node of an element, or None for ``<>``."""
    if node.type == "jsx_element":
        open_tag = node.child_by_field_name("open_tag")
        return open_tag.child_by_field_name("name") if open_tag is not None else None
    if node.type == "jsx_self_closing_element":
        return node.child_by_field_name("name")
    return None


def classify_candidate(node: Node | None) -> CandidateKind:
    node = unwrap_parentheses(node)
    if node is None or node.type not in _JSX_TYPES:
        return CandidateKind.NOT_ELEMENT
    if node.type == "jsx_fragment":
        return CandidateKind.SHORTHAND_FRAGMENT
    if node.type == "jsx_element" and node.child_by_field_name("open_tag") is None:
        return CandidateKind.NOT_ELEMENT

    name = element_name(node)
    if name is None:
        if node.type == "jsx_element":
            return CandidateKind.SHORTHAND_FRAGMENT
        return CandidateKind.NOT_ELEMENT
    if name.type == "identifier" and node_text(name) == FRAGMENT_TAG:
        return CandidateKind.NAMED_FRAGMENT
    return CandidateKind.OTHER_ELEMENT


def implicit_return_body(function: Node) -> Node | None:
    """Return the JSX body of an expression-bodied arrow function, if any."""
    if function.type not in ARROW_FUNCTION_TYPES:
        return None
    body = unwrap_parentheses(function.child_by_field_name("body"))
    if body is None or body.type not in _JSX_TYPES:
        return None
    return body


def find_top_level_returned_nodes(function: Node) -> Iterator[Node]:
    """Yield the returned expressions whose nearest enclosing function is ``function``.

    Returns inside nested function literals belong to those functions and are
    skipped, as is ``return;`` without an argument.
    """
    body = implicit_return_body(function)
    if body is not None:
        yield body
        return

    block = function.child_by_field_name("body")
    if block is None:
        return

    stack = [block]
    while stack:
        node = stack.pop()
        if node.type == "return_statement":
            argument = unwrap_parentheses(first_named_child(node))
            if argument is not None:
                yield argument
            continue
        stack.extend(child for child in reversed(node.named_children) if child.type not in _FUNCTION_BOUNDARY_TYPES)
