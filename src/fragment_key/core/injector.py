"""Attach keys to top-level returned fragments."""

import logging

from tree_sitter import Node

from fragment_key.core.builders import jsx_attribute, jsx_closing_element, jsx_opening_element
from fragment_key.core.edits import EditBuffer
from fragment_key.core.imports import ImportMaterializer
from fragment_key.core.parse import first_named_child, node_text, unwrap_parentheses
from fragment_key.core.scanner import FRAGMENT_TAG, CandidateKind, classify_candidate, element_name
from fragment_key.core.state import FileState, next_key
from fragment_key.models import KeyedFragment, Position

logger = logging.getLogger(__name__)

FRAGMENT_IMPORT_SOURCE = "preact/jsx-runtime"
KEY_ATTRIBUTE = "key"


def _attributes(node: Node) -> list[Node]:
    tag = node.child_by_field_name("open_tag") if node.type == "jsx_element" else node
    if tag is None:
        return []
    return tag.children_by_field_name("attribute")


def has_key_attribute(node: Node) -> bool:
    """True if the element carries a plain ``key`` attribute; spread attributes do not count."""
    for attribute in _attributes(node):
        if attribute.type != "jsx_attribute":
            continue
        name = first_named_child(attribute)
        if name is not None and node_text(name) == KEY_ATTRIBUTE:
            return True
    return False


def _shorthand_tag_ranges(node: Node) -> tuple[tuple[int, int], tuple[int, int]] | None:
    if node.type == "jsx_element":
        open_tag = node.child_by_field_name("open_tag")
        close_tag = node.child_by_field_name("close_tag")
        if open_tag is None or close_tag is None:
            return None
        return (open_tag.start_byte, open_tag.end_byte), (close_tag.start_byte, close_tag.end_byte)
    # jsx_fragment from older grammars: "<" ">" children... "<" "/" ">"
    tokens = node.children
    if len(tokens) < 5:
        return None
    return (tokens[0].start_byte, tokens[1].end_byte), (tokens[-3].start_byte, tokens[-1].end_byte)


def _fragment_binding(state: FileState, imports: ImportMaterializer) -> str:
    if state.fragment_binding is None:
        state.fragment_binding = imports.add_named(FRAGMENT_TAG, FRAGMENT_IMPORT_SOURCE, name_hint=FRAGMENT_TAG)
    return state.fragment_binding


def _record(node: Node, component_name: str, key: str, kind: CandidateKind) -> KeyedFragment:
    logger.debug("Keyed %s fragment in %s as %s", kind.value, component_name, key)
    return KeyedFragment(
        component=component_name,
        key=key,
        kind="shorthand" if kind is CandidateKind.SHORTHAND_FRAGMENT else "named",
        start_point=Position(row=node.start_point[0], column=node.start_point[1]),
    )


def _key_shorthand(
    node: Node, component_name: str, state: FileState, edits: EditBuffer, imports: ImportMaterializer
) -> KeyedFragment | None:
    ranges = _shorthand_tag_ranges(node)
    if ranges is None:
        return None
    (open_start, open_end), (close_start, close_end) = ranges

    binding = _fragment_binding(state, imports)
    key = next_key(state, component_name)
    edits.replace(open_start, open_end, jsx_opening_element(binding, [jsx_attribute(KEY_ATTRIBUTE, key)]))
    edits.replace(close_start, close_end, jsx_closing_element(binding))
    return _record(node, component_name, key, CandidateKind.SHORTHAND_FRAGMENT)


def _key_named(node: Node, component_name: str, state: FileState, edits: EditBuffer) -> KeyedFragment | None:
    if has_key_attribute(node):
        return None
    name = element_name(node)
    if name is None:
        return None

    attributes = _attributes(node)
    insert_at = attributes[-1].end_byte if attributes else name.end_byte
    key = next_key(state, component_name)
    attribute = " " + jsx_attribute(KEY_ATTRIBUTE, key)

    if node.type == "jsx_self_closing_element":
        edits.replace(insert_at, node.end_byte, attribute + ">" + jsx_closing_element(FRAGMENT_TAG))
    else:
        edits.insert(insert_at, attribute)
    return _record(node, component_name, key, CandidateKind.NAMED_FRAGMENT)


def inject_if_needed(
    candidate: Node | None,
    component_name: str,
    state: FileState,
    edits: EditBuffer,
    imports: ImportMaterializer,
) -> KeyedFragment | None:
    """Key ``candidate`` if it is an unkeyed fragment; return what was keyed, if anything."""
    node = unwrap_parentheses(candidate)
    if node is None:
        return None
    kind = classify_candidate(node)
    if kind is CandidateKind.SHORTHAND_FRAGMENT:
        return _key_shorthand(node, component_name, state, edits, imports)
    if kind is CandidateKind.NAMED_FRAGMENT:
        return _key_named(node, component_name, state, edits)
    return None
