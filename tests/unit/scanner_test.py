"""Unit tests for top-level return scanning and candidate classification."""

from collections.abc import Callable

import pytest
from tree_sitter import Node

from fragment_key.core.names import COMPONENT_FUNCTION_TYPES
from fragment_key.core.parse import node_text
from fragment_key.core.scanner import (
    CandidateKind,
    classify_candidate,
    find_top_level_returned_nodes,
    implicit_return_body,
)


def _returned(parse_js: Callable[[str], Node], find_node: Callable[..., Node], source: str) -> list[str]:
    function = find_node(parse_js(source), *COMPONENT_FUNCTION_TYPES)
    return [node_text(node) for node in find_top_level_returned_nodes(function)]


class TestFindTopLevelReturnedNodes:
    def test_single_return(self, parse_js: Callable[[str], Node], find_node: Callable[..., Node]) -> None:
        assert _returned(parse_js, find_node, "function A() { return <>x</>; }") == ["<>x</>"]

    def test_multiple_returns_in_source_order(
        self, parse_js: Callable[[str], Node], find_node: Callable[..., Node]
    ) -> None:
        source = "function A(p) { if (p) { return <>a</>; } return <div>b</div>; }"
        assert _returned(parse_js, find_node, source) == ["<>a</>", "<div>b</div>"]

    def test_parentheses_are_unwrapped(self, parse_js: Callable[[str], Node], find_node: Callable[..., Node]) -> None:
        source = "function A() {\n  return (\n    <>x</>\n  );\n}"
        assert _returned(parse_js, find_node, source) == ["<>x</>"]

    def test_bare_return_yields_nothing(self, parse_js: Callable[[str], Node], find_node: Callable[..., Node]) -> None:
        assert _returned(parse_js, find_node, "function A() { return; }") == []

    def test_nested_function_returns_are_excluded(
        self, parse_js: Callable[[str], Node], find_node: Callable[..., Node]
    ) -> None:
        source = "function Qux() { function helper() { return <>{z}</>; } return <div/>; }"
        assert _returned(parse_js, find_node, source) == ["<div/>"]

    def test_callback_returns_are_excluded(
        self, parse_js: Callable[[str], Node], find_node: Callable[..., Node]
    ) -> None:
        source = (
            "function List({ xs }) {\n"
            "  const items = xs.map((x) => { return <>{x}</>; });\n"
            "  const other = xs.filter(function (x) { return x; });\n"
            "  return <ul>{items}</ul>;\n"
            "}"
        )
        assert _returned(parse_js, find_node, source) == ["<ul>{items}</ul>"]

    def test_object_method_returns_are_excluded(
        self, parse_js: Callable[[str], Node], find_node: Callable[..., Node]
    ) -> None:
        source = "function A() { const o = { render() { return <>x</>; } }; return null; }"
        assert _returned(parse_js, find_node, source) == ["null"]

    def test_implicit_arrow_body_is_sole_candidate(
        self, parse_js: Callable[[str], Node], find_node: Callable[..., Node]
    ) -> None:
        assert _returned(parse_js, find_node, "const A = () => (<Fragment>x</Fragment>);") == [
            "<Fragment>x</Fragment>"
        ]

    def test_expression_arrow_without_jsx_yields_nothing(
        self, parse_js: Callable[[str], Node], find_node: Callable[..., Node]
    ) -> None:
        assert _returned(parse_js, find_node, "const A = (p) => p ? <>a</> : null;") == []

    def test_is_a_generator(self, parse_js: Callable[[str], Node], find_node: Callable[..., Node]) -> None:
        function = find_node(parse_js("function A() { return <>x</>; }"), *COMPONENT_FUNCTION_TYPES)
        candidates = find_top_level_returned_nodes(function)
        assert len(list(candidates)) == 1
        assert list(candidates) == []


class TestImplicitReturnBody:
    def test_block_arrow_has_no_implicit_body(
        self, parse_js: Callable[[str], Node], find_node: Callable[..., Node]
    ) -> None:
        function = find_node(parse_js("const A = () => { return <>x</>; };"), "arrow_function")
        assert implicit_return_body(function) is None

    def test_declaration_has_no_implicit_body(
        self, parse_js: Callable[[str], Node], find_node: Callable[..., Node]
    ) -> None:
        function = find_node(parse_js("function A() { return <>x</>; }"), "function_declaration")
        assert implicit_return_body(function) is None

    def test_self_closing_body(self, parse_js: Callable[[str], Node], find_node: Callable[..., Node]) -> None:
        function = find_node(parse_js("const A = () => <Fragment />;"), "arrow_function")
        body = implicit_return_body(function)
        assert body is not None
        assert body.type == "jsx_self_closing_element"


class TestClassifyCandidate:
    @pytest.mark.parametrize(
        ("expression", "expected"),
        [
            ("<>x</>", CandidateKind.SHORTHAND_FRAGMENT),
            ("<Fragment>x</Fragment>", CandidateKind.NAMED_FRAGMENT),
            ("<Fragment />", CandidateKind.NAMED_FRAGMENT),
            ("(<Fragment key=\"k\">x</Fragment>)", CandidateKind.NAMED_FRAGMENT),
            ("<React.Fragment>x</React.Fragment>", CandidateKind.OTHER_ELEMENT),
            ("<div>x</div>", CandidateKind.OTHER_ELEMENT),
            ("<Item />", CandidateKind.OTHER_ELEMENT),
            ("null", CandidateKind.NOT_ELEMENT),
            ("'text'", CandidateKind.NOT_ELEMENT),
            ("[<>a</>]", CandidateKind.NOT_ELEMENT),
            ("cond && <>a</>", CandidateKind.NOT_ELEMENT),
        ],
    )
    def test_classification(
        self,
        parse_js: Callable[[str], Node],
        find_node: Callable[..., Node],
        expression: str,
        expected: CandidateKind,
    ) -> None:
        root = parse_js(f"x = {expression};")
        value = find_node(root, "assignment_expression").child_by_field_name("right")
        assert classify_candidate(value) is expected

    def test_none_is_not_an_element(self) -> None:
        assert classify_candidate(None) is CandidateKind.NOT_ELEMENT
