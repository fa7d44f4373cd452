from tree_sitter import Node

from fragment_key.core.parse import node_text

FUNCTION_DECLARATION_TYPES = frozenset({"function_declaration", "generator_function_declaration"})
# "function" is the node name used by older tree-sitter-javascript grammars.
FUNCTION_EXPRESSION_TYPES = frozenset({"function_expression", "function", "generator_function"})
ARROW_FUNCTION_TYPES = frozenset({"arrow_function"})

COMPONENT_FUNCTION_TYPES = FUNCTION_DECLARATION_TYPES | FUNCTION_EXPRESSION_TYPES | ARROW_FUNCTION_TYPES

ANONYMOUS_DECLARATION = "AnonymousFunctionDeclaration"
ANONYMOUS_EXPRESSION = "AnonymousFunctionExpression"
ANONYMOUS_ARROW = "AnonymousArrowFunction"


def _is_default_export(node: Node) -> bool:
    parent = node.parent
    if parent is None or parent.type != "export_statement":
        return False
    return any(child.type == "default" for child in parent.children)


def _binding_name(node: Node) -> str | None:
    parent = node.parent
    while parent is not None and parent.type == "parenthesized_expression":
        parent = parent.parent
    if parent is None or parent.type != "variable_declarator":
        return None
    name = parent.child_by_field_name("name")
    if name is None or name.type != "identifier":
        return None
    return node_text(name)


def resolve_component_name(node: Node) -> str:
    """Return a human-readable label for a function-like node.

    Declarations use their own name; expressions and arrows use the name of the
    variable they initialize. Anything else gets a constant label for its form.
    """
    if node.type in FUNCTION_DECLARATION_TYPES:
        name = node.child_by_field_name("name")
        return node_text(name) if name is not None else ANONYMOUS_DECLARATION

    binding = _binding_name(node)
    if binding is not None:
        return binding

    if node.type in ARROW_FUNCTION_TYPES:
        return ANONYMOUS_ARROW
    # export default function () {} is a declaration without a name
    if _is_default_export(node):
        return ANONYMOUS_DECLARATION
    return ANONYMOUS_EXPRESSION
