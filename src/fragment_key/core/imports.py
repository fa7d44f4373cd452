import logging

from tree_sitter import Node

from fragment_key.core.builders import import_declaration
from fragment_key.core.edits import EditBuffer
from fragment_key.core.parse import first_named_child, node_text
from fragment_key.core.traversal import iter_preorder

logger = logging.getLogger(__name__)


def _is_type_only(node: Node) -> bool:
    return any(child.type == "type" for child in node.children)


def _module_specifier(statement: Node) -> str | None:
    source = statement.child_by_field_name("source")
    if source is None:
        return None
    return node_text(source)[1:-1]


def _is_directive(node: Node) -> bool:
    if node.type != "expression_statement":
        return False
    expression = first_named_child(node)
    return expression is not None and expression.type == "string"


def find_named_import(root: Node, imported: str, source: str) -> str | None:
    """Return the local name bound to ``imported`` from ``source`` by an existing import."""
    for statement in root.named_children:
        if statement.type != "import_statement" or _is_type_only(statement):
            continue
        if _module_specifier(statement) != source:
            continue
        for node in iter_preorder(statement):
            if node.type != "import_specifier" or _is_type_only(node):
                continue
            name = node.child_by_field_name("name")
            if name is None or node_text(name) != imported:
                continue
            alias = node.child_by_field_name("alias")
            return node_text(alias if alias is not None else name)
    return None


def import_insertion_point(root: Node) -> int:
    """Byte offset at which a new import declaration is inserted.

    Before the first import if there is one; otherwise before the first statement
    following any hashbang, leading comments and directive prologue.
    """
    first_statement: Node | None = None
    in_prologue = True
    for statement in root.named_children:
        if statement.type == "import_statement":
            return statement.start_byte
        if statement.type in ("hash_bang_line", "comment"):
            continue
        if in_prologue and _is_directive(statement):
            continue
        in_prologue = False
        if first_statement is None:
            first_statement = statement
    if first_statement is not None:
        return first_statement.start_byte
    return root.end_byte


class ImportMaterializer:
    """Resolves or creates local bindings for named imports in one source file."""

    def __init__(self, root: Node, edits: EditBuffer) -> None:
        self._root = root
        self._edits = edits
        self._bindings: dict[tuple[str, str], str] = {}
        self._taken: set[str] | None = None
        self.created: list[str] = []

    def _taken_names(self) -> set[str]:
        if self._taken is None:
            self._taken = {node_text(node) for node in iter_preorder(self._root) if node.type.endswith("identifier")}
        return self._taken

    def generate_uid(self, name_hint: str) -> str:
        taken = self._taken_names()
        candidate = f"_{name_hint}"
        i = 1
        while candidate in taken:
            i += 1
            candidate = f"_{name_hint}{i}"
        taken.add(candidate)
        return candidate

    def add_named(self, imported: str, source: str, name_hint: str | None = None) -> str:
        cache_key = (imported, source)
        if cache_key in self._bindings:
            return self._bindings[cache_key]

        local = find_named_import(self._root, imported, source)
        if local is not None:
            logger.debug("Reusing existing binding %s for %s from %s", local, imported, source)
        else:
            local = self.generate_uid(name_hint or imported)
            offset = import_insertion_point(self._root)
            self._edits.insert(offset, import_declaration(imported, local, source) + "\n")
            self.created.append(local)
            logger.debug("Added import of %s from %s as %s", imported, source, local)

        self._bindings[cache_key] = local
        return local
