import logging
from pathlib import Path

from tree_sitter import Node

from fragment_key.core.edits import EditBuffer
from fragment_key.core.imports import ImportMaterializer
from fragment_key.core.injector import inject_if_needed
from fragment_key.core.languages import resolve_language
from fragment_key.core.names import COMPONENT_FUNCTION_TYPES, resolve_component_name
from fragment_key.core.parse import parse_source
from fragment_key.core.ports.transform import TransformPass
from fragment_key.core.scanner import find_top_level_returned_nodes
from fragment_key.core.state import UNKNOWN_FILE, FileState, FileStateRegistry
from fragment_key.core.traversal import traverse
from fragment_key.models import KeyedFragment, TransformResult

logger = logging.getLogger(__name__)


class AddFragmentKeyPass:
    """Adds a unique ``key`` to every fragment a function component returns at its top level.

    Shorthand fragments (``<>...</>``) become ``<Fragment key="...">`` elements
    bound to ``Fragment`` from ``preact/jsx-runtime``. Existing ``<Fragment>``
    elements get a key attribute unless they already carry one.
    """

    name = "add-fragment-key"

    def __init__(self) -> None:
        self.registry = FileStateRegistry()

    def transform(self, source: bytes, filename: str | None = None, language: str | None = None) -> TransformResult:
        handle = filename or UNKNOWN_FILE
        resolved_language = resolve_language(language, Path(filename) if filename else None)
        tree = parse_source(source, resolved_language)
        root = tree.root_node

        edits = EditBuffer()
        imports = ImportMaterializer(root, edits)
        fragments: list[KeyedFragment] = []

        def enter_program(_node: Node) -> None:
            self.registry.get_or_create(handle)

        def enter_function(node: Node) -> None:
            state = self.registry.get_or_create(handle)
            component_name = resolve_component_name(node)
            self._process_component(node, component_name, state, edits, imports, fragments)

        visitor = {"program": enter_program}
        visitor.update(dict.fromkeys(COMPONENT_FUNCTION_TYPES, enter_function))

        try:
            traverse(root, visitor)
        finally:
            self.registry.discard(handle)

        output = edits.apply(source) if edits else source
        if fragments:
            logger.info("Keyed %d fragment(s) in %s", len(fragments), handle)
        return TransformResult(
            filename=handle,
            language=resolved_language,
            code=output.decode("utf-8"),
            changed=output != source,
            fragments=fragments,
            import_added=imports.created[0] if imports.created else None,
        )

    @staticmethod
    def _process_component(
        node: Node,
        component_name: str,
        state: FileState,
        edits: EditBuffer,
        imports: ImportMaterializer,
        fragments: list[KeyedFragment],
    ) -> None:
        for candidate in find_top_level_returned_nodes(node):
            keyed = inject_if_needed(candidate, component_name, state, edits, imports)
            if keyed is not None:
                fragments.append(keyed)


PASSES: dict[str, type[AddFragmentKeyPass]] = {
    AddFragmentKeyPass.name: AddFragmentKeyPass,
}


def get_pass(name: str) -> TransformPass:
    if name not in PASSES:
        raise ValueError(f"Unknown pass '{name}'. Available: {sorted(PASSES)}")
    return PASSES[name]()


def transform_source(code: str, filename: str | None = None, language: str | None = None) -> TransformResult:
    if language is None and filename is None:
        language = "javascript"
    return AddFragmentKeyPass().transform(code.encode("utf-8"), filename=filename, language=language)


def transform_file(path: str, language: str | None = None) -> TransformResult:
    file_path = Path(path)
    try:
        source_bytes = file_path.read_bytes()
    except FileNotFoundError:
        raise FileNotFoundError(f"File not found: {path}") from None
    return AddFragmentKeyPass().transform(source_bytes, filename=str(file_path), language=language)
