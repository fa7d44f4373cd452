"""Tree-sitter grammars that can parse JSX, and how files and names map onto them."""

from pathlib import Path

# grammar name -> (aliases, file extensions)
_JSX_GRAMMARS: dict[str, tuple[frozenset[str], frozenset[str]]] = {
    "javascript": (frozenset({"javascript", "js", "jsx"}), frozenset({".js", ".jsx", ".mjs", ".cjs"})),
    "tsx": (frozenset({"tsx"}), frozenset({".tsx"})),
}

_GRAMMAR_BY_ALIAS = {alias: grammar for grammar, (aliases, _) in _JSX_GRAMMARS.items() for alias in aliases}
_GRAMMAR_BY_EXTENSION = {ext: grammar for grammar, (_, extensions) in _JSX_GRAMMARS.items() for ext in extensions}


def is_supported_file(path: Path) -> bool:
    return path.suffix.lower() in _GRAMMAR_BY_EXTENSION


def normalize_language(language: str) -> str:
    grammar = _GRAMMAR_BY_ALIAS.get(language.strip().lower())
    if grammar is None:
        raise ValueError(
            f"Unsupported language '{language}': only JSX-capable grammars are handled ({sorted(_GRAMMAR_BY_ALIAS)})"
        )
    return grammar


def detect_language_from_path(file_path: Path) -> str:
    if not is_supported_file(file_path):
        raise ValueError(
            f"Unsupported file extension: {file_path.suffix.lower() or '(none)'} "
            f"(expected one of {sorted(_GRAMMAR_BY_EXTENSION)})"
        )
    return _GRAMMAR_BY_EXTENSION[file_path.suffix.lower()]


def resolve_language(language: str | None, file_path: Path | None) -> str:
    """Pick the grammar for a source: an explicit language wins over the file extension."""
    if language:
        return normalize_language(language)
    if file_path is not None:
        return detect_language_from_path(file_path)
    raise ValueError("Language must be provided when no file path is available.")
