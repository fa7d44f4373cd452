from collections.abc import Iterable, Iterator
from pathlib import Path

from fragment_key.core.languages import is_supported_file

_SKIPPED_DIRECTORIES = frozenset({"node_modules", ".git"})


def iter_source_files(paths: Iterable[Path]) -> Iterator[Path]:
    """Expand directories into the supported source files beneath them, in sorted order."""
    for path in paths:
        if not path.is_dir():
            yield path
            continue
        for candidate in sorted(path.rglob("*")):
            if candidate.is_file() and is_supported_file(candidate):
                if _SKIPPED_DIRECTORIES.intersection(candidate.relative_to(path).parts):
                    continue
                yield candidate
