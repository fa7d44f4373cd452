"""Per-file key counters and the key namer."""

from dataclasses import dataclass

UNKNOWN_FILE = "unknown_file"


@dataclass
class FileState:
    filename: str
    key_counter: int = 0
    fragment_binding: str | None = None


class FileStateRegistry:
    """Owns one ``FileState`` per source file while that file is transformed."""

    def __init__(self) -> None:
        self._states: dict[str, FileState] = {}

    def get_or_create(self, handle: str | None) -> FileState:
        key = handle or UNKNOWN_FILE
        state = self._states.get(key)
        if state is None:
            state = FileState(filename=key)
            self._states[key] = state
        return state

    def discard(self, handle: str | None) -> None:
        self._states.pop(handle or UNKNOWN_FILE, None)

    def __contains__(self, handle: object) -> bool:
        return handle in self._states

    def __len__(self) -> int:
        return len(self._states)


def next_key(state: FileState, component_name: str) -> str:
    key = f"{component_name}_frag_{state.key_counter}"
    state.key_counter += 1
    return key
