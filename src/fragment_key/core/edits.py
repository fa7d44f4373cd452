from dataclasses import dataclass, field


@dataclass(frozen=True)
class Edit:
    start: int
    end: int
    replacement: bytes


@dataclass
class EditBuffer:
    """Byte-range splices against one source, applied together at the end of a pass."""

    edits: list[Edit] = field(default_factory=list)

    def replace(self, start: int, end: int, replacement: str) -> None:
        if start > end:
            raise ValueError(f"Invalid edit range {start}..{end}")
        new = Edit(start, end, replacement.encode("utf-8"))
        for existing in self.edits:
            if new.start < existing.end and existing.start < new.end:
                raise ValueError(f"Edit {start}..{end} overlaps {existing.start}..{existing.end}")
        self.edits.append(new)

    def insert(self, offset: int, text: str) -> None:
        self.replace(offset, offset, text)

    def __len__(self) -> int:
        return len(self.edits)

    def __bool__(self) -> bool:
        return bool(self.edits)

    def apply(self, source: bytes) -> bytes:
        # Sorting is stable, so insertions at the same offset keep their recording order.
        ordered = sorted(enumerate(self.edits), key=lambda item: (item[1].start, item[0]))
        parts: list[bytes] = []
        cursor = 0
        for _, edit in ordered:
            parts.append(source[cursor : edit.start])
            parts.append(edit.replacement)
            cursor = max(cursor, edit.end)
        parts.append(source[cursor:])
        return b"".join(parts)
