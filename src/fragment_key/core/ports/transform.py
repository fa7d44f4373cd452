from typing import Protocol

from fragment_key.models import TransformResult


class TransformPass(Protocol):
    name: str

    def transform(self, source: bytes, filename: str | None = None, language: str | None = None) -> TransformResult: ...
