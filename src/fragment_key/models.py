from typing import Literal

from pydantic import BaseModel


class Position(BaseModel):
    row: int
    column: int


class KeyedFragment(BaseModel):
    component: str
    key: str
    kind: Literal["shorthand", "named"]
    start_point: Position


class TransformResult(BaseModel):
    filename: str
    language: str
    code: str
    changed: bool
    fragments: list[KeyedFragment] = []
    import_added: str | None = None
