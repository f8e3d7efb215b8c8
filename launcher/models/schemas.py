"""Pydantic schemas to validate backend payloads.

These schemas act as contracts at the command boundary so we fail fast when
the host's search commands change shape. Rows arrive as tuples from the
index commands, so `from_row` accepts the positional layouts they use.
"""
from typing import Any, List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RawResult(BaseModel):
    """One backend search hit, in backend order."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    path: str
    score: Optional[float] = None
    icon_ref: Optional[str] = Field(default=None, alias="icon")

    @field_validator("name", "path")
    @classmethod
    def text_nonempty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("name and path cannot be empty")
        return v

    @field_validator("icon_ref")
    @classmethod
    def icon_blank_is_none(cls, v: Optional[str]) -> Optional[str]:
        return v or None

    @classmethod
    def from_row(cls, row: Any) -> "RawResult":
        """Build from `(name, path)`, `(name, path, icon)`,
        `(name, path, score, icon)` or a mapping."""
        if isinstance(row, BaseModel):
            row = row.model_dump(by_alias=True)
        if isinstance(row, dict):
            return cls.model_validate(row)
        if isinstance(row, (list, tuple)):
            if len(row) == 2:
                name, path = row
                return cls(name=name, path=path)
            if len(row) == 3:
                name, path, icon = row
                return cls(name=name, path=path, icon=icon)
            if len(row) == 4:
                name, path, score, icon = row
                return cls(name=name, path=path, score=score, icon=icon)
        raise ValueError(f"Unsupported search row shape: {row!r}")


def parse_search_rows(rows: Optional[Sequence[Any]]) -> List[RawResult]:
    """Validate a whole search response. Raises ValueError on the first bad row."""
    if rows is None:
        return []
    if isinstance(rows, (str, bytes)) or not isinstance(rows, Sequence):
        raise ValueError(f"Search response must be a sequence, got {type(rows).__name__}")
    return [RawResult.from_row(row) for row in rows]
