"""Search domains.

A domain is an independently indexed search universe, or the assistant.
"""

from __future__ import annotations

from enum import Enum
from typing import Tuple


class Domain(str, Enum):
    APPLICATIONS = "apps"
    FILES = "files"
    ASSISTANT = "assistant"

    @property
    def is_indexed(self) -> bool:
        return self is not Domain.ASSISTANT

    @property
    def label(self) -> str:
        return _LABELS[self]

    @classmethod
    def indexed(cls) -> Tuple["Domain", ...]:
        return tuple(d for d in cls if d.is_indexed)


_LABELS = {
    Domain.APPLICATIONS: "Apps",
    Domain.FILES: "Files",
    Domain.ASSISTANT: "Assistant",
}
