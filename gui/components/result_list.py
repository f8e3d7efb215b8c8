"""Result list rows."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from gui.state import ResultSet, SearchResult

# Fallback glyphs by file kind, used when no icon was fetched
KIND_GLYPHS = {
    "app": "🚀",
    "text": "📄",
    "pdf": "📕",
    "image": "🖼️",
    "video": "🎬",
    "audio": "🎵",
    "archive": "📦",
    "code": "💻",
    "folder": "📁",
}

_EXTENSION_KINDS = {
    **dict.fromkeys(("txt", "md", "rtf"), "text"),
    "pdf": "pdf",
    **dict.fromkeys(("jpg", "jpeg", "png", "gif", "bmp"), "image"),
    **dict.fromkeys(("mp4", "mov", "avi", "mkv"), "video"),
    **dict.fromkeys(("mp3", "wav", "flac", "aac"), "audio"),
    **dict.fromkeys(("zip", "rar", "7z", "tar"), "archive"),
    **dict.fromkeys(("js", "ts", "py", "java", "cpp", "c"), "code"),
}


def item_kind(item: SearchResult) -> str:
    if item.is_application:
        return "app"
    name = item.name.lower()
    if "." not in name:
        return "folder"
    return _EXTENSION_KINDS.get(name.rsplit(".", 1)[-1], "folder")


def display_name(item: SearchResult) -> str:
    if item.is_application and item.name.lower().endswith(".app"):
        return item.name[:-4]
    return item.name


@dataclass(frozen=True)
class ResultRow:
    name: str
    path: str
    kind: str
    icon_ref: Optional[str]
    is_application: bool
    selected: bool

    @property
    def glyph(self) -> str:
        return KIND_GLYPHS[self.kind]

    @property
    def badge(self) -> str:
        return "APP" if self.is_application else ""


def build_rows(results: ResultSet, selected_index: int) -> List[ResultRow]:
    return [
        ResultRow(
            name=display_name(item),
            path=item.path,
            kind=item_kind(item),
            icon_ref=item.icon_ref,
            is_application=item.is_application,
            selected=i == selected_index,
        )
        for i, item in enumerate(results)
    ]
