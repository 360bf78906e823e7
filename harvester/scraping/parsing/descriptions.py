"""
Normalization of loosely-typed product description entries.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Union

FREE_RETURN_MARKER = "gün içinde ücretsiz iade. Detaylı bilgi"
BULLET_PREFIX = "- "


@dataclass(frozen=True)
class TextEntry:
    text: str


@dataclass(frozen=True)
class UnknownEntry:
    raw: Any


DescriptionEntry = Union[TextEntry, UnknownEntry]


def parse_description_entries(raw_entries: Any) -> list[DescriptionEntry]:
    """
    Classify raw entries once: objects carrying a string `text` are
    text-bearing, everything else is of unknown shape.
    """

    if not isinstance(raw_entries, list):
        return []

    entries: list[DescriptionEntry] = []
    for raw in raw_entries:
        if isinstance(raw, dict) and isinstance(raw.get("text"), str):
            entries.append(TextEntry(text=raw["text"]))
        else:
            entries.append(UnknownEntry(raw=raw))
    return entries


def _stringify(entries: Sequence[DescriptionEntry]) -> str:
    raw = [entry.text if isinstance(entry, TextEntry) else entry.raw for entry in entries]
    return json.dumps(raw, ensure_ascii=False, default=str)


def process_descriptions(entries: Sequence[DescriptionEntry]) -> str:
    """
    Render description entries as a newline-joined bullet list.

    Everything up to and including the free-return boilerplate entry is
    dropped; without the marker every entry is kept.
    """

    if not entries:
        return ""

    if not isinstance(entries[0], TextEntry):
        return _stringify(entries)

    relevant: Sequence[DescriptionEntry] = entries
    for index, entry in enumerate(entries):
        if isinstance(entry, TextEntry) and FREE_RETURN_MARKER in entry.text:
            relevant = entries[index + 1 :]
            break

    bullets = [
        f"{BULLET_PREFIX}{entry.text}"
        for entry in relevant
        if isinstance(entry, TextEntry) and entry.text.strip()
    ]
    return "\n".join(bullets)
