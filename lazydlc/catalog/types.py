"""Catalog record datatypes and title-id helpers."""

from __future__ import annotations

import string
from dataclasses import dataclass, field

TITLE_ID_MAX = 0xFFFFFFFFFFFFFFFF
# Low 13 bits hold the content-unit index within a title.
DLC_TITLE_ID_MASK = TITLE_ID_MAX & ~0x1FFF


@dataclass
class EntryRecord:
    """One DLC content entry inside a container archive."""

    path: str
    title_id: int
    enabled: bool = True


@dataclass
class ContainerRecord:
    """One content archive and the DLC entries it holds, in display order."""

    path: str
    entries: list[EntryRecord] = field(default_factory=list)


def masked_title_id(title_id: int) -> int:
    """Clear the content-unit bits so every DLC of one base title compares equal."""
    return title_id & DLC_TITLE_ID_MASK


def format_title_id(title_id: int) -> str:
    """Render ``title_id`` as 16 uppercase hex digits without prefix."""
    return f"{title_id:016X}"


def parse_title_id(text: str) -> int:
    """Parse a hex title id, with or without ``0x`` prefix.

    Raises ``ValueError`` for non-hex input or values outside the unsigned
    64-bit range.
    """
    raw = text.strip()
    if raw[:2].lower() == "0x":
        raw = raw[2:]
    if not raw or len(raw) > 16 or any(char not in string.hexdigits for char in raw):
        raise ValueError(f"invalid title id: {text!r}")
    return int(raw, 16)


__all__ = [
    "TITLE_ID_MAX",
    "DLC_TITLE_ID_MASK",
    "EntryRecord",
    "ContainerRecord",
    "masked_title_id",
    "format_title_id",
    "parse_title_id",
]
