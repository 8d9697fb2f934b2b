"""Listing of non-volatile storage entries grouped by namespace."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable


class NvsType(IntEnum):
    """Type codes of stored values."""

    U8 = 0x01
    I8 = 0x11
    U16 = 0x02
    I16 = 0x12
    U32 = 0x04
    I32 = 0x14
    U64 = 0x08
    I64 = 0x18
    STR = 0x21
    BLOB = 0x42
    ANY = 0xFF


_TYPE_NAMES = {
    NvsType.U8: "UINT8",
    NvsType.I8: "INT8",
    NvsType.U16: "UINT16",
    NvsType.I16: "INT16",
    NvsType.U32: "UINT32",
    NvsType.I32: "INT32",
    NvsType.U64: "UINT64",
    NvsType.I64: "INT64",
    NvsType.STR: "STRING",
    NvsType.BLOB: "BLOB",
}


@dataclass(frozen=True)
class NvsEntry:
    """One key stored in a namespace."""

    namespace: str
    key: str
    type: int


def type_name(nvs_type: int) -> str:
    """The name of a type code, or an empty string for codes without one."""
    try:
        return _TYPE_NAMES.get(NvsType(nvs_type), "")
    except ValueError:
        return ""


def collect_namespaces(entries: Iterable[NvsEntry]) -> list[str]:
    """Namespaces in order of first appearance, duplicates ignoring case dropped."""
    names: list[str] = []
    seen: set[str] = set()
    for entry in entries:
        folded = entry.namespace.lower()
        if folded not in seen:
            seen.add(folded)
            names.append(entry.namespace)
    return names


def format_dump(entries: Iterable[NvsEntry]) -> str:
    """Each namespace in upper case followed by its keys and their types."""
    items = list(entries)
    lines: list[str] = []
    for namespace in collect_namespaces(items):
        lines.append(namespace.upper())
        lines.extend(
            f"\t key:'{entry.key}' {entry.type:02X}({type_name(entry.type)})"
            for entry in items
            if entry.namespace == namespace
        )
    return "".join(line + "\n" for line in lines)