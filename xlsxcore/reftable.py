"""The shared string table of a workbook."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass
from typing import Iterable

from xlsxcore.richtext import (
    RichTextRun,
    rich_text_to_plain_text,
    rich_text_to_xml,
    xml_to_rich_text,
)

_MAIN_NS = "http://schemas.openxmlformats.org/spreadsheetml/2006/main"
_XML_HEADER = '<?xml version="1.0" encoding="UTF-8"?>\n'
_XML_SPACE = "{http://www.w3.org/XML/1998/namespace}space"


@dataclass
class _Entry:
    plain: str = ""
    rich: list[RichTextRun] | None = None


def _local(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


class RefTable:
    """Strings and rich texts addressed by numeric index.

    When ``is_write`` is set, adding a value that is already present returns
    the existing index instead of appending a duplicate.
    """

    def __init__(self, is_write: bool = False) -> None:
        self.is_write = is_write
        self._entries: list[_Entry] = []
        self._known_strings: dict[str, int] = {}
        self._known_rich: dict[str, list[int]] = {}

    def add_string(self, text: str) -> int:
        """Add a plain string and return its index."""
        if self.is_write and text in self._known_strings:
            return self._known_strings[text]
        self._entries.append(_Entry(plain=text))
        index = len(self._entries) - 1
        self._known_strings[text] = index
        return index

    def add_rich_text(self, runs: Iterable[RichTextRun]) -> int:
        """Add a rich text and return its index."""
        runs = list(runs)
        plain = rich_text_to_plain_text(runs)
        if self.is_write:
            for index in self._known_rich.get(plain, ()):
                if self._entries[index].rich == runs:
                    return index
        self._entries.append(_Entry(rich=runs))
        index = len(self._entries) - 1
        self._known_rich.setdefault(plain, []).append(index)
        return index

    def resolve_shared_string(self, index: int) -> tuple[str, list[RichTextRun] | None]:
        """Return ``(plain_text, rich_text)`` for an index.

        A plain entry gives ``rich_text`` as ``None``; a rich entry gives an
        empty ``plain_text``.
        """
        entry = self._entries[index]
        if entry.rich is not None:
            return "", list(entry.rich)
        return entry.plain, None

    def to_sst_xml(self) -> str:
        """Serialise the table as a shared strings document."""
        count = str(len(self._entries))
        root = ET.Element("sst", {"xmlns": _MAIN_NS, "count": count, "uniqueCount": count})
        for entry in self._entries:
            si = ET.SubElement(root, "si")
            if entry.rich is not None:
                si.extend(rich_text_to_xml(entry.rich))
            else:
                t = ET.SubElement(si, "t")
                if entry.plain != entry.plain.strip():
                    t.set(_XML_SPACE, "preserve")
                t.text = entry.plain
        body = ET.tostring(root, encoding="unicode", short_empty_elements=False)
        return _XML_HEADER + body

    def __len__(self) -> int:
        return len(self._entries)


def make_shared_string_ref_table(sst_xml: str | bytes) -> RefTable:
    """Build a reference table from the text of a shared strings document."""
    root = ET.fromstring(sst_xml.lstrip())
    if _local(root.tag) != "sst":
        raise ValueError(f"expected element <sst>, found <{_local(root.tag)}>")
    table = RefTable(is_write=False)
    for si in root:
        if _local(si.tag) != "si":
            continue
        runs = [child for child in si if _local(child.tag) == "r"]
        if runs:
            table.add_rich_text(xml_to_rich_text(runs))
            continue
        t = next((child for child in si if _local(child.tag) == "t"), None)
        table.add_string("".join(t.itertext()) if t is not None else "")
    return table