"""Workbook relationships: which worksheet file each relationship id names."""

from __future__ import annotations

import posixpath
import xml.etree.ElementTree as ET

_PACKAGE_RELS_NS = "http://schemas.openxmlformats.org/package/2006/relationships"
_REL_BASE = "http://schemas.openxmlformats.org/officeDocument/2006/relationships/"
WORKSHEET_TYPE = _REL_BASE + "worksheet"
SHARED_STRINGS_TYPE = _REL_BASE + "sharedStrings"
THEME_TYPE = _REL_BASE + "theme"
STYLES_TYPE = _REL_BASE + "styles"

_XML_HEADER = '<?xml version="1.0" encoding="UTF-8"?>\n'

_ATTR_ESCAPES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&#34;",
    "'": "&#39;",
    "\t": "&#x9;",
    "\n": "&#xA;",
    "\r": "&#xD;",
}


def _escape_attr(value: str) -> str:
    return "".join(_ATTR_ESCAPES.get(char, char) for char in value)


def _local(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


class WorkbookRels(dict):
    """Maps relationship ids such as ``"rId1"`` to worksheet targets."""

    def to_xml(self) -> str:
        """Serialise the worksheet relationships followed by the fixed
        shared strings, theme and styles relationships."""
        count = len(self)
        slots: list[tuple[str, str, str]] = [("", "", "")] * (count + 3)
        for rel_id, target in self.items():
            try:
                index = int(rel_id[3:])
            except ValueError:
                raise ValueError(f"invalid relationship id {rel_id!r}") from None
            if not 1 <= index <= len(slots):
                raise ValueError(f"relationship id {rel_id!r} is out of range")
            slots[index - 1] = (rel_id, target, WORKSHEET_TYPE)

        for offset, (target, rel_type) in enumerate(
            (
                ("sharedStrings.xml", SHARED_STRINGS_TYPE),
                ("theme/theme1.xml", THEME_TYPE),
                ("styles.xml", STYLES_TYPE),
            ),
            start=1,
        ):
            number = count + offset
            slots[number - 1] = (f"rId{number}", target, rel_type)

        body = "".join(
            f'<Relationship Id="{_escape_attr(rel_id)}" '
            f'Target="{_escape_attr(target)}" '
            f'Type="{_escape_attr(rel_type)}"></Relationship>'
            for rel_id, target, rel_type in slots
        )
        return (
            f'{_XML_HEADER}<Relationships xmlns="{_PACKAGE_RELS_NS}">'
            f"{body}</Relationships>"
        )


def read_workbook_relations(data: str | bytes) -> WorkbookRels:
    """Read a workbook relationships document.

    Only worksheet relationships whose target ends in ``.xml`` are kept; each
    maps to the target's file name with the ``.xml`` removed.
    """
    try:
        root = ET.fromstring(data.lstrip())
    except ET.ParseError as exc:
        raise ValueError(f"read_workbook_relations: {exc}") from exc
    rels = WorkbookRels()
    for element in root:
        if _local(element.tag) != "Relationship":
            continue
        target = element.get("Target", "")
        if target.endswith(".xml") and element.get("Type", "") == WORKSHEET_TYPE:
            filename = posixpath.basename(target)
            rels[element.get("Id", "")] = filename.replace(".xml", "", 1)
    return rels