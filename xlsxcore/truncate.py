"""Cutting a worksheet document down to its first rows."""

from __future__ import annotations

import xml.parsers.expat

SHEET_ENDING = b"</sheetData></worksheet>"

_WHITESPACE = b" \t\r\n"


class _Stop(Exception):
    pass


def _tag_end(data: bytes, start: int) -> int:
    """Return the offset just past the tag that begins at ``start``."""
    quote = None
    for position in range(start, len(data)):
        char = data[position : position + 1]
        if quote is not None:
            if char == quote:
                quote = None
        elif char in (b'"', b"'"):
            quote = char
        elif char == b">":
            return position + 1
    return len(data)


def truncate_sheet_xml(data: str | bytes, row_limit: int) -> bytes:
    """Return the worksheet document cut after ``row_limit`` rows.

    If the limit is reached the document is closed with
    ``</sheetData></worksheet>``; everything after the cut is dropped.
    A document with fewer rows is returned unchanged.
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    lead = len(data) - len(data.lstrip(_WHITESPACE))
    body = data[lead:]

    parser = xml.parsers.expat.ParserCreate()
    rows = 0
    cut: int | None = None

    def end_element(name: str) -> None:
        nonlocal rows, cut
        if name.rsplit(":", 1)[-1] != "row":
            return
        rows += 1
        if rows >= row_limit:
            cut = _tag_end(body, parser.CurrentByteIndex)
            raise _Stop

    parser.EndElementHandler = end_element
    try:
        parser.Parse(body, True)
    except _Stop:
        pass
    except xml.parsers.expat.ExpatError as exc:
        raise ValueError(f"truncate_sheet_xml: {exc}") from exc

    if cut is None:
        return data
    return data[: lead + cut] + SHEET_ENDING