"""Conversion between spreadsheet cell references and zero-based coordinates."""

from __future__ import annotations

import re

FIXED_REF_CHAR = "$"
RANGE_CHAR = ":"

_INTEGER = re.compile(r"[+-]?[0-9]+", re.ASCII)


class XLSXReaderError(Exception):
    """Raised for otherwise undefined problems while reading a workbook."""


def _parse_int(text: str) -> int:
    """Parse a plain decimal integer, rejecting whitespace and underscores."""
    if not _INTEGER.fullmatch(text):
        raise ValueError(f"invalid integer {text!r}")
    return int(text)


def col_letters_to_index(letters: str) -> int:
    """Convert column letters such as ``"AB"`` to a zero-based column index.

    Lower-case letters count the same as upper-case ones.
    """
    total = 0
    multiplier = 1
    offset = 0
    for char in reversed(letters):
        value = offset
        if "A" <= char <= "Z":
            value += ord(char) - ord("A")
        elif "a" <= char <= "z":
            value += ord(char) - ord("a")
        total += value * multiplier
        multiplier *= 26
        offset = 1
    return total


def col_index_to_letters(n: int) -> str:
    """Convert a zero-based column index to its column letters."""
    letters = []
    n += 1
    while n > 0:
        n -= 1
        letters.append(chr(ord("A") + n % 26))
        n //= 26
    return "".join(reversed(letters))


def row_index_to_string(row_ref: int) -> str:
    """Convert a zero-based row index to its one-based textual form."""
    return str(row_ref + 1)


def letters_only(text: str) -> str:
    """Keep only ASCII letters of ``text``, upper-cased."""
    return "".join(
        char if "A" <= char <= "Z" else char.upper()
        for char in text
        if "A" <= char <= "Z" or "a" <= char <= "z"
    )


def digits_only(text: str) -> str:
    """Keep only the ASCII digits of ``text``."""
    return "".join(char for char in text if "0" <= char <= "9")


def get_coords_from_cell_id(cell_id: str) -> tuple[int, int]:
    """Return the zero-based ``(x, y)`` of a cell reference such as ``"B3"``."""
    digits = digits_only(cell_id)
    if not digits:
        raise ValueError(f"get_coords_from_cell_id({cell_id!r}): no row number")
    y = int(digits) - 1
    x = col_letters_to_index(letters_only(cell_id))
    return x, y


def get_cell_id_from_coords(x: int, y: int) -> str:
    """Return the cell reference for zero-based coordinates."""
    return get_cell_id_from_coords_with_fixed(x, y, False, False)


def get_cell_id_from_coords_with_fixed(
    x: int, y: int, x_fixed: bool, y_fixed: bool
) -> str:
    """Return the cell reference, marking either part as absolute with ``$``."""
    column = col_index_to_letters(x)
    if x_fixed:
        column = FIXED_REF_CHAR + column
    row = row_index_to_string(y)
    if y_fixed:
        row = FIXED_REF_CHAR + row
    return column + row


def get_range_from_string(range_string: str) -> tuple[int, int]:
    """Split a span such as ``"1:3"`` into its lower and upper integers."""
    parts = range_string.split(RANGE_CHAR, 1)
    if len(parts) != 2 or not parts[0] or not parts[1]:
        raise ValueError(f"Invalid range {range_string!r}")
    try:
        lower = _parse_int(parts[0])
    except ValueError:
        raise ValueError(
            f"Invalid range (not integer in lower bound) {range_string}"
        ) from None
    try:
        upper = _parse_int(parts[1])
    except ValueError:
        raise ValueError(
            f"Invalid range (not integer in upper bound) {range_string}"
        ) from None
    return lower, upper


def get_max_min_from_dimension_ref(ref: str) -> tuple[int, int, int, int]:
    """Return ``(minx, miny, maxx, maxy)`` for a dimension such as ``"A1:B2"``."""
    parts = ref.split(RANGE_CHAR)
    if len(parts) < 2:
        raise ValueError(f"get_max_min_from_dimension_ref: invalid reference {ref!r}")
    try:
        min_x, min_y = get_coords_from_cell_id(parts[0])
        max_x, max_y = get_coords_from_cell_id(parts[1])
    except ValueError as exc:
        raise ValueError(f"get_max_min_from_dimension_ref: {exc}") from exc
    return min_x, min_y, max_x, max_y