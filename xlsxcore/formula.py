"""Formula extraction for cells, including expansion of shared formulas."""

from __future__ import annotations

from dataclasses import dataclass

from xlsxcore.coords import (
    FIXED_REF_CHAR,
    digits_only,
    get_cell_id_from_coords,
    get_coords_from_cell_id,
    letters_only,
)

_TRIM = " \t\n\r"


@dataclass
class SharedFormula:
    """The anchor cell and text of a shared formula."""

    x: int
    y: int
    formula: str


@dataclass
class CellFormula:
    """The formula element of a cell: its text, type, range and shared index."""

    content: str = ""
    type: str = ""
    ref: str = ""
    si: int = 0


def shift_cell(cell_id: str, dx: int, dy: int) -> str:
    """Shift a cell reference by ``dx``/``dy``, leaving ``$``-fixed parts alone."""
    try:
        fx, fy = get_coords_from_cell_id(cell_id)
    except ValueError:
        fx, fy = -1, -1

    fixed_col = cell_id.find(FIXED_REF_CHAR) == 0
    fixed_row = cell_id.rfind(FIXED_REF_CHAR) > 0

    if not fixed_col:
        fx += dx
    if not fixed_row:
        fy += dy

    shifted = get_cell_id_from_coords(fx, fy)
    if not fixed_col and not fixed_row:
        return shifted

    column = letters_only(shifted)
    row = digits_only(shifted)
    return (
        (FIXED_REF_CHAR if fixed_col else "")
        + column
        + (FIXED_REF_CHAR if fixed_row else "")
        + row
    )


def _expand_shared(anchor: SharedFormula, dx: int, dy: int) -> str:
    """Rewrite the cell references of a shared formula for an offset cell."""
    orig = anchor.formula
    size = len(orig)
    pieces: list[str] = []
    start = 0
    end = 0
    in_literal = False
    while end < size:
        char = orig[end]
        if char == '"':
            in_literal = not in_literal
        if not in_literal and ("A" <= char <= "Z" or char == "$"):
            pieces.append(orig[start:end])
            start = end
            end += 1
            found_number = False
            while end < size:
                inner = orig[end]
                if "0" <= inner <= "9" or inner == "$":
                    found_number = True
                elif "A" <= inner <= "Z":
                    if found_number:
                        break
                else:
                    break
                end += 1
            if found_number:
                pieces.append(shift_cell(orig[start:end], dx, dy))
                start = end
        end += 1
    if start < size:
        pieces.append(orig[start:])
    return "".join(pieces)


def formula_for_cell(
    cell_ref: str,
    formula: CellFormula | None,
    shared_formulas: dict[int, SharedFormula],
) -> str:
    """Return the formula text for a cell.

    A shared formula that defines a range is recorded in ``shared_formulas``;
    a cell that only refers to one gets the anchor's formula with its
    relative references shifted to this cell.
    """
    if formula is None:
        return ""
    if formula.type != "shared":
        return formula.content.strip(_TRIM)

    try:
        x, y = get_coords_from_cell_id(cell_ref)
    except ValueError:
        return formula.content.strip(_TRIM)

    if formula.ref:
        result = formula.content
        shared_formulas[formula.si] = SharedFormula(x, y, result)
    else:
        anchor = shared_formulas.get(formula.si, SharedFormula(0, 0, ""))
        result = _expand_shared(anchor, x - anchor.x, y - anchor.y)
    return result.strip(_TRIM)