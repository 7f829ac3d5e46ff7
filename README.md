# xlsxcore

Building blocks for working with XLSX (Office Open XML) spreadsheets in
pure Python. The package uses only the standard library.

## Modules

- `xlsxcore.coords`: convert between `"B3"` style references and zero-based
  `(x, y)` pairs (`get_coords_from_cell_id`, `get_cell_id_from_coords`,
  `get_cell_id_from_coords_with_fixed`). It also converts column letters and
  indices (`col_letters_to_index`, `col_index_to_letters`) and row indices
  (`row_index_to_string`). It parses spans such as `"1:3"`
  (`get_range_from_string`) and dimension references such as `"A1:B2"`
  (`get_max_min_from_dimension_ref`). `letters_only` and `digits_only` strip
  a reference down to its letters (upper-cased) or its digits. It also
  defines the `XLSXReaderError` exception.
- `xlsxcore.formula`: returns the formula text of a cell
  (`formula_for_cell`). Its input is a `CellFormula` with content, type, ref
  and shared index. A shared formula that defines a range is recorded in a
  dict of `SharedFormula` anchors. A cell that only refers to one gets the
  anchor's formula with its relative references shifted. `$`-fixed parts are
  left alone and text in string literals is not touched. `shift_cell` shifts
  a single reference.
- `xlsxcore.richtext`: provides runs of styled text (`RichTextRun`,
  `RichTextFont`, `RichTextColor`). It has the enumerations
  `RichTextFontFamily`, `RichTextCharset`, `RichTextVertAlign` and
  `RichTextUnderline`. It converts runs to and from `<r>` elements
  (`rich_text_to_xml`, `xml_to_rich_text`) and to plain text
  (`rich_text_to_plain_text`).
- `xlsxcore.reftable`: the shared string table. `RefTable` holds plain
  strings and rich texts by index. With `is_write=True` it reuses the index
  of a value that is already present. `make_shared_string_ref_table` reads
  the text of a `sharedStrings.xml` document, and `RefTable.to_sst_xml`
  writes one.
- `xlsxcore.relations`: `read_workbook_relations` reads `workbook.xml.rels`
  into a `WorkbookRels` mapping. The mapping goes from relationship id to
  worksheet name, for example `"rId1" -> "sheet1"`. `WorkbookRels.to_xml`
  writes the worksheet relationships, followed by the shared strings, theme
  and styles relationships.
- `xlsxcore.truncate`: `truncate_sheet_xml` cuts a worksheet document after
  a given number of rows and closes it with `</sheetData></worksheet>`.

## Installation

```
pip install xlsxcore
```

## Examples

```python
from xlsxcore.coords import (
    col_letters_to_index,
    col_index_to_letters,
    get_coords_from_cell_id,
    get_cell_id_from_coords,
)

col_letters_to_index("AMI")        # 1022
col_index_to_letters(26)           # "AA"
get_coords_from_cell_id("A3")      # (0, 2)
get_cell_id_from_coords(2, 2)      # "C3"
```

Shared formulas:

```python
from xlsxcore.formula import CellFormula, SharedFormula, formula_for_cell, shift_cell

shift_cell("$A1", 1, 1)            # "$A2"

anchors = {0: SharedFormula(x=0, y=1, formula="2*A1")}
formula_for_cell("B2", CellFormula(type="shared", si=0), anchors)   # "2*B1"
```

Shared strings:

```python
from xlsxcore.reftable import RefTable

table = RefTable()
index = table.add_string("Foo")
table.resolve_shared_string(index)  # ("Foo", None)
len(table)                          # 1
xml_text = table.to_sst_xml()
```

Rich text:

```python
from xlsxcore.richtext import RichTextColor, RichTextFont, RichTextRun, rich_text_to_plain_text

color = RichTextColor.from_argb(127, 128, 129, 130)   # rgb="7F808182"
runs = [RichTextRun(text="Bold", font=RichTextFont(bold=True, color=color)),
        RichTextRun(text="Plain")]
rich_text_to_plain_text(runs)       # "BoldPlain"
```

Workbook relationships:

```python
from xlsxcore.relations import WorkbookRels

rels = WorkbookRels({"rId1": "worksheets/sheet.xml"})
rels.to_xml()   # rId1 worksheet, then rId2 sharedStrings, rId3 theme, rId4 styles
```

## What it does not do

This package works on the individual parts of a workbook: references,
formulas, strings, relationships and worksheet XML text. It does not open or
save `.xlsx` archives. It has no workbook, sheet, row or cell model, and no
style tables. Reading a whole file is left to the caller: take the parts out
of the zip archive and pass their XML to the functions above.

## Running the tests

```
pip install -e ".[test]"
pytest
```