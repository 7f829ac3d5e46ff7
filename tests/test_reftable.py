import xml.etree.ElementTree as ET

import pytest

from xlsxcore.reftable import RefTable, make_shared_string_ref_table
from xlsxcore.richtext import (
    RichTextCharset,
    RichTextFont,
    RichTextFontFamily,
    RichTextRun,
)

NS = "{http://schemas.openxmlformats.org/spreadsheetml/2006/main}"

SHARED_STRINGS_XML = """<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
        <sst xmlns="http://schemas.openxmlformats.org/spreadsheetml/2006/main"
             count="4"
             uniqueCount="4">
          <si>
            <t>Foo</t>
          </si>
          <si>
            <t>Bar</t>
          </si>
          <si>
            <t xml:space="preserve">Baz 
</t>
          </si>
          <si>
            <t>Quuk</t>
          </si>
          <si>
            <r>
              <rPr>
                <sz val="11.5"/>
                <rFont val="Font1"/>
              </rPr>
              <t>Text1</t>
            </r>
            <r>
              <rPr>
                <sz val="12.5"/>
                <rFont val="Font2"/>
              </rPr>
              <t>Text2</t>
            </r>
          </si>
		  </sst>"""


def _bold_runs():
    return [
        RichTextRun(
            "Text1",
            RichTextFont(
                family=RichTextFontFamily.UNSPECIFIED,
                charset=RichTextCharset.UNSPECIFIED,
                bold=True,
            ),
        ),
        RichTextRun("Text2"),
    ]


def test_add_string():
    table = RefTable()
    assert table.add_string("Foo") == 0
    assert table.resolve_shared_string(0) == ("Foo", None)


def test_create_new_table():
    table = RefTable()
    table.add_string("Foo")
    table.add_string("Bar")
    assert table.resolve_shared_string(0) == ("Foo", None)
    assert table.resolve_shared_string(1) == ("Bar", None)


def test_make_shared_string_ref_table():
    table = make_shared_string_ref_table(SHARED_STRINGS_XML)
    assert len(table) == 5
    assert table.resolve_shared_string(0) == ("Foo", None)
    assert table.resolve_shared_string(1) == ("Bar", None)
    assert table.resolve_shared_string(2) == ("Baz \n", None)
    assert table.resolve_shared_string(3) == ("Quuk", None)
    plain, rich = table.resolve_shared_string(4)
    assert plain == ""
    assert len(rich) == 2
    assert rich[0].font.size == 11.5
    assert rich[0].font.name == "Font1"
    assert rich[1].font.size == 12.5
    assert rich[1].font.name == "Font2"


def test_make_shared_string_ref_table_from_bytes():
    table = make_shared_string_ref_table(SHARED_STRINGS_XML.encode("utf-8"))
    assert table.resolve_shared_string(0) == ("Foo", None)


def test_make_shared_string_ref_table_wrong_root():
    with pytest.raises(ValueError):
        make_shared_string_ref_table("<worksheet/>")


def test_resolve_shared_string():
    table = make_shared_string_ref_table(SHARED_STRINGS_XML)
    assert table.resolve_shared_string(0) == ("Foo", None)


def test_resolve_out_of_range():
    with pytest.raises(IndexError):
        RefTable().resolve_shared_string(0)


def test_to_sst_xml_structure():
    table = RefTable()
    table.add_string("Foo")
    table.add_string("Bar")
    table.add_rich_text(_bold_runs())
    root = ET.fromstring(table.to_sst_xml())
    assert root.get("count") == "3"
    assert root.get("uniqueCount") == "3"
    sis = root.findall(f"{NS}si")
    assert len(sis) == 3
    assert sis[0].find(f"{NS}t").text == "Foo"
    assert sis[0].findall(f"{NS}r") == []
    assert sis[2].find(f"{NS}t") is None
    runs = sis[2].findall(f"{NS}r")
    assert len(runs) == 2
    assert runs[0].find(f"{NS}rPr").find(f"{NS}b") is not None
    assert runs[0].find(f"{NS}t").text == "Text1"
    assert runs[1].find(f"{NS}rPr") is None
    assert runs[1].find(f"{NS}t").text == "Text2"


def test_marshal_sst():
    table = RefTable()
    table.add_string("Foo")
    table.add_rich_text(_bold_runs())
    expected = (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<sst xmlns="http://schemas.openxmlformats.org/spreadsheetml/2006/main" '
        'count="2" uniqueCount="2"><si><t>Foo</t></si><si><r><rPr><b></b></rPr>'
        "<t>Text1</t></r><r><t>Text2</t></r></si></sst>"
    )
    assert table.to_sst_xml() == expected


def test_sst_round_trip():
    table = RefTable()
    table.add_string(" padded ")
    table.add_rich_text(_bold_runs())
    again = make_shared_string_ref_table(table.to_sst_xml())
    assert len(again) == 2
    assert again.resolve_shared_string(0) == (" padded ", None)
    assert again.resolve_shared_string(1) == ("", _bold_runs())


def test_read_add_string():
    table = RefTable(is_write=False)
    assert table.add_string("Foo") == 0
    assert table.add_string("Foo") == 1
    assert table.resolve_shared_string(0) == ("Foo", None)
    assert table.resolve_shared_string(1) == ("Foo", None)


def test_write_add_string():
    table = RefTable(is_write=True)
    assert table.add_string("Foo") == 0
    assert table.add_string("Foo") == 0
    assert table.resolve_shared_string(0) == ("Foo", None)
    assert len(table) == 1


def _single_bold():
    return [
        RichTextRun(
            "Text1",
            RichTextFont(
                family=RichTextFontFamily.UNSPECIFIED,
                charset=RichTextCharset.UNSPECIFIED,
                bold=True,
            ),
        )
    ]


def test_read_add_rich_text():
    table = RefTable(is_write=False)
    assert table.add_rich_text(_single_bold()) == 0
    assert table.add_rich_text(_single_bold()) == 1
    for index in (0, 1):
        plain, rich = table.resolve_shared_string(index)
        assert plain == ""
        assert len(rich) == 1
        assert rich[0].font.bold is True
        assert rich[0].text == "Text1"


def test_write_add_rich_text():
    table = RefTable(is_write=True)
    assert table.add_rich_text(_single_bold()) == 0
    assert table.add_rich_text(_single_bold()) == 0
    plain, rich = table.resolve_shared_string(0)
    assert plain == ""
    assert len(rich) == 1
    assert rich[0].font.bold is True
    assert rich[0].text == "Text1"


def test_write_add_rich_text_same_plain_different_font():
    table = RefTable(is_write=True)
    assert table.add_rich_text(_single_bold()) == 0
    assert table.add_rich_text([RichTextRun("Text1")]) == 1
    assert len(table) == 2