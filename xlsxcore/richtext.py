"""Rich text runs and their conversion to and from spreadsheet XML."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Iterable, TypeVar, Union

_XML_SPACE = "{http://www.w3.org/XML/1998/namespace}space"

_E = TypeVar("_E", bound=Enum)


class RichTextFontFamily(IntEnum):
    """Font family classes; ``UNSPECIFIED`` means no family is written."""

    UNSPECIFIED = -1
    NOT_APPLICABLE = 0
    ROMAN = 1
    SWISS = 2
    MODERN = 3
    SCRIPT = 4
    DECORATIVE = 5


class RichTextCharset(IntEnum):
    """Font character sets; ``UNSPECIFIED`` means no charset is written."""

    UNSPECIFIED = -1
    ANSI = 0
    DEFAULT = 1
    SYMBOL = 2
    MAC = 77
    SHIFT_JIS = 128
    HANGUL = 129
    JOHAB = 130
    GB2312 = 134
    BIG5 = 136
    GREEK = 161
    TURKISH = 162
    VIETNAMESE = 163
    HEBREW = 177
    ARABIC = 178
    BALTIC = 186
    RUSSIAN = 204
    THAI = 222
    EAST_EUROPE = 238
    OEM = 255


class RichTextVertAlign(str, Enum):
    """Vertical position of a run of text."""

    SUPERSCRIPT = "superscript"
    SUBSCRIPT = "subscript"


class RichTextUnderline(str, Enum):
    """Underline styles that apply to a run of text."""

    SINGLE = "single"
    DOUBLE = "double"


@dataclass(frozen=True)
class RichTextColor:
    """The colour of a run, given as ARGB text, a theme index or both."""

    rgb: str | None = None
    theme: int | None = None
    tint: float | None = None
    indexed: int | None = None
    auto: bool | None = None

    @classmethod
    def from_argb(cls, alpha: int, red: int, green: int, blue: int) -> RichTextColor:
        """Build a colour from ARGB components, each in the range 0 to 255."""
        return cls(rgb=f"{alpha:02X}{red:02X}{green:02X}{blue:02X}")

    @classmethod
    def from_theme_color(cls, theme_color: int) -> RichTextColor:
        """Build a colour from a zero-based theme colour index."""
        return cls(theme=theme_color)


@dataclass
class RichTextFont:
    """Font settings of a run. An empty name leaves size, family and charset unset."""

    name: str = ""
    size: float = 0.0
    family: Union[RichTextFontFamily, int] = RichTextFontFamily.NOT_APPLICABLE
    charset: Union[RichTextCharset, int] = RichTextCharset.ANSI
    color: RichTextColor | None = None
    bold: bool = False
    italic: bool = False
    strike: bool = False
    vert_align: Union[RichTextVertAlign, str, None] = None
    underline: Union[RichTextUnderline, str, None] = None


@dataclass
class RichTextRun:
    """A run of text with optional font decoration."""

    text: str = ""
    font: RichTextFont | None = None


def _local(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _child(element: ET.Element, name: str) -> ET.Element | None:
    for child in element:
        if _local(child.tag) == name:
            return child
    return None


def _as_member(enum_cls: type[_E], value):
    try:
        return enum_cls(value)
    except ValueError:
        return value


def _str_value(value) -> str:
    return value.value if isinstance(value, Enum) else str(value)


def _format_float(value: float) -> str:
    text = repr(float(value))
    return text[:-2] if text.endswith(".0") else text


def _parse_bool(text: str) -> bool:
    return text.strip().lower() in ("1", "true")


def _bool_prop(element: ET.Element | None) -> bool:
    if element is None:
        return False
    value = element.get("val")
    return True if value is None else _parse_bool(value)


def _text_element(text: str) -> ET.Element:
    t = ET.Element("t")
    if text != text.strip():
        t.set(_XML_SPACE, "preserve")
    t.text = text
    return t


def _color_element(color: RichTextColor) -> ET.Element:
    element = ET.Element("color")
    if color.auto is not None:
        element.set("auto", "1" if color.auto else "0")
    if color.indexed is not None:
        element.set("indexed", str(color.indexed))
    if color.rgb is not None:
        element.set("rgb", color.rgb)
    if color.theme is not None:
        element.set("theme", str(color.theme))
    if color.tint is not None:
        element.set("tint", _format_float(color.tint))
    return element


def _color_from_element(element: ET.Element) -> RichTextColor:
    auto = element.get("auto")
    indexed = element.get("indexed")
    theme = element.get("theme")
    tint = element.get("tint")
    return RichTextColor(
        rgb=element.get("rgb"),
        theme=int(theme) if theme is not None else None,
        tint=float(tint) if tint is not None else None,
        indexed=int(indexed) if indexed is not None else None,
        auto=_parse_bool(auto) if auto is not None else None,
    )


def rich_text_to_xml(runs: Iterable[RichTextRun]) -> list[ET.Element]:
    """Convert runs to ``<r>`` elements, writing only the font settings in use."""
    elements = []
    for run in runs:
        r = ET.Element("r")
        font = run.font
        if font is not None:
            rpr = ET.SubElement(r, "rPr")
            if font.name:
                ET.SubElement(rpr, "rFont", {"val": font.name})
            if font.charset != RichTextCharset.UNSPECIFIED:
                ET.SubElement(rpr, "charset", {"val": str(int(font.charset))})
            if font.family != RichTextFontFamily.UNSPECIFIED:
                ET.SubElement(rpr, "family", {"val": str(int(font.family))})
            if font.bold:
                ET.SubElement(rpr, "b")
            if font.italic:
                ET.SubElement(rpr, "i")
            if font.strike:
                ET.SubElement(rpr, "strike")
            if font.color is not None:
                rpr.append(_color_element(font.color))
            if font.size > 0.0:
                ET.SubElement(rpr, "sz", {"val": _format_float(font.size)})
            if font.underline:
                ET.SubElement(rpr, "u", {"val": _str_value(font.underline)})
            if font.vert_align:
                ET.SubElement(rpr, "vertAlign", {"val": _str_value(font.vert_align)})
        r.append(_text_element(run.text))
        elements.append(r)
    return elements


def _font_from_rpr(rpr: ET.Element) -> RichTextFont:
    font = RichTextFont(
        family=RichTextFontFamily.UNSPECIFIED,
        charset=RichTextCharset.UNSPECIFIED,
    )
    name = _child(rpr, "rFont")
    if name is not None:
        font.name = name.get("val", "")
    size = _child(rpr, "sz")
    if size is not None and size.get("val") is not None:
        font.size = float(size.get("val"))
    family = _child(rpr, "family")
    if family is not None and family.get("val") is not None:
        font.family = _as_member(RichTextFontFamily, int(family.get("val")))
    charset = _child(rpr, "charset")
    if charset is not None and charset.get("val") is not None:
        font.charset = _as_member(RichTextCharset, int(charset.get("val")))
    color = _child(rpr, "color")
    if color is not None:
        font.color = _color_from_element(color)
    font.bold = _bool_prop(_child(rpr, "b"))
    font.italic = _bool_prop(_child(rpr, "i"))
    font.strike = _bool_prop(_child(rpr, "strike"))
    vert_align = _child(rpr, "vertAlign")
    if vert_align is not None:
        font.vert_align = _as_member(RichTextVertAlign, vert_align.get("val", ""))
    underline = _child(rpr, "u")
    if underline is not None:
        font.underline = _as_member(RichTextUnderline, underline.get("val", ""))
    return font


def xml_to_rich_text(elements: Iterable[ET.Element]) -> list[RichTextRun]:
    """Convert ``<r>`` elements back into runs."""
    runs = []
    for element in elements:
        t = _child(element, "t")
        run = RichTextRun(text="".join(t.itertext()) if t is not None else "")
        rpr = _child(element, "rPr")
        if rpr is not None:
            run.font = _font_from_rpr(rpr)
        runs.append(run)
    return runs


def rich_text_to_plain_text(runs: Iterable[RichTextRun]) -> str:
    """Join the text of all runs, dropping decoration."""
    return "".join(run.text for run in runs)