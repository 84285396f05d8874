"""
XML helpers shared by the session, generators and handlers.

- escape_xml_value(): encode text for element bodies and attribute values.
- parse_document(): lxml parse with well-formedness validation.
- XmlNode: typed read access to a parsed element ("read string at path,
  else None"), with ordered candidate paths so one mapper can cope with
  several historical field layouts.

Paths are "/"-separated child tag names; a final "@name" segment reads an
attribute, e.g. "port_list/@id" or "role/name".
"""

from __future__ import annotations

from typing import Iterator, Optional, Union

from lxml import etree

from .errors import MalformedDocument

Number = Union[int, float]

_TRUE_VALUES = frozenset({"1", "true", "yes"})
_FALSE_VALUES = frozenset({"0", "false", "no"})


def escape_xml_value(value: str) -> str:
    return (
        value.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&apos;")
    )


def _make_parser() -> etree.XMLParser:
    return etree.XMLParser(resolve_entities=False, no_network=True, huge_tree=True)


def parse_document(xml_text: str) -> "XmlNode":
    """Parse one framed document; MalformedDocument when it is not well-formed."""
    try:
        root = etree.fromstring(xml_text.encode("utf-8"), parser=_make_parser())
    except etree.XMLSyntaxError as e:
        raise MalformedDocument(f"Invalid XML document: {e}", cause=e) from e
    return XmlNode(root)


def parse_number(value: Optional[str]) -> Optional[Number]:
    if not value:
        return None
    text = value.strip()
    try:
        return int(text)
    except ValueError:
        pass
    try:
        number = float(text)
    except ValueError:
        return None
    if number != number:  # NaN
        return None
    return number


def parse_bool(value: Optional[str]) -> Optional[bool]:
    if value is None:
        return None
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    return None


class XmlNode:
    """Read-only view over an lxml element."""

    __slots__ = ("_element",)

    def __init__(self, element: etree._Element) -> None:
        self._element = element

    def __repr__(self) -> str:
        return f"XmlNode(<{self.tag}>)"

    @property
    def element(self) -> etree._Element:
        return self._element

    @property
    def tag(self) -> str:
        return str(self._element.tag)

    @property
    def text(self) -> Optional[str]:
        """
        Stripped text of the element. A leaf yields "" when empty; an element
        with child elements yields its own leading text or None.
        """
        own = (self._element.text or "").strip()
        if len(self._element) == 0:
            return own
        return own or None

    def attr(self, name: str) -> Optional[str]:
        return self._element.get(name)

    def child(self, tag: str) -> Optional["XmlNode"]:
        found = self._element.find(tag)
        return XmlNode(found) if found is not None else None

    def children(self, tag: Optional[str] = None) -> list["XmlNode"]:
        selector = tag if tag is not None else etree.Element
        return [XmlNode(el) for el in self._element.iterchildren(tag=selector)]

    def __iter__(self) -> Iterator["XmlNode"]:
        return iter(self.children())

    def to_string(self) -> str:
        return etree.tostring(self._element, encoding="unicode")

    # --------------------------
    # Path reads
    # --------------------------

    def _read_path(self, path: str) -> Optional[str]:
        segments = [segment for segment in path.split("/") if segment]
        current: Optional[XmlNode] = self
        for index, segment in enumerate(segments):
            if current is None:
                return None
            if segment.startswith("@"):
                if index != len(segments) - 1:
                    return None
                return current.attr(segment[1:])
            current = current.child(segment)
        return current.text if current is not None else None

    def read_string(self, *paths: str) -> Optional[str]:
        """Return the value at the first candidate path that resolves, else None."""
        for path in paths:
            value = self._read_path(path)
            if value is not None:
                return value
        return None

    def read_number(self, *paths: str) -> Optional[Number]:
        return parse_number(self.read_string(*paths))

    def read_bool(self, *paths: str) -> Optional[bool]:
        return parse_bool(self.read_string(*paths))

    def entity_nodes(self, entity_name: str) -> list["XmlNode"]:
        """
        Entity elements of a list response: direct children named entity_name,
        else those found one level down (e.g. <get_reports_response><report>
        <report>...).
        """
        direct = self.children(entity_name)
        if direct:
            return direct
        for nested in self.children():
            found = nested.children(entity_name)
            if found:
                return found
        return []


__all__ = [
    "XmlNode",
    "escape_xml_value",
    "parse_bool",
    "parse_document",
    "parse_number",
]
