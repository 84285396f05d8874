"""
gmp_lib/framing.py

Streaming document framer.

GMP has no length prefix or delimiter: every response is one self-contained
XML document and the root element's closing tag is the only boundary. The
framer takes the accumulated receive buffer and splits off the first
complete document, leaving everything after it untouched.

Responsibilities:
- Skip leading whitespace, XML declarations / processing instructions and
  comments in front of the root element.
- Find the end of the opening tag, honoring quoted attribute values.
- Locate the document end (self-closing root, or the first literal
  "</root>" after the opening tag).

Non-responsibilities:
- Well-formedness validation of the document interior (the parser does it).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

_ROOT_TAG_RE = re.compile(r"^<([A-Za-z_][A-Za-z0-9_:\-.]*)\b")
_SELF_CLOSING_RE = re.compile(r"/\s*>$")


@dataclass(frozen=True, slots=True)
class FramedDocument:
    document: Optional[str]
    remainder: str


def _skip_whitespace(text: str, cursor: int) -> int:
    while cursor < len(text) and text[cursor].isspace():
        cursor += 1
    return cursor


def _skip_decorators(text: str) -> int:
    """
    Return the index of the root element's "<", or -1 when a declaration or
    comment is still open at the end of the buffer.
    """
    cursor = _skip_whitespace(text, 0)
    while cursor < len(text):
        if text.startswith("<?", cursor):
            end = text.find("?>", cursor)
            if end == -1:
                return -1
            cursor = _skip_whitespace(text, end + 2)
            continue
        if text.startswith("<!--", cursor):
            end = text.find("-->", cursor)
            if end == -1:
                return -1
            cursor = _skip_whitespace(text, end + 3)
            continue
        break
    return cursor


def _find_tag_end(text: str, open_index: int) -> int:
    quote: Optional[str] = None
    for index in range(open_index + 1, len(text)):
        ch = text[index]
        if quote is None:
            if ch == '"' or ch == "'":
                quote = ch
            elif ch == ">":
                return index
        elif ch == quote:
            quote = None
    return -1


def extract_document(buffer: str) -> FramedDocument:
    """
    Split the first complete XML document off the front of buffer.

    Returns FramedDocument(document, remainder). document is None (and
    remainder is buffer, unchanged) whenever the buffer does not yet hold a
    whole document.
    """
    waiting = FramedDocument(document=None, remainder=buffer)
    if not buffer.strip():
        return waiting

    root_start = _skip_decorators(buffer)
    if root_start == -1 or root_start >= len(buffer) or buffer[root_start] != "<":
        return waiting

    open_end = _find_tag_end(buffer, root_start)
    if open_end == -1:
        return waiting

    open_tag = buffer[root_start : open_end + 1]
    if open_tag.startswith("</"):
        return waiting

    match = _ROOT_TAG_RE.match(open_tag)
    if match is None:
        return waiting
    root_tag = match.group(1)

    if _SELF_CLOSING_RE.search(open_tag):
        return FramedDocument(
            document=buffer[: open_end + 1].strip(),
            remainder=buffer[open_end + 1 :],
        )

    # First literal match; a nested attribute-less element with the same
    # name as the root ends the document early.
    closing_tag = f"</{root_tag}>"
    closing_index = buffer.find(closing_tag, open_end + 1)
    if closing_index == -1:
        return waiting

    doc_end = closing_index + len(closing_tag)
    return FramedDocument(document=buffer[:doc_end].strip(), remainder=buffer[doc_end:])


def root_tag_of(xml_text: str) -> Optional[str]:
    """
    Return the root element name of an XML text, skipping leading
    declarations and comments. None when no element name can be found.
    """
    root_start = _skip_decorators(xml_text)
    if root_start == -1:
        return None
    match = _ROOT_TAG_RE.match(xml_text[root_start:])
    return match.group(1) if match is not None else None


__all__ = ["FramedDocument", "extract_document", "root_tag_of"]
