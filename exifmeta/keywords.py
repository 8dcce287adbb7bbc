"""
keywords.py

Keyword extraction across the overlapping EXIF/IPTC/XMP keyword tags.

- Plain values are split on ; , | / \\ and trimmed
- ACDSee/Photoshop style <Categories><Category>..</Category></Categories> values
  are read as XML
- Duplicates are removed case-sensitively; sorting is ordinal (code point)
- "combine" unions every source, otherwise the first source with keywords wins
"""
from __future__ import annotations
import re
import xml.etree.ElementTree as ET
from typing import Iterable, List, Optional, Sequence, Tuple

from .errors import CategoriesXmlError
from .tags import Tag, find_tag

KEYWORD_SOURCES: Tuple[Tuple[str, str], ...] = (
    ("XMP", "Subject"),
    ("IPTC", "Keywords"),
    ("EXIF", "XP Keywords"),
    ("XMP", "Category"),
    ("XMP", "Weighted Flat Subject"),
    ("XMP", "Hierarchical Subject"),
    ("XMP", "Tags List"),
    ("XMP", "Catalog Sets"),
    ("XMP", "Last Keyword XMP"),
    ("XMP", "Last Keyword IPTC"),
    ("XMP", "TagList"),
    ("XMP", "Categories"),
)

DELIMITERS = re.compile(r"[;,|/\\]")
XML_MARKER = "</"
JOIN_SEPARATOR = ", "


def _add_unique(out: List[str], items: Iterable[str]) -> None:
    for item in items:
        s = item.strip()
        if s and s not in out:
            out.append(s)


def split_keywords(value: str) -> List[str]:
    out: List[str] = []
    _add_unique(out, DELIMITERS.split(value))
    return out


def parse_categories(value: str) -> List[str]:
    """Text of each <Category> directly under a <Categories> root."""
    try:
        root = ET.fromstring(value)
    except ET.ParseError as e:
        raise CategoriesXmlError(f"Invalid Categories XML: {e}") from e
    out: List[str] = []
    if root.tag != "Categories":
        return out
    _add_unique(out, ("".join(node.itertext()) for node in root.findall("Category")))
    return out


def extract_keywords(value: str) -> List[str]:
    if XML_MARKER in value:
        tokens = parse_categories(value)
    else:
        tokens = split_keywords(value)
    return sorted(tokens)


def resolve_keywords(tags: Sequence[Tag], combine: bool = True,
                     sources: Sequence[Tuple[str, str]] = KEYWORD_SOURCES) -> List[str]:
    combined: List[str] = []
    for container, name in sources:
        value: Optional[str] = find_tag(tags, container, name)
        if value is None:
            continue
        tokens = extract_keywords(value)
        if not tokens:
            continue
        if not combine:
            return tokens
        _add_unique(combined, tokens)
    return sorted(combined)


def normalize_keyword_list(values: Iterable[Optional[str]]) -> List[str]:
    out: List[str] = []
    _add_unique(out, (v for v in values if v))
    return sorted(out)


def join_keywords(values: Iterable[Optional[str]]) -> str:
    return JOIN_SEPARATOR.join(normalize_keyword_list(values))
