from __future__ import annotations
import re
from typing import Dict, List, Optional, Sequence, Tuple, Union

from .tags import Tag, find_tag

Candidate = Tuple[str, str]

# Reader conventions differ per tool (digiKam, Lightroom, ExifTool defaults);
# the first tag present wins.
FIELD_CANDIDATES: Dict[str, List[Candidate]] = {
    "title": [("IPTC", "ObjectName"), ("XMP", "Title"), ("EXIF", "XPTitle")],
    "caption": [("IPTC", "Caption-Abstract"), ("XMP", "Caption")],
    "copyright": [("IPTC", "Copyright Notice")],
    "description": [("EXIF", "Image Description"), ("XMP", "Description")],
    "rating": [("EXIF", "Rating"), ("XMP", "Rating"), ("IPTC", "Urgency")],
    "label": [("XMP", "Label"), ("XMP", "ColorLabel"), ("XMP", "Urgency")],
}

TEXT_FIELDS = ("title", "caption", "copyright", "description", "label")

INTEGER = re.compile(r"\s*[+-]?[0-9]+\s*")


def parse_int(value: str) -> Optional[int]:
    if INTEGER.fullmatch(value):
        return int(value)
    return None


def first_match(tags: Sequence[Tag], candidates: Sequence[Candidate]) -> Optional[str]:
    for container, name in candidates:
        value = find_tag(tags, container, name)
        if value is not None:
            return value
    return None


def resolve_text(tags: Sequence[Tag], field: str) -> str:
    value = first_match(tags, FIELD_CANDIDATES[field])
    return value if value is not None else ""


def resolve_rating(tags: Sequence[Tag]) -> Optional[int]:
    """First candidate whose value is an integer; other values fall through."""
    for container, name in FIELD_CANDIDATES["rating"]:
        value = find_tag(tags, container, name)
        if value is None:
            continue
        n = parse_int(value)
        if n is not None:
            return n
    return None


def resolve_field(tags: Sequence[Tag], field: str) -> Union[str, Optional[int]]:
    if field == "rating":
        return resolve_rating(tags)
    if field not in FIELD_CANDIDATES:
        raise KeyError(field)
    return resolve_text(tags, field)
