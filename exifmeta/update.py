from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .keywords import join_keywords

CLEAR_ALL = "-all="

# Each logical field is written to every tag path its readers look at.
WRITE_TAGS: Dict[str, Tuple[str, ...]] = {
    "title": ("title", "iptc:objectname", "exif:xptitle"),
    "caption": ("caption", "iptc:caption-abstract"),
    "copyright": ("copyright", "iptc:copyrightnotice"),
    "description": ("exif:imagedescription", "description"),
    "rating": ("rating",),
    "label": ("label",),
}

KEYWORD_WRITE_TAGS: Dict[str, Tuple[str, ...]] = {
    ".jpg": ("subject", "iptc:keywords"),
    ".jpeg": ("subject", "iptc:keywords"),
    ".mp4": ("category",),
}


@dataclass(frozen=True)
class CurrentValues:
    """Resolved values an update is compared against."""
    title: str = ""
    caption: str = ""
    copyright: str = ""
    description: str = ""
    rating: Optional[int] = None
    label: str = ""
    keywords: Sequence[str] = field(default_factory=tuple)


def assign(tags: Iterable[str], value: object) -> List[str]:
    text = "" if value is None else str(value)
    return [f"-{tag}={text}" for tag in tags]


def keyword_args(extension: str, current: Sequence[str], keywords: Iterable[Optional[str]],
                 force: bool) -> List[str]:
    updated = join_keywords(keywords)
    if not force and updated == join_keywords(current):
        return []
    tags = KEYWORD_WRITE_TAGS.get(extension.lower())
    if not tags:
        return []
    return assign(tags, updated)


def plan_update(
    current: CurrentValues,
    extension: str,
    title: Optional[str] = None,
    caption: Optional[str] = None,
    copyright: Optional[str] = None,
    description: Optional[str] = None,
    rating: Optional[int] = None,
    label: Optional[str] = None,
    keywords: Optional[Iterable[Optional[str]]] = None,
    delete_other_tags: bool = False,
    force_update_fields: bool = False,
) -> List[str]:
    """ExifTool arguments for the fields that change; empty when nothing does.

    A text field given as None never equals a resolved value, so it is always
    written, empty. Rating None equals an absent rating. Keywords given as None
    are left alone. With `delete_other_tags` the writes are preceded by "-all=".
    """
    args: List[str] = []
    if keywords is not None:
        args.extend(keyword_args(extension, current.keywords, keywords, force_update_fields))

    proposed = [
        ("title", title),
        ("caption", caption),
        ("copyright", copyright),
        ("description", description),
        ("rating", rating),
        ("label", label),
    ]
    for name, value in proposed:
        if force_update_fields or value != getattr(current, name):
            args.extend(assign(WRITE_TAGS[name], value))

    if args and delete_other_tags:
        args.insert(0, CLEAR_ALL)
    return args
