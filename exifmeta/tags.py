"""Parsing of ExifTool's grouped text dump (``exiftool -G``).

Each useful line looks like ``[Container]   Name   : Value``. Lines that do not
fit that shape are ignored, and the synthetic groups ExifTool adds on top of the
embedded metadata are dropped.
"""
from __future__ import annotations
import re
from typing import Iterable, List, NamedTuple, Optional


class Tag(NamedTuple):
    container: str
    name: str
    value: str


TAG_LINE = re.compile(
    r"\[(?P<container>.*?)\]\s+(?P<name>.*?)\s+:\s+(?P<value>.*)",
    re.MULTILINE,
)
LINE_SPLIT = re.compile(r"[\r\n]")

# Summary groups computed by ExifTool itself, not stored in the file.
IGNORED_CONTAINERS = frozenset({"ExifTool", "Composite", "RIFF"})

KEY_WIDTH = 40


def parse_tags(output: str) -> List[Tag]:
    out: List[Tag] = []
    for line in LINE_SPLIT.split(output):
        if not line.strip():
            continue
        m = TAG_LINE.search(line)
        if not m:
            continue
        container = m.group("container").strip()
        if container in IGNORED_CONTAINERS:
            continue
        out.append(Tag(container, m.group("name").strip(), m.group("value").strip()))
    return out


def find_tag(tags: Iterable[Tag], container: str, name: str) -> Optional[str]:
    """Value of the first tag matching container and name, ignoring case."""
    c = container.casefold()
    n = name.casefold()
    for tag in tags:
        if tag.container.casefold() == c and tag.name.casefold() == n:
            return tag.value
    return None


def format_tags(tags: Iterable[Tag]) -> str:
    lines = []
    for tag in tags:
        key = f"[{tag.container}] {tag.name}"
        lines.append(f"{key:<{KEY_WIDTH}} : {tag.value}")
    return "\n".join(lines)
