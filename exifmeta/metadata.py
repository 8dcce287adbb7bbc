"""
metadata.py

`ImageMetadata` is the per-file handle: it runs ExifTool lazily on first access,
resolves the logical fields from the tag dump, and memoises them until the next
successful `update`, which discards the whole cache at once.

Not thread-safe; use one instance per thread or serialise access.
"""
from __future__ import annotations
import logging
import os
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence

from . import runner
from .filetypes import FileType, extension_of, get_file_type
from .keywords import resolve_keywords
from .resolver import resolve_rating, resolve_text
from .tags import Tag, find_tag, parse_tags
from .update import CurrentValues, plan_update

logger = logging.getLogger(__name__)


@dataclass
class _Cache:
    output: Optional[str] = None
    tags: Optional[List[Tag]] = None
    fields: Dict[str, Any] = field(default_factory=dict)

    def reset(self) -> None:
        self.output = None
        self.tags = None
        self.fields.clear()


class ImageMetadata:
    def __init__(self, path: str | Path, exiftool: Optional[str | Path] = None,
                 options: Sequence[str] = runner.READ_OPTIONS):
        self.path = Path(path)
        self.exiftool = exiftool
        self.options = tuple(options)
        self._cache = _Cache()

    def __repr__(self) -> str:
        return f"ImageMetadata({str(self.path)!r})"

    @property
    def extension(self) -> str:
        return extension_of(self.path)

    # ----------------------- Raw data -----------------------

    @property
    def exiftool_output(self) -> str:
        if self._cache.output is None:
            self._cache.output = runner.read_output(self.path, self.options, self.exiftool)
        return self._cache.output

    @property
    def all_tags(self) -> List[Tag]:
        if self._cache.tags is None:
            self._cache.tags = parse_tags(self.exiftool_output)
        return self._cache.tags

    def try_get_tag(self, container: str, name: str) -> Optional[str]:
        return find_tag(self.all_tags, container, name)

    def invalidate(self) -> None:
        self._cache.reset()

    # ----------------------- Resolved fields -----------------------

    def _field(self, name: str) -> Any:
        fields = self._cache.fields
        if name not in fields:
            tags = self.all_tags
            if name == "rating":
                fields[name] = resolve_rating(tags)
            elif name == "keywords":
                fields[name] = resolve_keywords(tags, combine=True)
            elif name == "first_keywords":
                fields[name] = resolve_keywords(tags, combine=False)
            elif name == "file_type":
                fields[name] = get_file_type(tags)
            else:
                fields[name] = resolve_text(tags, name)
        return fields[name]

    @property
    def title(self) -> str:
        """IPTC:ObjectName, then XMP:Title, then EXIF:XPTitle."""
        return self._field("title")

    @property
    def caption(self) -> str:
        """IPTC:Caption-Abstract, then XMP:Caption."""
        return self._field("caption")

    @property
    def copyright(self) -> str:
        return self._field("copyright")

    @property
    def description(self) -> str:
        """EXIF:Image Description, then XMP:Description."""
        return self._field("description")

    @property
    def rating(self) -> Optional[int]:
        """First integer among EXIF:Rating, XMP:Rating, IPTC:Urgency."""
        return self._field("rating")

    note = rating

    @property
    def label(self) -> str:
        """XMP:Label, then XMP:ColorLabel, then XMP:Urgency."""
        return self._field("label")

    @property
    def keywords(self) -> List[str]:
        """Keywords from every known keyword tag, deduplicated and sorted."""
        return list(self._field("keywords"))

    @property
    def first_keywords(self) -> List[str]:
        """Keywords of the first keyword tag that has any."""
        return list(self._field("first_keywords"))

    @property
    def file_type(self) -> FileType:
        return self._field("file_type")

    def current_values(self, with_keywords: bool = True) -> CurrentValues:
        return CurrentValues(
            title=self.title,
            caption=self.caption,
            copyright=self.copyright,
            description=self.description,
            rating=self.rating,
            label=self.label,
            keywords=tuple(self.keywords) if with_keywords else (),
        )

    def as_dict(self) -> Dict[str, Any]:
        return {
            "SourceFile": str(self.path),
            "FileType": self.file_type.value,
            "Title": self.title,
            "Caption": self.caption,
            "Copyright": self.copyright,
            "Description": self.description,
            "Rating": self.rating,
            "Label": self.label,
            "Keywords": self.keywords,
        }

    # ----------------------- Mutation -----------------------

    def update(
        self,
        title: Optional[str] = None,
        caption: Optional[str] = None,
        copyright: Optional[str] = None,
        description: Optional[str] = None,
        rating: Optional[int] = None,
        label: Optional[str] = None,
        keywords: Optional[Iterable[Optional[str]]] = None,
        delete_other_tags: bool = False,
        force_update_fields: bool = False,
    ) -> bool:
        """Write the changed fields in one ExifTool call.

        Returns False without running ExifTool when nothing differs and
        `force_update_fields` is off. On failure the cached values are kept.
        """
        runner.check_extension(self.path)
        args = plan_update(
            self.current_values(with_keywords=keywords is not None),
            self.extension,
            title=title,
            caption=caption,
            copyright=copyright,
            description=description,
            rating=rating,
            label=label,
            keywords=keywords,
            delete_other_tags=delete_other_tags,
            force_update_fields=force_update_fields,
        )
        if not args:
            logger.debug("%s: nothing to update", self.path)
            return False
        runner.execute([*args, str(self.path)], self.exiftool)
        runner.remove_backup(self.path)
        self.invalidate()
        return True

    def set_datetime(self, reference: datetime) -> None:
        """Set the file's access and modification times to `reference`.

        Creation time is never changed, on any platform; os.utime cannot set it.
        """
        ts = reference.timestamp()
        os.utime(self.path, (ts, ts))
