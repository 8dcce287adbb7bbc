from __future__ import annotations
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from . import runner
from .filetypes import FileType, extension_of, get_file_type
from .keywords import join_keywords, resolve_keywords
from .tags import Tag, parse_tags

# Keyword tags written by `Wrapper.set_tags`, per extension.
SET_TAGS_TARGETS: Dict[str, Tuple[str, ...]] = {
    ".jpg": ("iptc:keywords", "xmp:subject"),
    ".jpeg": ("iptc:keywords", "xmp:subject"),
    ".png": ("xmp:subject",),
    ".gif": ("xmp:subject",),
    ".webp": ("xmp:subject",),
    ".mp4": ("subject", "xmp:subject"),
}


class Wrapper:
    """Stateless ExifTool calls on arbitrary files; nothing is cached."""

    def __init__(self, exiftool: Optional[str | Path] = None):
        self.exiftool = exiftool

    def get_info(self, path: str | Path, options: Sequence[str] = runner.READ_OPTIONS) -> str:
        return runner.read_output(path, options, self.exiftool)

    def get_tags(self, path: str | Path) -> List[Tag]:
        return parse_tags(self.get_info(path))

    def get_keywords(self, path: str | Path) -> List[str]:
        return resolve_keywords(self.get_tags(path), combine=True)

    def set_tags(self, path: str | Path, keywords: Iterable[Optional[str]],
                 additional_parameters: Sequence[str] = ()) -> bool:
        """Replace the keywords of `path`; False for formats without a keyword tag.

        `additional_parameters` go first, e.g. ("-all=",) to drop every other tag.
        """
        targets = SET_TAGS_TARGETS.get(extension_of(path))
        if not targets:
            return False
        joined = join_keywords(keywords)
        args = [*additional_parameters, *(f"-{t}={joined}" for t in targets), str(path)]
        runner.execute(args, self.exiftool)
        runner.remove_backup(path)
        return True

    @staticmethod
    def get_file_type(tags: Iterable[Tag]) -> FileType:
        return get_file_type(tags)
