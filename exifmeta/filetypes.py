from __future__ import annotations
from enum import Enum
from pathlib import Path
from typing import Dict, Iterable, Tuple

from .errors import UnrecognizedMimeError
from .tags import Tag

SUPPORTED_EXTENSIONS: Tuple[str, ...] = (
    ".jpg", ".jpeg", ".png", ".gif", ".bmp", ".webp", ".webm",
    ".mp4", ".avi", ".tif", ".tiff", ".pdf", ".mts",
)


class FileType(str, Enum):
    JPEG = "jpeg"
    PNG = "png"
    GIF = "gif"
    BMP = "bmp"
    WEBP = "webp"
    TIF = "tif"
    WEBM = "webm"
    MP4 = "mp4"
    AVI = "avi"
    PDF = "pdf"
    M2TS = "m2ts"


MIME_TYPES: Dict[str, FileType] = {
    "image/jpeg": FileType.JPEG,
    "image/png": FileType.PNG,
    "image/gif": FileType.GIF,
    "image/bmp": FileType.BMP,
    "image/webp": FileType.WEBP,
    "image/tiff": FileType.TIF,
    "video/webm": FileType.WEBM,
    "video/mp4": FileType.MP4,
    "video/avi": FileType.AVI,
    "application/pdf": FileType.PDF,
    "video/m2ts": FileType.M2TS,
}


def extension_of(path: str | Path) -> str:
    return Path(path).suffix.lower()


def is_supported(path: str | Path) -> bool:
    return extension_of(path) in SUPPORTED_EXTENSIONS


def get_file_type(tags: Iterable[Tag]) -> FileType:
    """Map the first [File] MIME Type tag to a FileType."""
    for tag in tags:
        if tag.container == "File" and tag.name == "MIME Type":
            try:
                return MIME_TYPES[tag.value]
            except KeyError:
                raise UnrecognizedMimeError(f"MIME Type not authorized: {tag.value}") from None
    raise UnrecognizedMimeError("Cannot find MIME Type")
