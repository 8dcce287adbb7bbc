"""Typed access to embedded media metadata through ExifTool.

Modules:
- runner: ExifTool discovery and invocation
- tags: parsing of the grouped tag dump
- resolver: per-field tag priority
- keywords: keyword extraction, merging and normalization
- update: planning of batched writes
- metadata: ImageMetadata, the cached per-file handle
- wrapper: stateless helpers (tags, keywords, file type, keyword writes)
- export: NDJSON/CSV export of resolved fields
"""
from __future__ import annotations

from .errors import (
    CategoriesXmlError,
    ExifMetaError,
    ExifToolExecutionError,
    ExifToolNotFoundError,
    UnrecognizedMimeError,
    UnsupportedExtensionError,
)
from .filetypes import SUPPORTED_EXTENSIONS, FileType, get_file_type
from .keywords import KEYWORD_SOURCES, resolve_keywords
from .metadata import ImageMetadata
from .runner import find_exiftool, get_exiftool, set_exiftool
from .tags import Tag, parse_tags
from .wrapper import Wrapper

__version__ = "0.1.0"

__all__ = [
    "CategoriesXmlError",
    "ExifMetaError",
    "ExifToolExecutionError",
    "ExifToolNotFoundError",
    "FileType",
    "ImageMetadata",
    "KEYWORD_SOURCES",
    "SUPPORTED_EXTENSIONS",
    "Tag",
    "UnrecognizedMimeError",
    "UnsupportedExtensionError",
    "Wrapper",
    "find_exiftool",
    "get_exiftool",
    "get_file_type",
    "parse_tags",
    "resolve_keywords",
    "set_exiftool",
]
