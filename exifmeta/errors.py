from __future__ import annotations
from typing import Optional


class ExifMetaError(Exception):
    """Base class for every error raised by exifmeta."""


class ExifToolNotFoundError(ExifMetaError):
    """ExifTool location is not configured or does not exist."""


class ExifToolExecutionError(ExifMetaError):
    """ExifTool exited with a non-zero status."""

    def __init__(self, returncode: int, output: str = "", stderr: str = "", command: Optional[list] = None):
        self.returncode = returncode
        self.output = output
        self.stderr = stderr
        self.command = command or []
        detail = (stderr or output).strip()
        msg = f"exiftool exited with code {returncode}"
        if detail:
            msg = f"{msg}: {detail}"
        super().__init__(msg)


class UnsupportedExtensionError(ExifMetaError, ValueError):
    def __init__(self, extension: str):
        self.extension = extension
        super().__init__(f"File with extension '{extension}' is not supported")


class UnrecognizedMimeError(ExifMetaError):
    """The [File] MIME Type tag is missing or maps to no known file type."""


class CategoriesXmlError(ExifMetaError, ValueError):
    """An embedded <Categories> keyword value is not well-formed XML."""
