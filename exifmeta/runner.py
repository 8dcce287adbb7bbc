"""
runner.py

ExifTool discovery and invocation.

- One process-wide ExifTool location, set once with `set_exiftool` or found on
  first use with `find_exiftool`
- Every call runs ExifTool directly with an argument list (never through a
  shell) and blocks until it exits
- A non-zero exit status raises ExifToolExecutionError with the captured output
"""
from __future__ import annotations
import logging
import os
import shutil
import subprocess
from pathlib import Path
from typing import List, Optional, Sequence

from .errors import ExifToolExecutionError, ExifToolNotFoundError, UnsupportedExtensionError
from .filetypes import SUPPORTED_EXTENSIONS, extension_of

logger = logging.getLogger(__name__)

# ----------------------- Defaults -----------------------
# -f: print "-" for missing tags, -G: group names, -u: unknown tags, -a: duplicates
READ_OPTIONS: Sequence[str] = ("-f", "-G", "-u", "-a")
ENV_VAR = "EXIFTOOL_PATH"
BACKUP_SUFFIX = "_original"
COMMON_LOCATIONS = [
    "/usr/bin/exiftool",
    "/usr/local/bin/exiftool",
    "/opt/homebrew/bin/exiftool",
    r"C:\Program Files\ExifTool\exiftool.exe",
    r"C:\Program Files (x86)\ExifTool\exiftool.exe",
]

_exiftool: Optional[Path] = None

# ----------------------- ExifTool discovery -----------------------


def which(program: str) -> Optional[str]:
    return shutil.which(program)


def find_exiftool(user_path: Optional[str] = None) -> Optional[str]:
    # Explicit path
    if user_path:
        p = Path(user_path)
        if p.exists():
            return str(p)

    env = os.environ.get(ENV_VAR)
    if env and Path(env).exists():
        return env

    common = [which("exiftool"), which("exiftool.exe")] + COMMON_LOCATIONS
    for c in common:
        if c and Path(c).exists():
            return str(Path(c))
    return None


def set_exiftool(path: Optional[str | Path]) -> None:
    """Configure the ExifTool executable used by every call in this process.

    Until this is called, the first call searches EXIFTOOL_PATH, PATH and
    COMMON_LOCATIONS (see `find_exiftool`) and keeps what it finds. A
    location that was set but does not exist is an error.
    """
    global _exiftool
    _exiftool = Path(path) if path else None


def get_exiftool() -> Path:
    global _exiftool
    if _exiftool is None:
        found = find_exiftool()
        if found:
            _exiftool = Path(found)
    if _exiftool is None or not _exiftool.exists():
        raise ExifToolNotFoundError(f"ExifTool not found: {_exiftool or 'not configured'}")
    return _exiftool


def _resolve(exiftool: Optional[str | Path]) -> Path:
    if exiftool is None:
        return get_exiftool()
    p = Path(exiftool)
    if not p.exists():
        raise ExifToolNotFoundError(f"ExifTool not found: {p}")
    return p

# ----------------------- Invocation -----------------------


def execute(args: Sequence[str], exiftool: Optional[str | Path] = None) -> str:
    """Run ExifTool with `args` and return its standard output."""
    cmd: List[str] = [str(_resolve(exiftool)), *args]
    logger.info("[execute] %s", subprocess.list2cmdline(cmd))
    proc = subprocess.run(cmd, stdout=subprocess.PIPE, stderr=subprocess.PIPE, shell=False)
    output = proc.stdout.decode("utf-8", "replace")
    if proc.returncode != 0:
        stderr = proc.stderr.decode("utf-8", "replace")
        logger.warning("[execute] exit code: %s", proc.returncode)
        logger.warning("[execute] %s", stderr or output)
        raise ExifToolExecutionError(proc.returncode, output, stderr, cmd)
    logger.debug("[execute] %s", output)
    return output


def check_extension(path: str | Path) -> str:
    ext = extension_of(path)
    if ext not in SUPPORTED_EXTENSIONS:
        raise UnsupportedExtensionError(ext)
    return ext


def read_output(path: str | Path, options: Sequence[str] = READ_OPTIONS,
                exiftool: Optional[str | Path] = None) -> str:
    """Tag dump for one file; unsupported extensions never reach ExifTool."""
    check_extension(path)
    return execute([*options, str(path)], exiftool)


def backup_path(path: str | Path) -> Path:
    p = Path(path)
    return p.with_name(p.name + BACKUP_SUFFIX)


def remove_backup(path: str | Path) -> bool:
    """Delete the `<name>_original` copy ExifTool leaves after a write."""
    bp = backup_path(path)
    if bp.exists():
        bp.unlink()
        logger.debug("removed backup %s", bp)
        return True
    return False


def exiftool_version(exiftool: Optional[str | Path] = None) -> str:
    return execute(["-ver"], exiftool).strip()
