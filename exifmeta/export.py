"""
export.py

Batch export of resolved metadata:
- Scan a directory for supported media files
- Resolve each file through ImageMetadata (one ExifTool call per file)
- Write NDJSON (orjson, one object per line) or a flat CSV
"""
from __future__ import annotations
import csv
import decimal
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Set, Tuple

import orjson

from .errors import ExifMetaError
from .filetypes import SUPPORTED_EXTENSIONS
from .metadata import ImageMetadata

logger = logging.getLogger(__name__)

DEFAULT_EXTS = ",".join(e.lstrip(".") for e in SUPPORTED_EXTENSIONS)
CSV_HEADERS = [
    "SourceFile", "FileType", "Title", "Caption", "Copyright",
    "Description", "Rating", "Label", "Keywords",
]
LIST_SEPARATOR = ", "

# ----------------------- Serialization -----------------------


def _default_json(o: Any) -> Any:
    if isinstance(o, decimal.Decimal):
        if o == o.to_integral_value():
            return int(o)
        return float(o)
    if isinstance(o, Path):
        return str(o)
    if isinstance(o, set):
        return sorted(o)
    if isinstance(o, datetime):
        return o.isoformat()
    return str(o)


def dump_bytes(obj: Any, pretty: bool = False) -> bytes:
    opt = orjson.OPT_NON_STR_KEYS
    if pretty:
        opt |= orjson.OPT_INDENT_2
    return orjson.dumps(obj, option=opt, default=_default_json)


def to_cell(v: Any) -> str:
    if v is None:
        return ""
    if isinstance(v, (list, tuple)):
        return LIST_SEPARATOR.join(str(x) for x in v)
    if isinstance(v, (str, int, float, bool)):
        return str(v)
    return dump_bytes(v).decode("utf-8")

# ----------------------- Scanning -----------------------


def parse_exts(csv_exts: str) -> Set[str]:
    out = set()
    for part in csv_exts.split(","):
        s = part.strip().lower()
        if not s:
            continue
        if not s.startswith("."):
            s = "." + s
        if s in SUPPORTED_EXTENSIONS:
            out.add(s)
    return out


def scan_files(root: Path, exts: Optional[Set[str]] = None) -> List[Path]:
    exts = exts if exts is not None else set(SUPPORTED_EXTENSIONS)
    files = [p.resolve() for p in root.rglob("*") if p.is_file() and p.suffix.lower() in exts]
    files.sort(key=lambda x: str(x).lower())
    return files

# ----------------------- Records -----------------------


def iter_records(paths: Iterable[Path], exiftool: Optional[str | Path] = None,
                 failures: Optional[List[Tuple[Path, str]]] = None) -> Iterable[Dict[str, Any]]:
    """Resolved view of each file; files ExifTool cannot read are skipped."""
    for p in paths:
        try:
            yield ImageMetadata(p, exiftool).as_dict()
        except ExifMetaError as e:
            logger.warning("skipping %s: %s", p, e)
            if failures is not None:
                failures.append((p, str(e)))


def export_ndjson(paths: Iterable[Path], out_path: Path, pretty: bool = False,
                  exiftool: Optional[str | Path] = None,
                  failures: Optional[List[Tuple[Path, str]]] = None) -> int:
    out_path.parent.mkdir(parents=True, exist_ok=True)
    count = 0
    with open(out_path, "wb") as f:
        for obj in iter_records(paths, exiftool, failures):
            f.write(dump_bytes(obj, pretty))
            f.write(b"\n")
            count += 1
    return count


def export_csv(paths: Iterable[Path], out_csv: Path,
               exiftool: Optional[str | Path] = None,
               failures: Optional[List[Tuple[Path, str]]] = None) -> int:
    out_csv.parent.mkdir(parents=True, exist_ok=True)
    count = 0
    with open(out_csv, "w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=CSV_HEADERS, extrasaction="ignore")
        w.writeheader()
        for obj in iter_records(paths, exiftool, failures):
            w.writerow({k: to_cell(obj.get(k)) for k in CSV_HEADERS})
            count += 1
    return count
