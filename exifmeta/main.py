"""
exifmeta command line

Read and update title, caption, copyright, description, rating, label and
keywords of media files through ExifTool.

Commands
- tags: grouped tag dump as parsed
- info: resolved fields
- keywords: combined keywords (or --first for the first keyword tag only)
- filetype: file type from the MIME Type tag
- update: write changed fields in a single ExifTool call
- touch: set file access/modification time
- export: resolved fields of a whole directory to NDJSON or CSV
"""
from __future__ import annotations
import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Tuple

from . import runner
from .errors import ExifMetaError, ExifToolNotFoundError
from .export import DEFAULT_EXTS, export_csv, export_ndjson, parse_exts, scan_files
from .metadata import ImageMetadata
from .tags import format_tags

EXIT_ERROR = 1
EXIT_NO_EXIFTOOL = 3


def iso_datetime(text: str) -> datetime:
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an ISO date/time: {text!r}") from None


def cmd_tags(args: argparse.Namespace) -> int:
    meta = ImageMetadata(args.file)
    print(format_tags(meta.all_tags))
    return 0


def cmd_info(args: argparse.Namespace) -> int:
    meta = ImageMetadata(args.file)
    print(f"Title       : {meta.title}")
    print(f"Caption     : {meta.caption}")
    print(f"Copyright   : {meta.copyright}")
    print(f"Description : {meta.description}")
    print(f"Rating      : {'' if meta.rating is None else meta.rating}")
    print(f"Label       : {meta.label}")
    print(f"Keywords    : {', '.join(meta.keywords)}")
    return 0


def cmd_keywords(args: argparse.Namespace) -> int:
    meta = ImageMetadata(args.file)
    for kw in (meta.first_keywords if args.first else meta.keywords):
        print(kw)
    return 0


def cmd_filetype(args: argparse.Namespace) -> int:
    print(ImageMetadata(args.file).file_type.value)
    return 0


def cmd_update(args: argparse.Namespace) -> int:
    meta = ImageMetadata(args.file)
    # Options left out keep their current value.
    changed = meta.update(
        title=meta.title if args.title is None else args.title,
        caption=meta.caption if args.caption is None else args.caption,
        copyright=meta.copyright if args.copyright is None else args.copyright,
        description=meta.description if args.description is None else args.description,
        rating=meta.rating if args.rating is None else args.rating,
        label=meta.label if args.label is None else args.label,
        keywords=args.keyword,
        delete_other_tags=args.delete_other_tags,
        force_update_fields=args.force,
    )
    print("Updated." if changed else "Nothing to update.", file=sys.stderr)
    return 0


def cmd_touch(args: argparse.Namespace) -> int:
    ImageMetadata(args.file).set_datetime(args.date)
    return 0


def cmd_export(args: argparse.Namespace) -> int:
    in_dir = Path(args.input)
    if not in_dir.is_dir():
        print(f"ERROR: Input directory does not exist: {in_dir}", file=sys.stderr)
        return EXIT_ERROR
    files = scan_files(in_dir, parse_exts(args.exts))
    print(f"Found {len(files):,} files under {in_dir}", file=sys.stderr)
    if not files:
        print("Nothing to do.", file=sys.stderr)
        return 0
    # Fail fast instead of skipping every file one by one.
    runner.get_exiftool()
    failures: List[Tuple[Path, str]] = []
    out_path = Path(args.out)
    if args.format == "csv":
        total = export_csv(files, out_path, failures=failures)
    else:
        total = export_ndjson(files, out_path, pretty=args.pretty, failures=failures)
    for p, err in failures:
        print(f"  FAILED: {p} :: {err}", file=sys.stderr)
    print(f"Done. {args.format.upper()}: {out_path}  |  ok={total:,}, failed={len(failures):,}", file=sys.stderr)
    return 0 if not failures else EXIT_ERROR


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="exifmeta", description="Typed access to media metadata through ExifTool.")
    ap.add_argument("--exiftool", default=None, help="Path to the exiftool executable (default: auto-detect)")
    ap.add_argument("-v", "--verbose", action="store_true", help="Log every ExifTool call")
    sub = ap.add_subparsers(dest="command", required=True)

    for name, fn, help_text in (
        ("tags", cmd_tags, "Print the parsed tag dump"),
        ("info", cmd_info, "Print resolved fields"),
        ("filetype", cmd_filetype, "Print the file type from the MIME Type tag"),
    ):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("file")
        p.set_defaults(func=fn)

    p = sub.add_parser("keywords", help="Print keywords, one per line")
    p.add_argument("file")
    p.add_argument("--first", action="store_true", help="Only the first keyword tag that has keywords")
    p.set_defaults(func=cmd_keywords)

    p = sub.add_parser("update", help="Write changed fields")
    p.add_argument("file")
    p.add_argument("--title")
    p.add_argument("--caption")
    p.add_argument("--copyright")
    p.add_argument("--description")
    p.add_argument("--rating", type=int)
    p.add_argument("--label")
    p.add_argument("--keyword", action="append", default=None, help="Keyword to set (repeatable); replaces all keywords")
    p.add_argument("--delete-other-tags", action="store_true", help="Clear every other tag first (-all=); use with --force to keep current fields")
    p.add_argument("--force", action="store_true", help="Write fields even when unchanged")
    p.set_defaults(func=cmd_update)

    p = sub.add_parser("touch", help="Set access/modification time")
    p.add_argument("file")
    p.add_argument("--date", required=True, type=iso_datetime, help="ISO date/time, e.g. 2024-05-01T12:00:00")
    p.set_defaults(func=cmd_touch)

    p = sub.add_parser("export", help="Export resolved fields of a directory")
    p.add_argument("input", help="Directory scanned recursively")
    p.add_argument("--out", required=True, help="Output file")
    p.add_argument("--format", choices=["ndjson", "csv"], default="ndjson")
    p.add_argument("--exts", default=DEFAULT_EXTS, help=f"Comma-separated extensions (default: {DEFAULT_EXTS})")
    p.add_argument("--pretty", action="store_true", help="Pretty-print NDJSON lines")
    p.set_defaults(func=cmd_export)
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")
    if args.exiftool:
        exe = args.exiftool if Path(args.exiftool).exists() else runner.which(args.exiftool)
        if not exe:
            print(f"ERROR: exiftool not found at {args.exiftool}", file=sys.stderr)
            return EXIT_NO_EXIFTOOL
        runner.set_exiftool(exe)
    try:
        return args.func(args)
    except ExifToolNotFoundError as e:
        print(f"ERROR: {e}. Install ExifTool or pass --exiftool.", file=sys.stderr)
        return EXIT_NO_EXIFTOOL
    except ExifMetaError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
