import csv
import decimal
from pathlib import Path

import orjson

from exifmeta.export import (
    CSV_HEADERS,
    dump_bytes,
    export_csv,
    export_ndjson,
    parse_exts,
    scan_files,
    to_cell,
)


def make_files(root, names):
    paths = []
    for name in names:
        p = root / name
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_bytes(b"")
        paths.append(p)
    return paths


def test_parse_exts_normalizes_and_filters():
    assert parse_exts("JPG, .png, txt,,") == {".jpg", ".png"}
    assert parse_exts("") == set()


def test_scan_files_is_recursive_sorted_and_filtered(tmp_path):
    make_files(tmp_path, ["b.JPG", "sub/a.png", "notes.txt", "sub/deeper/c.mp4"])
    found = scan_files(tmp_path)
    assert [p.name for p in found] == ["b.JPG", "a.png", "c.mp4"]
    assert found == sorted(found, key=lambda x: str(x).lower())
    assert [p.name for p in scan_files(tmp_path, {".png"})] == ["a.png"]


def test_export_ndjson_skips_failing_files(fake_exiftool, tmp_path):
    good, bad = make_files(tmp_path / "in", ["good.jpg", "bad.jpg"])
    fake_exiftool.failing.add(str(bad))
    out = tmp_path / "out" / "meta.ndjson"
    failures = []
    assert export_ndjson([good, bad], out, failures=failures) == 1
    lines = [orjson.loads(line) for line in out.read_bytes().splitlines() if line.strip()]
    assert len(lines) == 1
    rec = lines[0]
    assert rec["SourceFile"] == str(good)
    assert rec["FileType"] == "jpeg"
    assert rec["Title"] == "Harbour"
    assert rec["Rating"] == 3
    assert rec["Keywords"] == ["boat", "harbour", "sea"]
    assert failures and failures[0][0] == bad


def test_export_csv(fake_exiftool, tmp_path):
    (photo,) = make_files(tmp_path, ["photo.jpg"])
    out = tmp_path / "meta.csv"
    assert export_csv([photo], out) == 1
    with open(out, newline="", encoding="utf-8") as handle:
        rows = list(csv.reader(handle))
    assert rows[0] == CSV_HEADERS
    row = dict(zip(rows[0], rows[1]))
    assert row["Caption"] == "Boats at dusk"
    assert row["Rating"] == "3"
    assert row["Keywords"] == "boat, harbour, sea"


def test_dump_bytes_and_cells():
    assert orjson.loads(dump_bytes({"d": decimal.Decimal("2"), "p": Path("x")})) == {"d": 2, "p": "x"}
    assert b"\n" in dump_bytes({"a": 1}, pretty=True)
    assert to_cell(None) == ""
    assert to_cell(["a", "b"]) == "a, b"
    assert to_cell(5) == "5"
