import subprocess
from typing import Callable, List, Optional, Set, Union

import pytest

from exifmeta import runner

SAMPLE_DUMP = "\r\n".join([
    "[ExifTool]      ExifTool Version Number         : 12.76",
    "[File]          File Name                       : photo.jpg",
    "[File]          MIME Type                       : image/jpeg",
    "[EXIF]          Image Description               : A quiet harbour",
    "[EXIF]          Rating                          : 3",
    "[IPTC]          ObjectName                      : Harbour",
    "[IPTC]          Caption-Abstract                : Boats at dusk",
    "[IPTC]          Copyright Notice                : (c) Jane Roe",
    "[IPTC]          Keywords                        : boat, harbour",
    "[XMP]           Title                           : Harbour (XMP)",
    "[XMP]           Subject                         : sea, boat",
    "[XMP]           Label                           : Red",
    "[Composite]     Image Size                      : 640x480",
    "",
])


class FakeExifTool:
    """Stands in for subprocess.run and records every command line."""

    def __init__(self, exe: str):
        self.exe = exe
        self.calls: List[List[str]] = []
        self.output: Union[str, Callable[[List[str]], str]] = SAMPLE_DUMP
        self.returncode = 0
        self.stderr = ""
        self.on_call: Optional[Callable[[List[str]], None]] = None
        self.failing: Set[str] = set()

    def __call__(self, cmd, stdout=None, stderr=None, shell=False, **kwargs):
        assert shell is False
        cmd = list(cmd)
        self.calls.append(cmd)
        if self.on_call:
            self.on_call(cmd)
        out = self.output(cmd) if callable(self.output) else self.output
        code = 1 if cmd[-1] in self.failing else self.returncode
        return subprocess.CompletedProcess(cmd, code, out.encode("utf-8"), self.stderr.encode("utf-8"))

    @property
    def writes(self) -> List[List[str]]:
        return [c for c in self.calls if any(a.startswith("-") and "=" in a for a in c[1:])]


@pytest.fixture
def fake_exiftool(tmp_path, monkeypatch):
    exe = tmp_path / "exiftool"
    exe.write_text("#!/bin/sh\n", encoding="utf-8")
    fake = FakeExifTool(str(exe))
    monkeypatch.setattr(runner, "_exiftool", None)
    monkeypatch.setattr(runner.subprocess, "run", fake)
    runner.set_exiftool(exe)
    return fake


@pytest.fixture
def photo(tmp_path):
    p = tmp_path / "photo.jpg"
    p.write_bytes(b"\xff\xd8\xff\xd9")
    return p
