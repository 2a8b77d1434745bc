from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path


@dataclass
class ReadResult:
    source: str
    text: str
    bytes_read: int


def read_text_source(source: str, encoding: str = "utf-8") -> ReadResult:
    """Read a file path, or stdin when ``source`` is ``-``."""
    if source == "-":
        data = sys.stdin.buffer.read()
    else:
        data = Path(source).read_bytes()
    return ReadResult(source=source, text=data.decode(encoding, errors="replace"), bytes_read=len(data))
