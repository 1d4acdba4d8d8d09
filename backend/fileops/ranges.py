import re
from typing import NamedTuple, Optional

_DIGITS = re.compile(r"[0-9]+")


class ByteRange(NamedTuple):
    start: int
    end: int  # inclusive

    @property
    def length(self) -> int:
        return self.end - self.start + 1

    def content_range(self, total_size: int) -> str:
        return f"bytes {self.start}-{self.end}/{total_size}"


def parse_range(header: Optional[str], total_size: int) -> Optional[ByteRange]:
    """
    Parse a single 'bytes=start-end' range. Returns None for anything that
    should fall back to a full response (suffix ranges, multiple ranges,
    garbage, out of bounds).
    """
    if not header or not header.startswith("bytes="):
        return None
    spec = header[len("bytes="):]
    start_s, sep, end_s = spec.partition("-")
    if not sep or not _DIGITS.fullmatch(start_s):
        return None
    start = int(start_s)
    if end_s == "":
        end = total_size - 1
    elif _DIGITS.fullmatch(end_s):
        end = int(end_s)
    else:
        return None
    if start <= end < total_size:
        return ByteRange(start, end)
    return None
