"""Tests for the Range header parser."""

import pytest

from fileops.ranges import ByteRange, parse_range


def test_closed_range():
    assert parse_range("bytes=0-99", 1000) == ByteRange(0, 99)


def test_open_ended_range():
    assert parse_range("bytes=900-", 1000) == ByteRange(900, 999)


def test_last_byte():
    assert parse_range("bytes=999-999", 1000) == ByteRange(999, 999)


def test_length_and_content_range():
    r = parse_range("bytes=10-19", 100)
    assert r.length == 10
    assert r.content_range(100) == "bytes 10-19/100"


@pytest.mark.parametrize("header", [
    "bytes=900-1000",       # end out of bounds
    "bytes=0-99,200-299",   # multi-range
    "bytes=50-10",          # start after end
    "bytes=-500",           # suffix range
    "bytes=abc-10",
    "bytes=1-x",
    "bytes= 1-2",
    "bytes=+1-2",
    "bytes=10",
    "items=0-10",
    "",
])
def test_rejected(header):
    assert parse_range(header, 1000) is None


def test_none_header():
    assert parse_range(None, 1000) is None


def test_empty_file_has_no_range():
    assert parse_range("bytes=0-", 0) is None
