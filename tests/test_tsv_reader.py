"""Tests for tsv_reader.py."""

import pytest

from tsv_reader import Row, read_tsv


def test_read_rows(tmp_path):
    path = tmp_path / "t.txt"
    path.write_text("code\tname\tgemsockets\nqui\t Quilted Armor \t2\n", encoding="utf-8")
    rows = read_tsv(path)
    assert rows == [{"code": "qui", "name": "Quilted Armor", "gemsockets": "2"}]
    assert rows[0].get_int("gemsockets") == 2


def test_skips_blank_and_separator_rows(tmp_path):
    path = tmp_path / "t.txt"
    path.write_text("Code\tEquiv1\n\nswor\tmele\n\tcomment\n\t\naxe\tmele\n", encoding="utf-8")
    assert [r["Code"] for r in read_tsv(path)] == ["swor", "axe"]


def test_short_and_long_rows(tmp_path):
    path = tmp_path / "t.txt"
    path.write_text("a\tb\tc\nx\ny\t1\t2\t3\n", encoding="utf-8")
    rows = read_tsv(path)
    assert rows[0] == {"a": "x"}
    assert rows[0].get_str("c", "none") == "none"
    assert rows[1] == {"a": "y", "b": "1", "c": "2"}


def test_crlf_and_quotes(tmp_path):
    path = tmp_path / "t.txt"
    path.write_bytes(b'Name\tText\r\nRuneword1\t"quoted"\r\n')
    assert read_tsv(path) == [{"Name": "Runeword1", "Text": '"quoted"'}]


def test_header_only(tmp_path):
    path = tmp_path / "t.txt"
    path.write_text("code\tname\n", encoding="utf-8")
    assert read_tsv(path) == []


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_tsv(tmp_path / "nope.txt")


# ── Row getters ──────────────────────────────────────────

@pytest.mark.parametrize("raw,expected", [("5", 5), ("-3", -3), ("", 7), ("x", 7)])
def test_get_int(raw, expected):
    assert Row(v=raw).get_int("v", 7) == expected


@pytest.mark.parametrize("raw,expected", [("1", True), ("true", True), ("TRUE", True),
                                          ("0", False), ("", False), ("yes", False)])
def test_get_bool(raw, expected):
    assert Row(v=raw).get_bool("v") is expected


def test_get_missing_key():
    assert Row().get_int("nope") == 0
    assert Row().get_str("nope") == ""
    assert Row().get_bool("nope") is False
