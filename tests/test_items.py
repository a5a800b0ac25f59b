"""Tests for the tag item iterator."""

import struct

import pytest

from apetag_reader.errors import TagCorruptError
from apetag_reader.items import ItemIterator, normalize_item, parse_item
from tagbuilder import build_body, build_item, build_block, BINARY, EXTERNAL


class TestItemIterator:
    """Test iterating over well formed bodies."""

    def test_year_alias_and_truncation(self):
        """Test that Year becomes date and keeps only the year."""
        data = build_body([("Artist", "Queen"), ("Year", "1999-08-11")])
        assert list(ItemIterator(data)) == [("Artist", b"Queen"), ("date", b"1999")]

    def test_record_date_alias(self):
        data = build_body([("Record Date", "2001-05")])
        assert list(ItemIterator(data)) == [("date", b"2001")]

    def test_alias_is_case_insensitive(self):
        data = build_body([("YEAR", "1980"), ("record DATE", "1975-11-21 12:34")])
        assert list(ItemIterator(data)) == [("date", b"1980"), ("date", b"1975")]

    def test_date_key_keeps_its_spelling(self):
        """Test that an existing Date key is truncated but not renamed."""
        data = build_body([("DATE", "1999-W34")])
        assert list(ItemIterator(data)) == [("DATE", b"1999")]

    def test_short_date_untouched(self):
        data = build_body([("Year", "99")])
        assert list(ItemIterator(data)) == [("date", b"99")]

    def test_value_bytes_preserved(self):
        """Test that values keep embedded NULs and non-ASCII bytes."""
        value = "Motörhead\x00Ace".encode("utf-8")
        data = build_body([("Artist", value)])
        assert list(ItemIterator(data)) == [("Artist", value)]

    def test_empty_value(self):
        data = build_body([("Comment", b""), ("Title", "x")])
        assert list(ItemIterator(data)) == [("Comment", b""), ("Title", b"x")]

    def test_binary_item_skipped(self):
        """Test that a binary item is not yielded but the next one is."""
        data = build_body([
            ("Artist", "Queen"),
            ("Cover Art (Front)", b"cover.jpg\x00\xff\xd8\xff\xe0", BINARY),
            ("Title", "Innuendo"),
        ])
        assert list(ItemIterator(data)) == [("Artist", b"Queen"), ("Title", b"Innuendo")]

    def test_external_item_skipped(self):
        data = build_body([("Lyrics", "http://example.com/", EXTERNAL), ("Title", "x")])
        assert list(ItemIterator(data)) == [("Title", b"x")]

    def test_read_only_flag_is_text(self):
        """Test that bit 0 (read only) does not make an item binary."""
        data = build_body([("Title", "x", 1)])
        assert list(ItemIterator(data)) == [("Title", b"x")]

    def test_round_trip(self):
        """Test that encoded text items come back unchanged."""
        pairs = [
            ("Artist", "Nina Simone".encode()),
            ("Album", "Pastel Blues".encode()),
            ("Genre", "Jazz".encode()),
            ("Comment", "Žluťoučký kůň".encode()),
            ("Track", b"3/9"),
        ]
        data = build_body(pairs)
        assert list(ItemIterator(data)) == pairs

    def test_empty_buffer(self):
        it = ItemIterator(b"")
        assert list(it) == []
        assert it.next() is None


class TestItemIteratorCorruption:
    """Test that damaged bodies end the sequence instead of raising."""

    def test_value_overruns_buffer(self):
        """Test that an oversized value length stops after the good items."""
        good = build_body([("Artist", "Queen"), ("Album", "Jazz")])
        bad = struct.pack("<II", 1000, 0) + b"Title\x00short"
        it = ItemIterator(good + bad)
        assert it.next() == ("Artist", b"Queen")
        assert it.next() == ("Album", b"Jazz")
        assert it.next() is None
        assert it.next() is None
        with pytest.raises(StopIteration):
            next(it)

    def test_huge_value_length(self):
        """Test that a value length near 2**32 is treated as corrupt."""
        data = build_body([("Artist", "Queen")]) + struct.pack("<II", 0xFFFFFFFF, 0) + b"Key\x00" + b"v" * 16
        assert list(ItemIterator(data)) == [("Artist", b"Queen")]

    def test_unterminated_key(self):
        data = build_body([("Artist", "Queen")]) + struct.pack("<II", 0, 0) + b"NoTerminator"
        assert list(ItemIterator(data)) == [("Artist", b"Queen")]

    def test_key_terminator_inside_value_area(self):
        """Test that the key search stops where the value must begin."""
        # val_len 4 leaves room for "AB" plus terminator; the NUL sits later
        data = struct.pack("<II", 4, 0) + b"ABCD" + b"\x00" + b"xx"
        assert list(ItemIterator(data)) == []

    def test_non_ascii_key(self):
        data = build_body([("Artist", "Queen")]) + build_item(b"K\xe9y", b"v")
        assert list(ItemIterator(data)) == [("Artist", b"Queen")]

    def test_short_tail(self):
        """Test that fewer than 9 trailing bytes end the sequence cleanly."""
        data = build_body([("Artist", "Queen")]) + b"\x00" * 8
        assert list(ItemIterator(data)) == [("Artist", b"Queen")]

    def test_footer_in_body_ends_sequence(self):
        """Test that the trailing footer of a real tag body is not an item."""
        data = build_body([("Artist", "Queen")])
        data += build_block(len(data) + 32, 1)
        assert list(ItemIterator(data)) == [("Artist", b"Queen")]

    def test_binary_before_corruption(self):
        """Test that a skipped binary item followed by damage yields nothing more."""
        data = build_body([("Artist", "Queen"), ("Cover", b"\x01\x02", BINARY)])
        data += struct.pack("<II", 500, 0) + b"K\x00"
        it = ItemIterator(data)
        assert list(it) == [("Artist", b"Queen")]
        assert it.finished

    def test_cursor_never_moves_back(self):
        data = build_body([("Artist", "Queen"), ("Album", "Jazz")])
        it = ItemIterator(data)
        positions = [it.pos]
        for _ in it:
            positions.append(it.pos)
        assert positions == sorted(positions)
        assert positions[-1] == len(data)


class TestParseItem:
    """Test the single item parser."""

    def test_consumed_bytes(self):
        item = build_item("Artist", "Queen")
        assert parse_item(item + b"tail-bytes") == (len(item), "Artist", b"Queen")

    def test_consumed_includes_skipped(self):
        binary = build_item("Cover", b"\x00" * 10, BINARY)
        text = build_item("Title", "x")
        assert parse_item(binary + text) == (len(binary) + len(text), "Title", b"x")

    def test_offset(self):
        first = build_item("Artist", "Queen")
        data = first + build_item("Title", "x")
        assert parse_item(data, len(first)) == (len(data) - len(first), "Title", b"x")

    def test_strict_raises(self):
        data = struct.pack("<II", 100, 0) + b"Key\x00"
        assert parse_item(data) is None
        with pytest.raises(TagCorruptError):
            parse_item(data, strict=True)

    def test_strict_unterminated_key(self):
        with pytest.raises(TagCorruptError, match="unterminated"):
            parse_item(struct.pack("<II", 0, 0) + b"Key", strict=True)


class TestNormalizeItem:
    """Test key aliasing and date truncation."""

    def test_other_keys_untouched(self):
        assert normalize_item("Title", b"1999-08-11") == ("Title", b"1999-08-11")

    def test_aliases(self):
        assert normalize_item("year", b"2004") == ("date", b"2004")
        assert normalize_item("Record Date", b"2004-01-01") == ("date", b"2004")
