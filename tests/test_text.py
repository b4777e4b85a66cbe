import struct

import pytest
from hypothesis import given
from hypothesis import strategies as st

from crunchbox.huffman import HuffmanFormatError
from crunchbox.text import (
    compress_text,
    compress_text_file,
    decompress_text,
    decompress_text_file,
)


def test_single_symbol_layout():
    blob = compress_text(b"a")
    assert blob == (
        b"\x01\x00\x00\x00\x01\x00\x00\x00"
        b"a\x00\x00\x00\x00\x00\x00\x00\x00"
        b"\x00"
    )


def test_two_symbol_layout():
    blob = compress_text(b"ab")
    assert blob == (
        b"\x02\x00\x00\x00\x02\x00\x00\x00"
        b"a\x01\x00\x00\x00\x00\x00\x00\x00"
        b"b\x01\x00\x00\x00\x01\x00\x00\x00"
        b"\x40"
    )


def test_counts_header_matches_input():
    data = b"hello huffman world"
    total, unique = struct.unpack_from("<ii", compress_text(data))
    assert total == len(data)
    assert unique == len(set(data))


@pytest.mark.parametrize(
    "data",
    [b"", b"a", b"aaaaaaa", b"ab", b"abracadabra", bytes(range(256)) * 3],
)
def test_round_trip(data):
    assert decompress_text(compress_text(data)) == data


@given(st.binary(max_size=400))
def test_round_trip_property(data):
    assert decompress_text(compress_text(data)) == data


def test_repetitive_text_shrinks():
    data = b"a" * 1000 + b"b" * 10
    assert len(compress_text(data)) < len(data) // 4


def test_truncated_counts_raise():
    with pytest.raises(HuffmanFormatError):
        decompress_text(b"\x01\x00")


def test_missing_payload_raises():
    blob = compress_text(b"ab")
    with pytest.raises(HuffmanFormatError):
        decompress_text(blob[:-1])


def test_truncated_code_table_raises():
    blob = compress_text(b"abc")
    with pytest.raises(HuffmanFormatError):
        decompress_text(blob[:12])


def test_file_round_trip(tmp_path):
    original = tmp_path / "in.txt"
    packed = tmp_path / "packed.bin"
    restored = tmp_path / "out.txt"
    original.write_bytes(b"the quick brown fox\njumps over the lazy dog\n")
    compress_text_file(original, packed)
    decompress_text_file(packed, restored)
    assert restored.read_bytes() == original.read_bytes()
    assert packed.read_bytes() == compress_text(original.read_bytes())


def test_missing_input_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        compress_text_file(tmp_path / "absent.txt", tmp_path / "out.bin")