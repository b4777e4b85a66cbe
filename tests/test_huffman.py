import io
from fractions import Fraction

import pytest
from hypothesis import given
from hypothesis import strategies as st

from crunchbox.huffman import (
    CodeEntry,
    HuffmanFormatError,
    assign_codes,
    build_tree,
    count_frequencies,
    pack_bits,
    read_code_table,
    read_raw_header,
    rebuild_tree,
    unpack_bits,
    write_code_table,
    write_raw_header,
)


def _codes_for(data):
    return assign_codes(build_tree(count_frequencies(data)))


def test_count_frequencies_counts_each_byte():
    data = b"abracadabra"
    counts = count_frequencies(data)
    assert len(counts) == 256
    assert counts[ord("a")] == data.count(b"a")
    assert counts[ord("r")] == data.count(b"r")
    assert sum(counts) == len(data)


def test_code_entry_bits_most_significant_first():
    entry = CodeEntry(ord("x"), 3, 0b110)
    assert entry.bits() == (1, 1, 0)
    assert CodeEntry(ord("x"), 0, 0).bits() == ()


def test_code_entry_rejects_value_wider_than_length():
    with pytest.raises(ValueError):
        CodeEntry(1, 2, 4)


def test_two_equal_symbols_first_goes_left():
    codes = assign_codes(build_tree({97: 1, 98: 1}))
    assert codes == [CodeEntry(97, 1, 0), CodeEntry(98, 1, 1)]


def test_single_symbol_has_empty_code():
    codes = _codes_for(b"zzzz")
    assert codes == [CodeEntry(ord("z"), 0, 0)]


def test_build_tree_without_symbols_raises():
    with pytest.raises(ValueError):
        build_tree([0] * 256)


def test_codes_satisfy_kraft_equality():
    codes = _codes_for(b"the quick brown fox jumps over the lazy dog")
    assert sum(Fraction(1, 2**entry.length) for entry in codes) == 1


def test_codes_are_prefix_free():
    codes = _codes_for(b"mississippi river banks")
    strings = [entry.bit_string() for entry in codes]
    for first in strings:
        for second in strings:
            if first is not second:
                assert not second.startswith(first)


def test_more_frequent_symbols_get_shorter_codes():
    lengths = {e.symbol: e.length for e in _codes_for(b"aaaaaaaabbbbccd")}
    assert lengths[ord("a")] <= lengths[ord("b")]
    assert lengths[ord("b")] <= lengths[ord("c")]
    assert lengths[ord("c")] <= lengths[ord("d")]


def test_root_frequency_is_total():
    data = b"hello huffman"
    assert build_tree(count_frequencies(data)).freq == len(data)


def test_pack_always_appends_final_byte():
    codes = [CodeEntry(97, 1, 0), CodeEntry(98, 1, 1)]
    payload = pack_bits(b"babababa", codes)
    assert len(payload) == 2
    assert payload[-1] == 0
    assert unpack_bits(payload, rebuild_tree(codes), 8) == b"babababa"


def test_pack_length_matches_bit_count():
    data = b"compression is fun"
    codes = _codes_for(data)
    lengths = {e.symbol: e.length for e in codes}
    nbits = sum(lengths[value] for value in data)
    assert len(pack_bits(data, codes)) == nbits // 8 + 1


def test_single_symbol_payload_and_decode():
    codes = _codes_for(b"qqq")
    payload = pack_bits(b"qqq", codes)
    assert payload == b"\x00"
    assert unpack_bits(payload, rebuild_tree(codes), 3) == b"qqq"


def test_pack_unknown_symbol_raises():
    with pytest.raises(ValueError):
        pack_bits(b"ac", [CodeEntry(97, 1, 0), CodeEntry(98, 1, 1)])


def test_unpack_zero_total_is_empty():
    codes = _codes_for(b"ab")
    assert unpack_bits(b"\xff", rebuild_tree(codes), 0) == b""


def test_unpack_truncated_payload_raises():
    data = b"a longer sample of text to encode"
    codes = _codes_for(data)
    payload = pack_bits(data, codes)
    with pytest.raises(HuffmanFormatError):
        unpack_bits(payload[:2], rebuild_tree(codes), len(data))


def test_unpack_missing_branch_raises():
    root = rebuild_tree([CodeEntry(97, 2, 0), CodeEntry(98, 2, 1)])
    with pytest.raises(HuffmanFormatError):
        unpack_bits(b"\xff", root, 1)


def test_rebuild_tree_detects_prefix_conflict():
    with pytest.raises(HuffmanFormatError):
        rebuild_tree([CodeEntry(97, 1, 0), CodeEntry(98, 2, 0)])


def test_rebuild_tree_detects_duplicate_code():
    with pytest.raises(HuffmanFormatError):
        rebuild_tree([CodeEntry(97, 2, 1), CodeEntry(98, 2, 1)])


def test_rebuild_tree_empty_table_raises():
    with pytest.raises(HuffmanFormatError):
        rebuild_tree([])


def test_code_table_record_layout():
    stream = io.BytesIO()
    write_code_table(stream, [CodeEntry(65, 2, 3)])
    assert stream.getvalue() == b"A\x02\x00\x00\x00\x03\x00\x00\x00"


def test_code_table_round_trip():
    codes = _codes_for(b"round trip of a code table")
    stream = io.BytesIO()
    write_code_table(stream, codes)
    assert len(stream.getvalue()) == 9 * len(codes)
    stream.seek(0)
    assert read_code_table(stream, len(codes)) == codes


def test_read_code_table_truncated_raises():
    stream = io.BytesIO()
    write_code_table(stream, [CodeEntry(65, 2, 3)])
    with pytest.raises(HuffmanFormatError):
        read_code_table(io.BytesIO(stream.getvalue()[:-1]), 1)


def test_read_code_table_invalid_entry_raises():
    stream = io.BytesIO()
    write_code_table(stream, [CodeEntry(65, 2, 3)])
    raw = bytearray(stream.getvalue())
    raw[1] = 1
    with pytest.raises(HuffmanFormatError):
        read_code_table(io.BytesIO(bytes(raw)), 1)


def test_write_code_table_rejects_overlong_code():
    with pytest.raises(ValueError):
        write_code_table(io.BytesIO(), [CodeEntry(1, 33, 0)])


def test_raw_header_layout_and_round_trip():
    stream = io.BytesIO()
    write_raw_header(stream, b"BM")
    assert stream.getvalue() == b"\x02\x00BM"
    stream.seek(0)
    assert read_raw_header(stream) == b"BM"


def test_raw_header_too_long_raises():
    with pytest.raises(ValueError):
        write_raw_header(io.BytesIO(), bytes(70000))


def test_raw_header_truncated_raises():
    stream = io.BytesIO()
    write_raw_header(stream, b"header bytes")
    with pytest.raises(HuffmanFormatError):
        read_raw_header(io.BytesIO(stream.getvalue()[:-3]))


def test_raw_header_missing_length_raises():
    with pytest.raises(HuffmanFormatError):
        read_raw_header(io.BytesIO(b"\x01"))


@given(st.binary(min_size=1, max_size=400))
def test_round_trip_through_table(data):
    codes = _codes_for(data)
    table = io.BytesIO()
    write_code_table(table, codes)
    table.seek(0)
    restored = read_code_table(table, len(codes))
    payload = pack_bits(data, codes)
    assert unpack_bits(payload, rebuild_tree(restored), len(data)) == data