"""Huffman compression of arbitrary byte streams (text files).

Compressed layout, all integers little-endian:

* total number of input bytes (32-bit signed),
* number of distinct bytes (32-bit signed),
* one code-table record per distinct byte,
* the packed code bits.
"""

from __future__ import annotations

import io
import os
import struct
from typing import Union

from .huffman import (
    HuffmanFormatError,
    assign_codes,
    build_tree,
    count_frequencies,
    pack_bits,
    read_code_table,
    rebuild_tree,
    unpack_bits,
    write_code_table,
)

PathLike = Union[str, "os.PathLike[str]"]

_COUNTS = struct.Struct("<ii")
_MAX_TOTAL = 0x7FFFFFFF


def compress_text(data: bytes) -> bytes:
    """Huffman-compress *data* and return the compressed blob."""
    data = bytes(data)
    if len(data) > _MAX_TOTAL:
        raise ValueError("input is too large to record its length")
    codes = assign_codes(build_tree(count_frequencies(data))) if data else []
    buffer = io.BytesIO()
    buffer.write(_COUNTS.pack(len(data), len(codes)))
    write_code_table(buffer, codes)
    buffer.write(pack_bits(data, codes))
    return buffer.getvalue()


def decompress_text(blob: bytes) -> bytes:
    """Restore the bytes compressed by :func:`compress_text`."""
    stream = io.BytesIO(bytes(blob))
    raw = stream.read(_COUNTS.size)
    if len(raw) != _COUNTS.size:
        raise HuffmanFormatError("missing byte counts")
    total, count = _COUNTS.unpack(raw)
    if total < 0:
        raise HuffmanFormatError(f"negative byte total {total}")
    codes = read_code_table(stream, count)
    if total == 0:
        return b""
    root = rebuild_tree(codes)
    return unpack_bits(stream.read(), root, total)


def compress_text_file(input_path: PathLike, output_path: PathLike) -> None:
    """Huffman-compress the file at *input_path* into *output_path*."""
    with open(input_path, "rb") as source:
        data = source.read()
    blob = compress_text(data)
    with open(output_path, "wb") as target:
        target.write(blob)


def decompress_text_file(input_path: PathLike, output_path: PathLike) -> None:
    """Restore the file at *input_path* into *output_path*."""
    with open(input_path, "rb") as source:
        blob = source.read()
    data = decompress_text(blob)
    with open(output_path, "wb") as target:
        target.write(data)