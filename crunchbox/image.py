"""Huffman compression of BMP images.

The header bytes up to the pixel data offset are stored uncompressed so
the image metadata survives unchanged; only the pixel bytes are coded.

Compressed layout, all integers little-endian:

* number of pixel bytes (32-bit signed),
* number of distinct pixel bytes (32-bit signed),
* one code-table record per distinct byte,
* the raw header preceded by its 16-bit length,
* the packed code bits.
"""

from __future__ import annotations

import io
import os
import struct
from dataclasses import dataclass
from typing import Union

from .huffman import (
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

PathLike = Union[str, "os.PathLike[str]"]

_COUNTS = struct.Struct("<ii")
_BMP_FIELDS = struct.Struct("<2sI4xIIii2xH")
_MAX_TOTAL = 0x7FFFFFFF


@dataclass(frozen=True)
class BmpInfo:
    """Fields read from a BMP file header."""

    signature: bytes
    file_size: int
    data_offset: int
    header_size: int
    width: int
    height: int
    bits_per_pixel: int


def parse_bmp_header(data: bytes) -> BmpInfo:
    """Read the BMP header fields from the start of *data*.

    The height is reported as an absolute value, so top-down images
    give a positive height too.
    """
    data = bytes(data)
    if len(data) < _BMP_FIELDS.size:
        raise ValueError(
            f"BMP header needs {_BMP_FIELDS.size} bytes, got {len(data)}"
        )
    signature, size, offset, header_size, width, height, bpp = (
        _BMP_FIELDS.unpack_from(data)
    )
    return BmpInfo(signature, size, offset, header_size, width, abs(height), bpp)


def compress_image(data: bytes) -> bytes:
    """Huffman-compress the pixel data of a BMP image held in *data*."""
    data = bytes(data)
    info = parse_bmp_header(data)
    if info.data_offset > len(data):
        raise ValueError(
            f"pixel data offset {info.data_offset} lies past the end of the image"
        )
    header, pixels = data[: info.data_offset], data[info.data_offset:]
    if len(pixels) > _MAX_TOTAL:
        raise ValueError("image is too large to record its length")
    codes = assign_codes(build_tree(count_frequencies(pixels))) if pixels else []
    buffer = io.BytesIO()
    buffer.write(_COUNTS.pack(len(pixels), len(codes)))
    write_code_table(buffer, codes)
    write_raw_header(buffer, header)
    buffer.write(pack_bits(pixels, codes))
    return buffer.getvalue()


def decompress_image(blob: bytes) -> bytes:
    """Restore the BMP image compressed by :func:`compress_image`."""
    stream = io.BytesIO(bytes(blob))
    raw = stream.read(_COUNTS.size)
    if len(raw) != _COUNTS.size:
        raise HuffmanFormatError("missing byte counts")
    total, count = _COUNTS.unpack(raw)
    if total < 0:
        raise HuffmanFormatError(f"negative byte total {total}")
    codes = read_code_table(stream, count)
    header = read_raw_header(stream)
    if total == 0:
        return header
    root = rebuild_tree(codes)
    return header + unpack_bits(stream.read(), root, total)


def compress_image_file(input_path: PathLike, output_path: PathLike) -> BmpInfo:
    """Compress the BMP file at *input_path* into *output_path*.

    Returns the header fields of the source image.
    """
    with open(input_path, "rb") as source:
        data = source.read()
    info = parse_bmp_header(data)
    blob = compress_image(data)
    with open(output_path, "wb") as target:
        target.write(blob)
    return info


def decompress_image_file(input_path: PathLike, output_path: PathLike) -> None:
    """Restore the compressed image at *input_path* into *output_path*."""
    with open(input_path, "rb") as source:
        blob = source.read()
    data = decompress_image(blob)
    with open(output_path, "wb") as target:
        target.write(data)