"""Run-length encoding of byte streams.

A run of more than one identical byte is written as the byte followed by
the decimal run length; a single byte is written as itself.  Decoding
reads a byte and, if digits follow, repeats it that many times.
"""

from __future__ import annotations

import itertools
import os
import re
from typing import Union

PathLike = Union[str, "os.PathLike[str]"]

_RUN_PATTERN = re.compile(rb"(.)([0-9]*)", re.DOTALL)


def compress_rle(data: bytes) -> bytes:
    """Encode *data* with run-length encoding."""
    out = bytearray()
    for value, group in itertools.groupby(bytes(data)):
        run = sum(1 for _ in group)
        out.append(value)
        if run > 1:
            out += str(run).encode("ascii")
    return bytes(out)


def decompress_rle(data: bytes) -> bytes:
    """Decode run-length encoded *data*.

    Each symbol byte is followed by an optional decimal count; a missing
    count means the symbol occurs once.
    """
    out = bytearray()
    for match in _RUN_PATTERN.finditer(bytes(data)):
        symbol, digits = match.groups()
        count = int(digits) if digits else 1
        out += symbol * count
    return bytes(out)


def compress_rle_file(input_path: PathLike, output_path: PathLike) -> None:
    """Run-length encode the file at *input_path* into *output_path*."""
    with open(input_path, "rb") as source:
        data = source.read()
    with open(output_path, "wb") as target:
        target.write(compress_rle(data))


def decompress_rle_file(input_path: PathLike, output_path: PathLike) -> None:
    """Decode the run-length encoded file at *input_path* into *output_path*."""
    with open(input_path, "rb") as source:
        data = source.read()
    with open(output_path, "wb") as target:
        target.write(decompress_rle(data))