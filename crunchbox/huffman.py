"""Huffman coding primitives shared by the text and image compressors.

The compressed layout stores each distinct byte as a 9-byte record:
the byte itself, the code length as a little-endian 32-bit signed integer
and the code's value as a little-endian 32-bit integer.  The coded
payload is packed most significant bit first and always ends with one
extra byte holding the remaining bits padded with zeros (a whole zero
byte when the bits fill the previous bytes exactly).
"""

from __future__ import annotations

import struct
from collections import Counter
from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from typing import BinaryIO, List, Tuple, Union

from .minheap import MinHeap, Node

MAX_CODE_LENGTH = 32
INTERNAL_SYMBOL = ord("$")

_ENTRY = struct.Struct("<BiI")
_HEADER_LENGTH = struct.Struct("<H")

Frequencies = Union[Mapping[int, int], Sequence[int]]


class HuffmanFormatError(ValueError):
    """Raised when compressed data is truncated or inconsistent."""


@dataclass(frozen=True)
class CodeEntry:
    """A byte value together with its Huffman code of ``length`` bits."""

    symbol: int
    length: int
    value: int

    def __post_init__(self) -> None:
        if not 0 <= self.symbol <= 255:
            raise ValueError(f"symbol {self.symbol} is not a byte value")
        if self.length < 0:
            raise ValueError(f"negative code length {self.length}")
        if not 0 <= self.value < (1 << self.length):
            raise ValueError(
                f"code value {self.value} does not fit in {self.length} bits"
            )

    def bits(self) -> Tuple[int, ...]:
        """Return the code as a tuple of bits, most significant first."""
        return tuple(
            (self.value >> shift) & 1 for shift in range(self.length - 1, -1, -1)
        )

    def bit_string(self) -> str:
        """Return the code as a string of '0' and '1' characters."""
        return format(self.value, f"0{self.length}b") if self.length else ""


def count_frequencies(data: bytes) -> List[int]:
    """Return a list of 256 occurrence counts indexed by byte value."""
    counts = Counter(bytes(data))
    return [counts[value] for value in range(256)]


def _frequency_items(frequencies: Frequencies) -> Iterator[Tuple[int, int]]:
    if isinstance(frequencies, Mapping):
        items: Iterable[Tuple[int, int]] = sorted(frequencies.items())
    else:
        items = enumerate(frequencies)
    for symbol, freq in items:
        if not 0 <= symbol <= 255:
            raise ValueError(f"symbol {symbol} is not a byte value")
        if freq > 0:
            yield symbol, freq


def build_tree(frequencies: Frequencies) -> Node:
    """Build a Huffman tree from byte frequencies.

    Leaves are inserted in ascending byte order; at each step the two
    lightest nodes are joined, the first extracted becoming the left child.
    """
    heap = MinHeap(256)
    for symbol, freq in _frequency_items(frequencies):
        heap.insert(Node(symbol, freq))
    if not len(heap):
        raise ValueError("cannot build a Huffman tree without symbols")
    while not heap.is_size_one():
        left = heap.extract_min()
        right = heap.extract_min()
        heap.insert(Node(INTERNAL_SYMBOL, left.freq + right.freq, left, right))
    return heap.extract_min()


def assign_codes(root: Node) -> List[CodeEntry]:
    """Return the code of every leaf, in left-to-right order.

    A tree made of a single leaf gives that symbol an empty code.
    """
    entries: List[CodeEntry] = []
    stack: List[Tuple[Node, int, int]] = [(root, 0, 0)]
    while stack:
        node, length, value = stack.pop()
        if node.is_leaf():
            entries.append(CodeEntry(node.ch, length, value))
            continue
        if node.right is not None:
            stack.append((node.right, length + 1, (value << 1) | 1))
        if node.left is not None:
            stack.append((node.left, length + 1, value << 1))
    return entries


def pack_bits(data: bytes, codes: Iterable[CodeEntry]) -> bytes:
    """Encode *data* with *codes* into a packed bit payload."""
    table = {entry.symbol: entry.bit_string() for entry in codes}
    try:
        bits = "".join(table[value] for value in bytes(data))
    except KeyError as exc:
        raise ValueError(f"no code for byte value {exc.args[0]}") from None
    size = len(bits) // 8 + 1
    return int(bits.ljust(size * 8, "0"), 2).to_bytes(size, "big")


def rebuild_tree(codes: Iterable[CodeEntry]) -> Node:
    """Rebuild a decoding tree from a code table."""
    root = Node(INTERNAL_SYMBOL, 0)
    terminals: set = set()
    for entry in codes:
        node = root
        for bit in entry.bits():
            if id(node) in terminals:
                raise HuffmanFormatError(
                    f"code for byte {entry.symbol} extends another code"
                )
            child = node.right if bit else node.left
            if child is None:
                child = Node(INTERNAL_SYMBOL, 0)
                if bit:
                    node.right = child
                else:
                    node.left = child
            node = child
        if id(node) in terminals or not node.is_leaf():
            raise HuffmanFormatError(
                f"code for byte {entry.symbol} collides with another code"
            )
        node.ch = entry.symbol
        terminals.add(id(node))
    if not terminals:
        raise HuffmanFormatError("empty code table")
    return root


def _iter_bits(payload: bytes) -> Iterator[int]:
    for byte in payload:
        for shift in range(7, -1, -1):
            yield (byte >> shift) & 1


def unpack_bits(payload: bytes, root: Node, total: int) -> bytes:
    """Decode *total* bytes from *payload* by walking the tree at *root*."""
    if total <= 0:
        return b""
    if root.is_leaf():
        return bytes([root.ch]) * total
    out = bytearray()
    node = root
    for bit in _iter_bits(bytes(payload)):
        child = node.right if bit else node.left
        if child is None:
            raise HuffmanFormatError("bit sequence matches no code")
        node = child
        if node.is_leaf():
            out.append(node.ch)
            if len(out) == total:
                return bytes(out)
            node = root
    raise HuffmanFormatError(
        f"payload holds {len(out)} of {total} expected bytes"
    )


def write_code_table(stream: BinaryIO, codes: Iterable[CodeEntry]) -> None:
    """Write one 9-byte record per code entry to *stream*."""
    for entry in codes:
        if entry.length > MAX_CODE_LENGTH:
            raise ValueError(
                f"code for byte {entry.symbol} is longer than "
                f"{MAX_CODE_LENGTH} bits"
            )
        stream.write(_ENTRY.pack(entry.symbol, entry.length, entry.value))


def read_code_table(stream: BinaryIO, count: int) -> List[CodeEntry]:
    """Read *count* code entries written by :func:`write_code_table`."""
    if count < 0:
        raise HuffmanFormatError(f"negative code count {count}")
    raw = stream.read(_ENTRY.size * count)
    if len(raw) != _ENTRY.size * count:
        raise HuffmanFormatError("code table is truncated")
    try:
        return [
            CodeEntry(symbol, length, value)
            for symbol, length, value in _ENTRY.iter_unpack(raw)
        ]
    except ValueError as exc:
        raise HuffmanFormatError(f"invalid code table entry: {exc}") from exc


def write_raw_header(stream: BinaryIO, header: bytes) -> None:
    """Write *header* preceded by its length as a 16-bit little-endian count."""
    header = bytes(header)
    if len(header) > 0xFFFF:
        raise ValueError("raw header is longer than 65535 bytes")
    stream.write(_HEADER_LENGTH.pack(len(header)))
    stream.write(header)


def read_raw_header(stream: BinaryIO) -> bytes:
    """Read a header written by :func:`write_raw_header`."""
    raw = stream.read(_HEADER_LENGTH.size)
    if len(raw) != _HEADER_LENGTH.size:
        raise HuffmanFormatError("missing raw header length")
    (length,) = _HEADER_LENGTH.unpack(raw)
    header = stream.read(length)
    if len(header) != length:
        raise HuffmanFormatError("raw header is truncated")
    return header