"""Command-line front end: compress or decompress one file."""

from __future__ import annotations

import sys
import time
from typing import Callable, List, NamedTuple, Optional, Sequence

from .image import compress_image_file, decompress_image_file
from .rle import compress_rle_file, decompress_rle_file
from .text import compress_text_file, decompress_text_file


class _Command(NamedTuple):
    summary: str
    progress: str
    done: str
    action: Callable[[str, str], object]
    output: str


_COMMANDS = {
    "c1": _Command(
        "Compress using RLE",
        "Compressing '{}' using RLE...",
        "compressed",
        compress_rle_file,
        "./image-files/compressedRle.txt",
    ),
    "d1": _Command(
        "Decompress using RLE",
        "Decompressing '{}' using RLE...",
        "decompressed",
        decompress_rle_file,
        "./image-files/decompressedRle.txt",
    ),
    "c2": _Command(
        "Compress text using Huffman",
        "Compressing '{}' using Huffman (text)...",
        "compressed",
        compress_text_file,
        "./image-files/compressedHauffText.txt",
    ),
    "d2": _Command(
        "Decompress text using Huffman",
        "Decompressing '{}' using Huffman (text)...",
        "decompressed",
        decompress_text_file,
        "./image-files/decompressedHauffText.txt",
    ),
    "c3": _Command(
        "Compress image using Huffman",
        "Compressing '{}' using Huffman (image)...",
        "compressed",
        compress_image_file,
        "./image-files/compressedHauffImage.bin",
    ),
    "d3": _Command(
        "Decompress image using Huffman",
        "Decompressing '{}' using Huffman (image)...",
        "decompressed",
        decompress_image_file,
        "./image-files/decompressedHauffImage.bmp",
    ),
}


def _command_list() -> List[str]:
    return ["Commands:"] + [
        f"  {name}: {command.summary}" for name, command in _COMMANDS.items()
    ]


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run one command on one file; return the process exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 2:
        print("Usage: crunchbox <command> <filename>")
        print("\n".join(_command_list()))
        return 1

    name, filename = args
    command = _COMMANDS.get(name)
    if command is None:
        print(f"Invalid command: {name}")
        print("Use one of the following commands:")
        print("\n".join(_command_list()[1:]))
        return 1

    start = time.perf_counter()
    print(command.progress.format(filename))
    try:
        command.action(filename, command.output)
    except OSError as exc:
        print(f"Error opening file: {exc}", file=sys.stderr)
        return 1
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    print(f"Successfully {command.done} as '{command.output}'\n")
    print(f"Time taken: {time.perf_counter() - start:.2f} seconds")
    return 0


if __name__ == "__main__":
    sys.exit(main())