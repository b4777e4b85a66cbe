# crunchbox

A small compression toolkit with three codecs:

- **Run-length encoding** (`crunchbox.rle`): a run of more than one identical
  byte is written as the byte followed by its run length in decimal. A byte
  that occurs once is written on its own.
- **Huffman coding for text** (`crunchbox.text`): produces a binary blob that
  holds the byte count, the code table and the packed bit stream.
- **Huffman coding for BMP images** (`crunchbox.image`): the header bytes up to
  the pixel data offset are copied unchanged and only the pixel bytes are
  Huffman coded.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Command line

```
crunchbox <command> <filename>
```

| Command | Action                           | Output file                                |
|---------|----------------------------------|--------------------------------------------|
| `c1`    | Compress using RLE               | `./image-files/compressedRle.txt`          |
| `d1`    | Decompress using RLE             | `./image-files/decompressedRle.txt`        |
| `c2`    | Compress text using Huffman      | `./image-files/compressedHauffText.txt`    |
| `d2`    | Decompress text using Huffman    | `./image-files/decompressedHauffText.txt`  |
| `c3`    | Compress image using Huffman     | `./image-files/compressedHauffImage.bin`   |
| `d3`    | Decompress image using Huffman   | `./image-files/decompressedHauffImage.bmp` |

Example:

```
crunchbox c1 notes.txt
crunchbox d1 ./image-files/compressedRle.txt
```

The output file names are fixed and the `./image-files` directory must already
exist. On success the command prints the output path and the time taken and
exits with status 0. A wrong number of arguments or an unknown command prints
the list of commands and exits with status 1. A file that cannot be opened or
data that cannot be decoded prints an error to standard error and also exits
with status 1.

## Library use

```python
from crunchbox.rle import compress_rle, decompress_rle
from crunchbox.text import compress_text, decompress_text
from crunchbox.image import compress_image, decompress_image, parse_bmp_header

assert compress_rle(b"aaabcc") == b"a3bc2"
assert decompress_rle(b"a3bc2") == b"aaabcc"

blob = compress_text(b"hello world")
assert decompress_text(blob) == b"hello world"

with open("picture.bmp", "rb") as fh:
    bmp = fh.read()
info = parse_bmp_header(bmp)   # BmpInfo: signature, file_size, data_offset, ...
assert decompress_image(compress_image(bmp)) == bmp
```

All codecs work on `bytes`. Each also has a file form taking an input path and
an output path: `compress_rle_file`, `decompress_rle_file`,
`compress_text_file`, `decompress_text_file`, `compress_image_file` (which
returns the image's `BmpInfo`) and `decompress_image_file`.

`parse_bmp_header` reports the height as an absolute value and raises
`ValueError` when the data is shorter than the header fields it reads.
`compress_image` also raises `ValueError` when the pixel data offset lies past
the end of the data.

### Huffman building blocks

`crunchbox.huffman` exposes the pieces the two Huffman codecs are made of:
`count_frequencies`, `build_tree`, `assign_codes` (returning `CodeEntry`
objects with `symbol`, `length`, `value` and a `bits()` method), `pack_bits`,
`rebuild_tree`, `unpack_bits`, `write_code_table`, `read_code_table`,
`write_raw_header` and `read_raw_header`. Truncated or inconsistent compressed
data raises `crunchbox.huffman.HuffmanFormatError`, a subclass of
`ValueError`.

The priority queue used to build the tree is `crunchbox.minheap.MinHeap`, a
fixed-capacity min-heap of `crunchbox.minheap.Node` objects ordered by
frequency.

## Limitations

- The run-length format does not escape digits: input bytes that are decimal
  digits are read back as run counts, so such input does not round-trip
  (for example, `compress_rle(b"a1")` is `b"a1"`, which decodes to `b"a"`).
- The image codec reads only the BMP header fields listed in `BmpInfo`; it
  does not check that the file is a valid bitmap beyond its length and pixel
  data offset.
- Huffman codes longer than 32 bits cannot be stored in the code table and
  raise `ValueError`.