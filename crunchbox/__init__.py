"""Run-length and Huffman compression for byte streams and BMP images."""

__version__ = "0.1.0"
__all__ = ["cli", "huffman", "image", "minheap", "rle", "text"]