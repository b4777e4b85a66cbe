"""A bounded binary min-heap of Huffman tree nodes ordered by frequency."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(eq=False)
class Node:
    """A Huffman tree node: a byte value, its frequency and two children."""

    ch: int
    freq: int
    left: Optional["Node"] = None
    right: Optional["Node"] = None

    def is_leaf(self) -> bool:
        """Return True when the node has no children."""
        return self.left is None and self.right is None


@dataclass
class MinHeap:
    """Array-backed min-heap keyed on ``Node.freq`` with a fixed capacity.

    Ties keep the order produced by strict comparisons, so the same
    sequence of operations always yields the same extraction order.
    """

    capacity: int
    nodes: List[Node] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.nodes)

    def insert(self, node: Node) -> None:
        """Add *node*, sifting it up to its place."""
        if len(self.nodes) >= self.capacity:
            raise IndexError("heap is full")
        nodes = self.nodes
        nodes.append(node)
        i = len(nodes) - 1
        while i and node.freq < nodes[(i - 1) // 2].freq:
            nodes[i] = nodes[(i - 1) // 2]
            i = (i - 1) // 2
        nodes[i] = node

    def extract_min(self) -> Node:
        """Remove and return the node with the smallest frequency."""
        if not self.nodes:
            raise IndexError("extract from an empty heap")
        nodes = self.nodes
        smallest = nodes[0]
        last = nodes.pop()
        if nodes:
            nodes[0] = last
            self._sift_down(0)
        return smallest

    def heapify(self) -> None:
        """Restore the heap property over the whole node list."""
        for i in range(len(self.nodes) // 2 - 1, -1, -1):
            self._sift_down(i)

    def is_size_one(self) -> bool:
        """Return True when exactly one node remains."""
        return len(self.nodes) == 1

    def _sift_down(self, idx: int) -> None:
        nodes = self.nodes
        size = len(nodes)
        while True:
            smallest = idx
            left = 2 * idx + 1
            right = left + 1
            if left < size and nodes[left].freq < nodes[smallest].freq:
                smallest = left
            if right < size and nodes[right].freq < nodes[smallest].freq:
                smallest = right
            if smallest == idx:
                return
            nodes[smallest], nodes[idx] = nodes[idx], nodes[smallest]
            idx = smallest