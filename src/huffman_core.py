# filename: huffman_core.py

import heapq
import itertools

from loguru import logger

from huffman_buffers import BitStream, ByteVector
from huffman_errors import CorruptStreamError, TreeBuildError
from huffman_table import ALPHABET_SIZE, Symbol

logger.disable(__name__)


class HuffmanNode:
    """Leaf when `symbol` is set, internal node otherwise."""

    def __init__(self, symbol=None, left=None, right=None, order=0):
        self.symbol = symbol
        self.left = left
        self.right = right
        self.order = order
        self.code = None
        self.freq_sum = (symbol.freq if symbol is not None else 0) \
            + (left.freq_sum if left is not None else 0) \
            + (right.freq_sum if right is not None else 0)

    def __lt__(self, other):
        # equal sums come out in the order the nodes went in
        return (self.freq_sum, self.order) < (other.freq_sum, other.order)

    def __repr__(self):
        if self.is_leaf():
            return f"HuffmanNode({self.symbol!r})"
        return f"HuffmanNode(sum={self.freq_sum})"

    def is_leaf(self):
        return self.symbol is not None

    def children(self):
        return [child for child in (self.left, self.right) if child is not None]


class HuffmanTree:
    """
    A Huffman tree built from a frequency table.

    Going left is 0, going right is 1. Codes are cached per byte value in a
    256-slot lookup table.
    """

    def __init__(self, table):
        self.root = self.build_tree(table)
        self.lookup = [None] * ALPHABET_SIZE
        self.generate_codes(self.root)
        logger.debug(f"Built tree: {len(table)} leaves, frequency sum {self.root.freq_sum}")

    @staticmethod
    def build_tree(table):
        if len(table) == 0:
            raise TreeBuildError("cannot build a tree from an empty frequency table")

        sequence = itertools.count()
        priority_queue = [HuffmanNode(symbol, order=next(sequence)) for symbol in table]
        heapq.heapify(priority_queue)

        # a lone symbol still needs a one-bit code
        if len(priority_queue) == 1:
            return HuffmanNode(left=heapq.heappop(priority_queue), order=next(sequence))

        while len(priority_queue) > 1:
            left = heapq.heappop(priority_queue)
            right = heapq.heappop(priority_queue)
            heapq.heappush(priority_queue, HuffmanNode(left=left, right=right, order=next(sequence)))

        root = priority_queue[0]
        if root.is_leaf():
            raise TreeBuildError(f"tree generation failed: skipped {root.symbol!r}")
        return root

    def generate_codes(self, node, current_code=""):
        if node.is_leaf():
            node.code = current_code
            self.lookup[node.symbol.index] = node
            return
        if node.left is not None:
            self.generate_codes(node.left, current_code + "0")
        if node.right is not None:
            self.generate_codes(node.right, current_code + "1")

    def code_for(self, symbol):
        """Prefix code for a byte value or a Symbol."""
        index = symbol.index if isinstance(symbol, Symbol) else symbol
        node = self.lookup[index]
        if node is None:
            raise KeyError(f"byte {index} is not part of this tree")
        return node.code

    def codes(self):
        return {node.symbol.index: node.code for node in self.lookup if node is not None}

    def traverse(self):
        """Visit every node depth-first, parents before children."""
        stack = [self.root]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children()))

    def encode(self, data):
        codes = [node.code if node is not None else None for node in self.lookup]
        stream = BitStream()
        for byte in data:
            code = codes[byte]
            if code is None:
                raise KeyError(f"byte {byte} is not part of this tree")
            stream.append_bit_string(code)
        return stream.to_bytes()

    def decode(self, data, byte_offset):
        """Walk the tree bit by bit from `byte_offset` until every counted symbol is emitted."""
        bits = BitStream(data).iter_bits(byte_offset * 8)
        out = ByteVector()
        remaining = self.root.freq_sum

        while remaining > 0:
            node = self.root
            while not node.is_leaf():
                bit = next(bits, None)
                if bit is None:
                    raise CorruptStreamError(
                        f"coded data ended with {remaining} of {self.root.freq_sum} symbols left")
                node = node.right if bit else node.left
                if node is None:
                    raise CorruptStreamError("bit path leads to a missing branch")
            out.append(node.symbol.index)
            remaining -= 1

        return out.to_bytes()
