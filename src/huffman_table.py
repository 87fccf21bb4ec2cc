# filename: huffman_table.py
"""
Frequency tables and their compact binary form.

Data format (bit-packed, MSB first, no alignment between fields):

    header:  [uint9] element count
             [uint5] bits per frequency
             [uint2] padding, always zero
    element: [uint8] symbol index
             [uint?] frequency, `bits per frequency` wide
"""

from loguru import logger

from huffman_buffers import BitStream
from huffman_errors import MalformedTableError, TableOverflowError

logger.disable(__name__)

HEADER_COUNT_BITS = 9
HEADER_FREQ_BITS = 5
HEADER_PAD_BITS = 2
HEADER_BITS = HEADER_COUNT_BITS + HEADER_FREQ_BITS + HEADER_PAD_BITS
ELEMENT_INDEX_BITS = 8

MAX_ELEMENTS = (1 << HEADER_COUNT_BITS) - 1
MAX_FREQ_BITS = 31
ALPHABET_SIZE = 256


class Symbol:
    """A byte value and how often it occurs. Orders by frequency only."""

    __slots__ = ("index", "freq")

    def __init__(self, index, freq):
        self.index = index
        self.freq = freq

    def __lt__(self, other):
        return self.freq < other.freq

    def __eq__(self, other):
        if not isinstance(other, Symbol):
            return NotImplemented
        return self.index == other.index and self.freq == other.freq

    def __hash__(self):
        return hash((self.index, self.freq))

    def __repr__(self):
        return f"Symbol({self.index}, {self.freq})"

    def printable(self):
        return chr(self.index) if 32 <= self.index < 127 else " "


class FrequencyTable:
    """Symbols kept in ascending frequency order. Call sort() after adding."""

    def __init__(self, symbols=None):
        self.symbols = list(symbols) if symbols is not None else []

    def __len__(self):
        return len(self.symbols)

    def __iter__(self):
        return iter(self.symbols)

    def __getitem__(self, index):
        return self.symbols[index]

    def __eq__(self, other):
        if not isinstance(other, FrequencyTable):
            return NotImplemented
        return self.symbols == other.symbols

    def __repr__(self):
        return f"FrequencyTable({self.symbols!r})"

    def add(self, symbol):
        self.symbols.append(symbol)

    def sort(self):
        # list.sort is stable, so equal frequencies keep insertion order
        self.symbols.sort()

    def highest_frequency(self):
        # not symbols[-1]: the table may not have been sorted
        return max(symbol.freq for symbol in self.symbols)

    def total_frequency(self):
        return sum(symbol.freq for symbol in self.symbols)


def analyse(data):
    """Count every byte value in `data` and return the sorted table of those present."""
    counts = [0] * ALPHABET_SIZE
    for byte in bytes(data):
        counts[byte] += 1

    table = FrequencyTable(Symbol(index, freq) for index, freq in enumerate(counts) if freq > 0)
    table.sort()
    return table


def bits_per_frequency(table):
    return max(1, table.highest_frequency().bit_length())


def encode_table(table):
    """Serialize the table to its compact form."""
    count = len(table)
    if count > MAX_ELEMENTS:
        raise TableOverflowError(f"table holds {count} symbols, at most {MAX_ELEMENTS} fit")

    freq_bits = bits_per_frequency(table) if count else 1
    if freq_bits > MAX_FREQ_BITS:
        raise TableOverflowError(f"frequency {table.highest_frequency()} needs {freq_bits} bits")

    stream = BitStream()
    stream.append_bits(count, HEADER_COUNT_BITS)
    stream.append_bits(freq_bits, HEADER_FREQ_BITS)
    stream.append_bits(0, HEADER_PAD_BITS)

    for symbol in table:
        stream.append_bits(symbol.index, ELEMENT_INDEX_BITS)
        stream.append_bits(symbol.freq, freq_bits)

    logger.debug(f"Encoded table: {count} symbols, {freq_bits} bits per frequency, {stream.byte_count()} bytes")
    return stream.to_bytes()


def decode_table(table, raw):
    """
    Rebuild a table from its compact form, appending symbols to `table`.

    Returns the size of the encoded table in bytes, which is where the coded
    payload starts.
    """
    if len(raw) < 2:
        raise MalformedTableError(f"bad table size: {len(raw)} bytes")

    stream = BitStream(raw)
    count = stream.read_bits(0, HEADER_COUNT_BITS)
    freq_bits = stream.read_bits(HEADER_COUNT_BITS, HEADER_FREQ_BITS)

    if freq_bits <= 0 or freq_bits > MAX_FREQ_BITS:
        raise MalformedTableError(f"bad bits per frequency: {freq_bits}")

    element_bits = ELEMENT_INDEX_BITS + freq_bits
    total_bits = HEADER_BITS + count * element_bits
    if total_bits > stream.bit_count():
        raise MalformedTableError(
            f"table declares {count} symbols ({total_bits} bits) but only {stream.bit_count()} bits are present")

    for i in range(count):
        offset = HEADER_BITS + element_bits * i
        index = stream.read_bits(offset, ELEMENT_INDEX_BITS)
        freq = stream.read_bits(offset + ELEMENT_INDEX_BITS, freq_bits)
        table.add(Symbol(index, freq))

    logger.debug(f"Decoded table: {count} symbols, {freq_bits} bits per frequency")
    return (total_bits + 7) // 8
