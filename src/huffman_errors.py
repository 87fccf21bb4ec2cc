# filename: huffman_errors.py


class HuffmanError(Exception):
    """Base class for every failure raised by the codec."""


class MalformedTableError(HuffmanError, ValueError):
    """The serialized frequency table cannot be decoded."""


class TableOverflowError(MalformedTableError):
    """The frequency table does not fit the 9-bit count / 5-bit width header."""


class IndexOutOfRangeError(HuffmanError, IndexError):
    pass


class TreeBuildError(HuffmanError):
    pass


class CorruptStreamError(HuffmanError, ValueError):
    """The coded payload ended early or led to a missing branch."""
