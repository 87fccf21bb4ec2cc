# filename: huffman_service.py

from loguru import logger

from huffman_core import HuffmanTree
from huffman_errors import MalformedTableError
from huffman_table import FrequencyTable, analyse, decode_table, encode_table

logger.disable(__name__)


def encode(data, reporter=None):
    """Huffman code `data`: serialized frequency table followed by the coded payload."""
    if not data:
        return b""

    table = analyse(data)
    tree = HuffmanTree(table)
    huff_table = encode_table(table)
    huff_codes = tree.encode(data)
    logger.debug(f"Encoded {len(data)} bytes into {len(huff_table)} table + {len(huff_codes)} payload bytes")

    if reporter is not None:
        reporter.report_encoding(table, tree, data, huff_table, huff_codes)

    return huff_table + huff_codes


def decode(data):
    """Reverse encode(): read the table, rebuild the tree and decode the payload."""
    if not data:
        return b""

    table = FrequencyTable()
    byte_offset = decode_table(table, data)
    if len(table) == 0:
        raise MalformedTableError("table declares no symbols for a non-empty stream")
    tree = HuffmanTree(table)
    decoded = tree.decode(data, byte_offset)
    logger.debug(f"Decoded {len(data)} bytes into {len(decoded)} bytes")
    return decoded


class HuffmanService:
    def __init__(self, reporter=None):
        self.reporter = reporter

    def compress(self, data):
        return encode(data, reporter=self.reporter)

    def decompress(self, data):
        return decode(data)
