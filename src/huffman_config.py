# filename: huffman_config.py

import os
import sys

from dotenv import load_dotenv
from loguru import logger

load_dotenv()

LOG_LEVEL = os.getenv("HUFFMAN_LOG_LEVEL", "WARNING")
REPORT_DIR = os.getenv("HUFFMAN_REPORT_DIR", "reports")
GRAPH_WIDTH = int(os.getenv("HUFFMAN_GRAPH_WIDTH", "72"))

# codec modules keep their loguru output disabled until an application opts in
CODEC_MODULES = ("huffman_core", "huffman_service", "huffman_table")


def configure_logging(level=None):
    """Route loguru output to stderr at the given (or configured) level."""
    level = (level or LOG_LEVEL).upper()
    # raises ValueError for an unknown level before any sink is touched
    logger.level(level)
    logger.remove()
    logger.add(sys.stderr, level=level)
    for name in CODEC_MODULES:
        logger.enable(name)
    return level
