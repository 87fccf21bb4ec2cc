# filename: huffman_report.py
"""Human-readable diagnostics for an encoding run, written through loguru."""

from loguru import logger

import huffman_config


class Reporter:
    def __init__(self, graph_width=None, sink=None):
        self.graph_width = graph_width or huffman_config.GRAPH_WIDTH
        # sink takes one line of text; defaults to the logger
        self.sink = sink or logger.info

    def report_encoding(self, table, tree, data, huff_table, huff_codes):
        self.print_frequencies(table)
        self.print_tree(tree)
        self.print_codes(tree)
        self.print_size_info(data, huff_table, huff_codes)

    def print_frequencies(self, table):
        if len(table) == 0:
            return
        divider = max(1, max(symbol.freq for symbol in table) // self.graph_width)
        self.sink("Frequencies:")
        for symbol in table:
            bar = "|" * (symbol.freq // divider)
            self.sink(f"{symbol.index:>3} ({symbol.printable()}): {symbol.freq:>8} {bar}")

    def print_tree(self, tree):
        """One line per node, indented two spaces per level below the root."""
        self.sink("Tree:")
        stack = [(tree.root, 0)]
        while stack:
            node, depth = stack.pop()
            desc = f"{node.freq_sum}"
            if node.is_leaf():
                desc += f" ({node.symbol.index})"
            self.sink("  " * depth + "+ " + desc)
            stack.extend((child, depth + 1) for child in reversed(node.children()))

    def print_codes(self, tree):
        leaves = sorted((node for node in tree.traverse() if node.is_leaf()), key=lambda node: len(node.code))
        self.sink("Codes:")
        for node in leaves:
            self.sink(f"{node.symbol.index:>3} ({node.symbol.printable()}): {node.code}")

    def print_size_info(self, data, huff_table, huff_codes):
        stats = size_info(data, huff_table, huff_codes)
        self.sink("Data sizes (bytes):")
        self.sink(f"Original:    {stats['original']}")
        self.sink(f"Coded:       {stats['coded']}")
        self.sink(f"Table:       {stats['table']}")
        self.sink(f"Total:       {stats['total']}")
        self.sink(f"Size factor: {stats['size_percent']}%")
        return stats

    def check_equal(self, data, decoded, max_mismatches=10):
        """Compare original and decoded bytes; return True when identical."""
        mismatches = [i for i, (a, b) in enumerate(zip(data, decoded)) if a != b]
        for i in mismatches[:max_mismatches]:
            self.sink(f"Check failed at byte #{i}")
        if len(mismatches) > max_mismatches:
            self.sink(f"... and {len(mismatches) - max_mismatches} more mismatched bytes")
        if len(data) != len(decoded):
            self.sink(f"Check failed: size mismatch ({len(data)} != {len(decoded)})")

        ok = not mismatches and len(data) == len(decoded)
        if ok:
            self.sink("Check OK")
        return ok


def size_info(data, huff_table, huff_codes):
    total = len(huff_table) + len(huff_codes)
    ratio = total / len(data) if data else 0.0
    return {
        "original": len(data),
        "coded": len(huff_codes),
        "table": len(huff_table),
        "total": total,
        "size_percent": int(ratio * 100 + 0.5),
    }
