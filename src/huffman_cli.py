#!/usr/bin/env python3
"""
Command-line front end for the Huffman codec.

    huffman encode INPUT OUTPUT
    huffman decode INPUT OUTPUT
    huffman roundtrip INPUT [--encoded-output PATH] [--decoded-output PATH]

Add --stats to print frequency, code and size diagnostics, and --report or
--report-file PATH to write a JSON summary of the run.
"""
import argparse
import json
import sys
import uuid
from datetime import datetime
from pathlib import Path

from loguru import logger

import huffman_config
import huffman_service
from huffman_errors import HuffmanError
from huffman_report import Reporter


def read_file(path):
    return Path(path).read_bytes()


def write_file(path, data, append=False):
    path = Path(path)
    if path.parent != Path("."):
        path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "ab" if append else "wb") as f:
        f.write(data)


def generate_run_id():
    return uuid.uuid4().hex[:8]


def generate_output_path(report_dir=None):
    """Build reports/YYYY-MM-DD/HH-MM-SS/report.json under the report directory."""
    now = datetime.now()
    output_dir = Path(report_dir or huffman_config.REPORT_DIR) / now.strftime("%Y-%m-%d") / now.strftime("%H-%M-%S")
    return output_dir / "report.json"


def parse_arguments(argv=None):
    parser = argparse.ArgumentParser(prog="huffman", description="Huffman compress and decompress files")
    parser.add_argument("--log-level", default=None, help="log level, HUFFMAN_LOG_LEVEL or WARNING by default")
    parser.add_argument("--stats", action="store_true", help="print frequencies, codes and size statistics")
    parser.add_argument(
        "--report",
        action="store_true",
        help="write a JSON report to <report dir>/YYYY-MM-DD/HH-MM-SS/report.json")
    parser.add_argument("--report-file", metavar="PATH", help="write the JSON report to this path instead")

    commands = parser.add_subparsers(dest="command", required=True)

    encode_parser = commands.add_parser("encode", help="compress a file")
    encode_parser.add_argument("input")
    encode_parser.add_argument("output")

    decode_parser = commands.add_parser("decode", help="decompress a file")
    decode_parser.add_argument("input")
    decode_parser.add_argument("output")

    roundtrip_parser = commands.add_parser("roundtrip", help="compress, decompress and compare a file")
    roundtrip_parser.add_argument("input")
    roundtrip_parser.add_argument("--encoded-output", metavar="PATH")
    roundtrip_parser.add_argument("--decoded-output", metavar="PATH")

    return parser.parse_args(argv)


def run_command(args, reporter):
    data = read_file(args.input)
    result = {"command": args.command, "input": str(args.input)}

    if args.command == "encode":
        encoded = huffman_service.encode(data, reporter=reporter)
        write_file(args.output, encoded)
        result.update(input_bytes=len(data), output_bytes=len(encoded), success=True)

    elif args.command == "decode":
        decoded = huffman_service.decode(data)
        write_file(args.output, decoded)
        result.update(input_bytes=len(data), output_bytes=len(decoded), success=True)

    else:
        encoded = huffman_service.encode(data, reporter=reporter)
        decoded = huffman_service.decode(encoded)
        if args.encoded_output:
            write_file(args.encoded_output, encoded)
        if args.decoded_output:
            write_file(args.decoded_output, decoded)
        checker = reporter or Reporter()
        ok = checker.check_equal(data, decoded)
        if not ok:
            logger.error(f"decoded data does not match {args.input}")
        result.update(input_bytes=len(data), output_bytes=len(encoded), success=ok)

    return result


def main(argv=None):
    args = parse_arguments(argv)
    try:
        huffman_config.configure_logging(args.log_level)
    except ValueError as e:
        logger.error(f"bad log level: {e}")
        return 1

    run_id = generate_run_id()
    started_at = datetime.now()
    reporter = Reporter() if args.stats else None

    try:
        result = run_command(args, reporter)
        error_message = None
    except (HuffmanError, OSError) as e:
        logger.error(f"{args.command} failed: {e}")
        result = {"command": args.command, "input": str(args.input), "success": False}
        error_message = str(e)

    finished_at = datetime.now()

    if args.report or args.report_file:
        report = {
            "run_id": run_id,
            "started_at": started_at.isoformat(),
            "finished_at": finished_at.isoformat(),
            "duration_seconds": round((finished_at - started_at).total_seconds(), 6),
            "success": result["success"],
            "error": error_message,
            "result": result,
        }
        output_path = Path(args.report_file) if args.report_file else generate_output_path()
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w") as f:
            json.dump(report, f, indent=2)
        logger.info(f"Report saved to: {output_path}")

    return 0 if result["success"] else 1


if __name__ == "__main__":
    sys.exit(main())
