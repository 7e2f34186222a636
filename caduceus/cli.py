"""Command-line entry point."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from typing import TextIO

from caduceus.models import ScrapeArgs
from caduceus.scrape import run_scrape

SCRAPE_USAGE = "-i <IPs/CIDRs or File> "
MIN_CONCURRENCY = 100


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the scanner."""
    parser = argparse.ArgumentParser(
        prog="caduceus",
        description="Collect domain names from TLS certificates served by hosts and networks.",
        add_help=False,
        allow_abbrev=False,
    )
    parser.add_argument("-c", dest="concurrency", type=int, default=100,
                        help="How many workers run concurrently")
    parser.add_argument("-p", dest="port_list", default="443",
                        help="TLS ports to check for certificates")
    parser.add_argument("-t", dest="timeout", type=int, default=4,
                        help="Timeout for TLS handshake")
    parser.add_argument("-i", dest="input", default="NONE",
                        help="Either IPs & CIDRs separated by commas, "
                             "or a file with IPs/CIDRs on each line")
    parser.add_argument("-debug", "--debug", dest="debug", action="store_true",
                        help="Add this flag if you want to see failures/timeouts")
    parser.add_argument("-h", "--help", dest="help", action="store_true",
                        help="Show the program usage message")
    parser.add_argument("-j", dest="json_output", action="store_true",
                        help="print cert data as jsonl")
    parser.add_argument("-wc", "--wc", dest="print_wildcards", action="store_true",
                        help="print wildcards to stdout")
    return parser


def parse_args(argv: Sequence[str] | None = None, stdin: TextIO | None = None) -> ScrapeArgs:
    """Turn command-line arguments into ScrapeArgs, reading targets from stdin when -i is absent."""
    namespace = build_parser().parse_args(argv)
    args = ScrapeArgs(
        concurrency=max(namespace.concurrency, MIN_CONCURRENCY),
        port_list=namespace.port_list,
        timeout=namespace.timeout,
        input=namespace.input,
        debug=namespace.debug,
        help=namespace.help,
        json_output=namespace.json_output,
        print_wildcards=namespace.print_wildcards,
    )
    if args.help:
        return args
    if args.input == "NONE":
        source = sys.stdin if stdin is None else stdin
        entries = [line.rstrip("\r\n") for line in source]
        args.input = ",".join(entry for entry in entries if entry)
    args.ports = args.port_list.split(",")
    return args


def main(argv: Sequence[str] | None = None) -> int:
    """Run the scanner; return the process exit status."""
    try:
        args = parse_args(argv, sys.stdin)
    except (OSError, UnicodeDecodeError) as exc:
        print(f"Error reading from stdin: {exc}", file=sys.stderr)
        return 1

    if args.help:
        print(SCRAPE_USAGE)
        print(build_parser().format_help())
        return 0

    try:
        run_scrape(args)
    except KeyboardInterrupt:
        return 130
    except ValueError as exc:
        print(exc, file=sys.stderr)
        return 2
    except OSError as exc:
        print(exc, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())