import argparse
import sys
from pathlib import Path

import requests

from repositories import ArtifactError
from utils.fetcher import is_url
from utils.logging import print_header, format_bytes
from workflows.generate import output_uri, run_generation


def build_parser():
    parser = argparse.ArgumentParser(
        description='Create a single HTML file that decompresses its own .m8 payload on load',
        epilog='Example:\n  python main.py index.source.html index.m8.html',
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument('input', help='Source HTML file (or http(s) URL)')
    parser.add_argument('output', help='Self-contained HTML file to write')
    parser.add_argument('--verify', action='store_true', help='Check the generated page reproduces the source markup')
    parser.add_argument('--report', metavar='PATH', help='Also write the size report as JSON')
    return parser


def main(argv=None):
    """Main entry point: generate a self-contained .m8 page."""

    # Parse CLI arguments (missing positionals -> usage + exit status 2)
    args = build_parser().parse_args(argv)

    if not is_url(args.input) and not Path(args.input).is_file():
        print(f"Error: Input file '{args.input}' not found", file=sys.stderr)
        return 1

    print("")
    print_header("Self-Contained .m8 Generator")
    print(f"Input:  {args.input}")
    print(f"Output: {args.output}")
    print("")

    try:
        _, report = run_generation(args.input, args.output, verify=args.verify, report_path=args.report)
    except ArtifactError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except requests.RequestException as e:
        print(f"Error: could not fetch '{args.input}': {e}", file=sys.stderr)
        return 1

    print("✓ Generation complete!")
    print("")
    print("File Sizes:")
    print(f"  Original HTML:      {format_bytes(report.original_size)}")
    print(f"  Compressed .m8:     {format_bytes(report.compressed_size)}")
    print(f"  Self-Contained:     {format_bytes(report.self_contained_size)}")
    print("")
    print("Savings:")
    print(f"  Pure compression:   {report.savings_percent:.1f}%")
    print(f"  Decompressor size:  {format_bytes(report.decompressor_overhead)}")
    print(f"  Net savings:        {report.net_savings_percent:.1f}%")

    if report.verified is not None:
        print("")
        print(f"Round-trip check:     {'passed' if report.verified else 'FAILED'}")
    if args.report:
        print(f"Report written to:    {args.report}")

    print("")
    print("Now open the file in a browser:")
    print(f"  {output_uri(args.output)}")
    print("=" * 60 + "\n")

    if report.verified is False:
        print("Error: generated page does not reproduce the source markup", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
