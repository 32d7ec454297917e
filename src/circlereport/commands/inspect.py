"""
circlereport 'inspect' command - Show CSV structure and sample records.
"""

import os
import sys

from ..colors import C
from ..csv_parser import (
    count_malformed_lines,
    parse_csv_text,
    read_text_file,
    record_key,
    split_header,
)
from ..report import RECORD_COLUMNS

# Record keys the report reads, besides the ones shown in its tables
REQUIRED_KEYS = ('Ward', 'complaintsubtype')


def _column_status(headers):
    """Which report columns the export provides, keyed by record key."""
    present = {record_key(h) for h in headers}
    wanted = list(REQUIRED_KEYS) + [key for _, key in RECORD_COLUMNS if key and key not in REQUIRED_KEYS]
    return [(key, key in present) for key in wanted]


def cmd_inspect(args):
    """Handle the 'inspect' subcommand - show CSV structure and sample records."""

    if not args.file:
        print("Error: No file specified", file=sys.stderr)
        print("\nUsage: circlereport inspect <file.csv>", file=sys.stderr)
        sys.exit(1)

    filepath = os.path.abspath(args.file)

    if not os.path.exists(filepath):
        print(f"Error: File not found: {filepath}", file=sys.stderr)
        sys.exit(1)

    try:
        text = read_text_file(filepath)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: Could not read {filepath}: {e}", file=sys.stderr)
        sys.exit(1)

    headers = split_header(text.split('\n')[0])
    records = parse_csv_text(text)
    dropped = count_malformed_lines(text)

    print(f"Inspecting: {filepath}")
    print("=" * 70)

    print("\nColumns:")
    print("-" * 70)
    for i, header in enumerate(headers):
        key = record_key(header)
        renamed = f" -> {key}" if key != header else ''
        print(f"  [{i:2}] {header}{renamed}")

    print("\nReport columns:")
    print("-" * 70)
    for key, found in _column_status(headers):
        mark = f"{C.GREEN}✓{C.RESET}" if found else f"{C.YELLOW}✗{C.RESET}"
        print(f"  {mark} {key}")

    print(f"\nRecords: {len(records)}")
    if dropped:
        print(f"{C.YELLOW}Dropped {dropped} line(s) whose field count does not match the header ({len(headers)} columns){C.RESET}")

    if records and args.rows > 0:
        print(f"\nSample records (first {min(args.rows, len(records))}):")
        print("-" * 70)
        for record in records[:args.rows]:
            for key, value in record.items():
                print(f"  {key:<28} {value}")
            print()
