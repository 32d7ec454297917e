"""
circlereport CLI - Command-line interface.

Usage:
    circlereport init                          # Create config/ with sample files
    circlereport run                           # Report for every circle and ward
    circlereport run --circle "Shahdara North" --ward 221 --format summary
    circlereport inspect data/complaints.csv   # Check a CSV export before running
    circlereport circles                       # List circles and their wards
"""

import argparse
import os
import sys

from . import __version__
from .colors import C
from .config_loader import find_config_dir

DEFAULT_SETTINGS_YAML = """\
# circlereport settings

title: "C&D Waste Complaint Report"

# Circle/ward listing, relative to this config directory
wards_file: wards_by_circle.txt

# Complaint export, relative to the folder containing config/
# (can be overridden with: circlereport run --data path/to/file.csv)
data_file: data/complaints.csv

output_dir: output
html_filename: complaint_report.html
"""

SAMPLE_WARDS_TXT = """\
Shahdara North Circle Wards:
- 221-Dilshad Garden
- 222-New Seemapuri

Shahdara South Circle Wards:
- 223-Nand Nagri
- 224-Sunder Nagri
"""


def _print_warnings(warnings):
    """Print collected warnings/errors to stderr."""
    for warning in warnings:
        color = C.RED if warning.get('type') == 'error' else C.YELLOW
        label = 'Error' if warning.get('type') == 'error' else 'Warning'
        print(f"{color}{label}:{C.RESET} {warning['message']}", file=sys.stderr)
        if warning.get('suggestion'):
            print(f"  {C.DIM}{warning['suggestion']}{C.RESET}", file=sys.stderr)


def _resolve_config_dir(args):
    """Config directory from the command line, or auto-detected. Exits if missing."""
    if getattr(args, 'config', None):
        config_dir = os.path.abspath(args.config)
    else:
        config_dir = find_config_dir()

    if not config_dir or not os.path.isdir(config_dir):
        print("Error: Config directory not found.", file=sys.stderr)
        print("Looked for: ./config and ./circlereport/config", file=sys.stderr)
        print("\nRun 'circlereport init' to create one.", file=sys.stderr)
        sys.exit(1)

    return config_dir


def init_config(target_dir):
    """Create config/settings.yaml, config/wards_by_circle.txt and data/ under target_dir.

    Existing files are left untouched. Returns the list of files created.
    """
    config_dir = os.path.join(target_dir, 'config')
    data_dir = os.path.join(target_dir, 'data')
    os.makedirs(config_dir, exist_ok=True)
    os.makedirs(data_dir, exist_ok=True)

    created = []
    for filename, content in (('settings.yaml', DEFAULT_SETTINGS_YAML),
                              ('wards_by_circle.txt', SAMPLE_WARDS_TXT)):
        path = os.path.join(config_dir, filename)
        if os.path.exists(path):
            continue
        with open(path, 'w', encoding='utf-8') as f:
            f.write(content)
        created.append(path)
    return created


def cmd_init(args):
    """Handle the 'init' subcommand."""
    target_dir = os.path.abspath(args.dir)
    created = init_config(target_dir)

    for path in created:
        print(f"  {C.GREEN}✓{C.RESET} Created: {os.path.relpath(path, target_dir)}")
    if not created:
        print(f"Nothing to do: {target_dir}/config already set up")
        return

    print()
    print("Next steps:")
    print(f"  1. Edit config/wards_by_circle.txt with your circles and wards")
    print(f"  2. Put your complaint export in data/complaints.csv")
    print(f"  3. Run: circlereport run {os.path.relpath(os.path.join(target_dir, 'config'))}")


def main(argv=None):
    """Main entry point for circlereport CLI."""
    parser = argparse.ArgumentParser(
        prog='circlereport',
        description='Circle-wise reports of municipal waste complaints from a CSV export.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(dest='command', title='commands', metavar='<command>')

    # init subcommand
    init_parser = subparsers.add_parser(
        'init',
        help='Set up a report folder with sample config files'
    )
    init_parser.add_argument(
        'dir',
        nargs='?',
        default='.',
        help='Directory to initialize (default: current directory)'
    )

    # run subcommand
    run_parser = subparsers.add_parser(
        'run',
        help='Parse complaints, filter them by circle and ward, and write the report'
    )
    run_parser.add_argument(
        'config',
        nargs='?',
        help='Path to config directory (default: ./config)'
    )
    run_parser.add_argument(
        '--settings', '-s',
        default='settings.yaml',
        help='Settings file name (default: settings.yaml)'
    )
    run_parser.add_argument(
        '--data', '-d',
        help='Complaint CSV file (overrides data_file in settings)'
    )
    run_parser.add_argument(
        '--circle', '-c',
        default='all',
        help="Circle to report on (default: all)"
    )
    run_parser.add_argument(
        '--ward', '-w',
        default='all',
        help="Ward number to report on (default: all)"
    )
    run_parser.add_argument(
        '--format', '-f',
        choices=['html', 'json', 'markdown', 'summary'],
        default='html',
        help='Output format: html (default), json, markdown, summary (text)'
    )
    run_parser.add_argument(
        '--output', '-o',
        help='Override output file path (html format only)'
    )
    run_parser.add_argument(
        '--quiet', '-q',
        action='store_true',
        help='Minimal output'
    )
    run_parser.add_argument(
        '--no-embedded-html',
        dest='embedded_html',
        action='store_false',
        default=True,
        help='Write the CSS as a separate file instead of embedding it'
    )

    # inspect subcommand
    inspect_parser = subparsers.add_parser(
        'inspect',
        help='Show CSV columns, sample rows and malformed lines',
        description='Show headers and sample records from a complaint export.'
    )
    inspect_parser.add_argument(
        'file',
        nargs='?',
        help='Path to the CSV file to inspect'
    )
    inspect_parser.add_argument(
        '--rows', '-n',
        type=int,
        default=5,
        help='Number of sample records to display (default: 5)'
    )

    # circles subcommand
    circles_parser = subparsers.add_parser(
        'circles',
        help='List circles and their wards from the wards file'
    )
    circles_parser.add_argument(
        'config',
        nargs='?',
        help='Path to config directory (default: ./config)'
    )
    circles_parser.add_argument(
        '--settings', '-s',
        default='settings.yaml',
        help='Settings file name (default: settings.yaml)'
    )

    # version subcommand
    subparsers.add_parser(
        'version',
        help='Show version information'
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == 'init':
        cmd_init(args)
    elif args.command == 'run':
        from .commands.run import cmd_run
        cmd_run(args)
    elif args.command == 'inspect':
        from .commands.inspect import cmd_inspect
        cmd_inspect(args)
    elif args.command == 'circles':
        from .commands.circles import cmd_circles
        cmd_circles(args)
    elif args.command == 'version':
        print(f"circlereport {__version__}")


if __name__ == '__main__':
    main()
