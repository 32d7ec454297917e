"""
circlereport 'circles' command - List circles and their wards.
"""

import os
import sys

from ..config_loader import load_config
from ..session import ReportSession
from ..cli import _print_warnings, _resolve_config_dir


def cmd_circles(args):
    """Handle the 'circles' subcommand."""
    config_dir = _resolve_config_dir(args)

    try:
        config = load_config(config_dir, args.settings)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    session = ReportSession()
    if os.path.exists(config['_wards_path']):
        session.load_wards(config['_wards_path'])

    if not session.wards_by_circle:
        _print_warnings(config['_warnings'] + session.warnings)
        print("No circles found", file=sys.stderr)
        sys.exit(1)

    for name, wards in session.wards_by_circle.items():
        print(f"{name} ({len(wards)} wards)")
        print(f"  {', '.join(wards) if wards else '(none)'}")

    print(f"\nWards: {', '.join(session.ward_choices())}")
