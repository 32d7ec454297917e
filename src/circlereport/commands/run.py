"""
circlereport 'run' command - Build the complaint report for a circle/ward selection.
"""

import os
import sys

from ..analyzer import ALL
from ..config_loader import load_config
from ..report import (
    export_json,
    export_markdown,
    print_report_summary,
    write_report_html,
)
from ..session import ReportSession
from ..cli import C, _print_warnings, _resolve_config_dir


def _check_selection(session, selected_circle, selected_ward):
    """Warnings for a circle or ward that the hierarchy does not know."""
    warnings = []
    if selected_circle != ALL and selected_circle not in session.wards_by_circle:
        known = ', '.join(session.circle_names()) or '(none loaded)'
        warnings.append({
            'type': 'warning',
            'source': '--circle',
            'message': f"Unknown circle '{selected_circle}': its section will be empty",
            'suggestion': f"Known circles: {known}",
        })
    if selected_ward != ALL and selected_ward not in session.ward_choices():
        warnings.append({
            'type': 'warning',
            'source': '--ward',
            'message': f"Ward '{selected_ward}' is not listed under any circle: no complaints will match",
            'suggestion': "Run 'circlereport circles' to see the ward numbers.",
        })
    return warnings


def cmd_run(args):
    """Handle the 'run' subcommand."""
    config_dir = _resolve_config_dir(args)

    try:
        config = load_config(config_dir, args.settings)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    data_path = os.path.abspath(args.data) if args.data else config['_data_path']
    if not data_path:
        print("Error: No complaint file given", file=sys.stderr)
        print(f"\nSet data_file in {config_dir}/{args.settings} or pass --data <file.csv>.", file=sys.stderr)
        sys.exit(1)

    session = ReportSession()
    if os.path.exists(config['_wards_path']):
        session.load_wards(config['_wards_path'])

    if not session.upload_file(data_path):
        _print_warnings(config['_warnings'] + session.warnings)
        print(f"Error: Could not read complaint file: {data_path}", file=sys.stderr)
        sys.exit(1)

    title = config.get('title') or 'C&D Waste Complaint Report'
    quiet = args.quiet or args.format in ('json', 'markdown')

    if not quiet:
        print(f"{C.BOLD}{title}{C.RESET}")
        print(f"Config: {config_dir}/{args.settings}")
        print(f"  Circles: {len(session.wards_by_circle)}")
        print(f"  Complaints: {len(session.records)} records from {data_path}")
        print()

    warnings = config['_warnings'] + session.warnings + _check_selection(session, args.circle, args.ward)
    report = session.render(args.circle, args.ward)

    if args.format == 'json':
        print(export_json(report))
    elif args.format == 'markdown':
        print(export_markdown(report, title=title), end='')
    elif args.format == 'summary':
        print_report_summary(report, title=title)
    else:
        if not quiet:
            print_report_summary(report, title=title)

        if args.output:
            output_path = args.output
        else:
            output_dir = os.path.join(os.path.dirname(config_dir), config['output_dir'])
            os.makedirs(output_dir, exist_ok=True)
            output_path = os.path.join(output_dir, config['html_filename'])

        write_report_html(report, output_path, title=title, embedded_html=args.embedded_html)
        if not quiet:
            print(f"\nHTML report: {output_path}")

    _print_warnings(warnings)
