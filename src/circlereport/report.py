"""
Report Generation - Render complaint reports as HTML, JSON, Markdown or text.

The HTML report is assembled from the complaint_report.html/.css templates
shipped next to this module.
"""

import html
import json
import re
import sys
from datetime import datetime
from pathlib import Path

from .analyzer import ALLOWED_SUBTYPES, SUBTYPE_COLORS

DEFAULT_TITLE = 'C&D Waste Complaint Report'

# (column heading, record key); Sr No is the 1-based row number
RECORD_COLUMNS = [
    ('Sr No', None),
    ('Name', 'Name'),
    ('Phone', 'Phone'),
    ('Ward', 'Ward'),
    ('Status', 'Status'),
    ('Complainttype', 'Complainttype'),
    ('complaintsubtype', 'complaintsubtype'),
    ('Complaint Registered Date', 'Complaint Registered Date'),
    ('Complaint Detail', 'Complaint Detail'),
]


def get_template_dir():
    """Get the directory containing template files.

    When running as a PyInstaller bundle, files are in sys._MEIPASS/circlereport/.
    Otherwise, they're in the same directory as this module.
    """
    if getattr(sys, 'frozen', False) and hasattr(sys, '_MEIPASS'):
        return Path(sys._MEIPASS) / 'circlereport'
    return Path(__file__).parent


# ============================================================================
# SHARED HELPERS
# ============================================================================

def format_prepared_at(when=None):
    """The 'Report prepared on' line for a timestamp (default: now)."""
    when = when or datetime.now()
    return f"Report prepared on: {when:%d/%m/%Y} at {when:%H:%M:%S}"


def describe_selection(report):
    circle = 'All circles' if report.selected_circle == 'all' else f"{report.selected_circle} Circle"
    ward = 'All wards' if report.selected_ward == 'all' else f"Ward {report.selected_ward}"
    return f"{circle} / {ward}"


def no_data_message(circle_name):
    return f"No relevant complaints found for {circle_name} Circle with the specified subtypes and ward."


def record_row(record, index):
    """Cell values for one complaint row. Missing fields render blank."""
    row = []
    for heading, key in RECORD_COLUMNS:
        if key is None:
            row.append(str(index + 1))
        else:
            row.append(record.get(key) or '')
    return row


def subtype_css_class(subtype):
    """CSS class for a subtype ('Dhalao Not Clear' -> 'subtype-DhalaoNotClear-color')."""
    return f"subtype-{re.sub(r'[^a-zA-Z0-9]', '', subtype)}-color"


def subtype_color_css():
    """CSS rules tinting each subtype's count cell with its display color."""
    rules = []
    for subtype in ALLOWED_SUBTYPES:
        rules.append(f".{subtype_css_class(subtype)} {{ background-color: {SUBTYPE_COLORS[subtype]}; }}")
    return '\n'.join(rules)


# ============================================================================
# HTML REPORT
# ============================================================================

def _render_overall_counts_html(report):
    esc = html.escape
    header_cells = ''.join(f'<th>{esc(subtype)}</th>' for subtype in ALLOWED_SUBTYPES)
    count_cells = ''.join(
        f'<td class="{subtype_css_class(subtype)}">{report.overall_counts.get(subtype, 0)}</td>'
        for subtype in ALLOWED_SUBTYPES
    )
    return (
        '<div class="overall-complaint-counts">'
        '<h3>Overall Complaint Counts by Type:</h3>'
        f'<table><thead><tr>{header_cells}</tr></thead>'
        f'<tbody><tr>{count_cells}</tr></tbody></table>'
        '</div>'
    )


def _render_section_html(section):
    esc = html.escape
    parts = ['<div class="circle-section">', f'<h2>{esc(section.name)} Circle Complaints</h2>']

    if section.records:
        header_cells = ''.join(f'<th>{esc(heading)}</th>' for heading, _ in RECORD_COLUMNS)
        parts.append(f'<table><thead><tr>{header_cells}</tr></thead><tbody>')
        for i, record in enumerate(section.records):
            cells = ''.join(f'<td>{esc(value)}</td>' for value in record_row(record, i))
            parts.append(f'<tr>{cells}</tr>')
        parts.append('</tbody></table>')
    else:
        parts.append(f'<p class="no-data">{esc(no_data_message(section.name))}</p>')

    parts.append('</div>')
    return '\n'.join(parts)


def render_report_body(report):
    """HTML for the overall counts table followed by every circle section."""
    blocks = [_render_overall_counts_html(report)]
    blocks.extend(_render_section_html(section) for section in report.sections)
    return '\n'.join(blocks)


def write_report_html(report, filepath, title=DEFAULT_TITLE, prepared_at=None, embedded_html=True):
    """Write the report to an HTML file.

    Args:
        report: ComplaintReport to render
        filepath: Output file path
        title: Page and heading title
        prepared_at: Timestamp for the 'prepared on' line (default: now)
        embedded_html: If True (default), embed CSS inline. If False, write
            complaint_report.css next to the HTML file and link to it.
    """
    template_dir = get_template_dir()
    html_template = (template_dir / 'complaint_report.html').read_text(encoding='utf-8')
    css_content = (template_dir / 'complaint_report.css').read_text(encoding='utf-8')
    css_content = f"{css_content}\n{subtype_color_css()}\n"

    if embedded_html:
        final_html = html_template.replace('/* CSS_PLACEHOLDER */', css_content)
    else:
        output_dir = Path(filepath).parent
        (output_dir / 'complaint_report.css').write_text(css_content, encoding='utf-8')
        final_html = html_template.replace(
            '<style>/* CSS_PLACEHOLDER */</style>',
            '<link rel="stylesheet" href="complaint_report.css">'
        )

    final_html = final_html.replace(
        '/* TITLE_PLACEHOLDER */', html.escape(title)
    ).replace(
        '/* PREPARED_PLACEHOLDER */', html.escape(format_prepared_at(prepared_at))
    ).replace(
        '/* SELECTION_PLACEHOLDER */', html.escape(describe_selection(report))
    ).replace(
        '/* TOTAL_PLACEHOLDER */', str(report.total)
    ).replace(
        '/* REPORT_PLACEHOLDER */', render_report_body(report)
    )

    Path(filepath).write_text(final_html, encoding='utf-8')


# ============================================================================
# JSON / MARKDOWN / TEXT
# ============================================================================

def report_to_dict(report):
    return {
        'selectedCircle': report.selected_circle,
        'selectedWard': report.selected_ward,
        'overallCounts': {subtype: report.overall_counts.get(subtype, 0) for subtype in ALLOWED_SUBTYPES},
        'circles': [
            {
                'name': section.name,
                'wards': section.wards,
                'count': section.count,
                'complaints': section.records,
            }
            for section in report.sections
        ],
        'total': report.total,
    }


def export_json(report):
    """Export the report as a JSON string."""
    return json.dumps(report_to_dict(report), indent=2, ensure_ascii=False)


def _md_cell(value):
    return str(value).replace('|', '\\|').replace('\n', ' ')


def export_markdown(report, title=DEFAULT_TITLE, prepared_at=None):
    """Export the report as Markdown."""
    lines = [f"# {title}", '', format_prepared_at(prepared_at), '', describe_selection(report), '']

    lines.append('## Overall Complaint Counts by Type')
    lines.append('')
    lines.append('| ' + ' | '.join(_md_cell(s) for s in ALLOWED_SUBTYPES) + ' |')
    lines.append('|' + '---|' * len(ALLOWED_SUBTYPES))
    lines.append('| ' + ' | '.join(str(report.overall_counts.get(s, 0)) for s in ALLOWED_SUBTYPES) + ' |')
    lines.append('')

    for section in report.sections:
        lines.append(f"## {section.name} Circle Complaints")
        lines.append('')
        if not section.records:
            lines.append(no_data_message(section.name))
            lines.append('')
            continue
        lines.append('| ' + ' | '.join(heading for heading, _ in RECORD_COLUMNS) + ' |')
        lines.append('|' + '---|' * len(RECORD_COLUMNS))
        for i, record in enumerate(section.records):
            lines.append('| ' + ' | '.join(_md_cell(v) for v in record_row(record, i)) + ' |')
        lines.append('')

    lines.append(f"**Total complaints: {report.total}**")
    return '\n'.join(lines) + '\n'


def print_report_summary(report, title=DEFAULT_TITLE):
    """Print a plain-text summary of the report."""
    print("=" * 70)
    print(title.upper())
    print(describe_selection(report))
    print("=" * 70)

    print("\nOVERALL COUNTS BY TYPE")
    print("-" * 50)
    for subtype in ALLOWED_SUBTYPES:
        print(f"  {subtype:<32} {report.overall_counts.get(subtype, 0):>6}")

    print("\nBY CIRCLE")
    print("-" * 50)
    for section in report.sections:
        print(f"  {section.name:<32} {section.count:>6}")
        if not section.records:
            print(f"    {no_data_message(section.name)}")

    print("-" * 50)
    print(f"  {'TOTAL':<32} {report.total:>6}")
