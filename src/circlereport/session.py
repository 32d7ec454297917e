"""
Report session - owns the loaded hierarchy and complaint records.

The hierarchy is loaded once; the complaint records are replaced wholesale
on every upload. Reports are rebuilt from scratch on every render.
"""

from typing import Dict, List

from .analyzer import ALL, ComplaintReport, build_report
from .csv_parser import parse_csv_text, read_text_file
from .ward_parser import all_wards, load_wards_file


class ReportSession:
    """Holds the state that outlives a single render."""

    def __init__(self, wards_by_circle: Dict[str, List[str]] = None, records: List[dict] = None):
        self.wards_by_circle = dict(wards_by_circle or {})
        self.records = list(records or [])
        self.wards_loaded = wards_by_circle is not None
        self.warnings = []

    def load_wards(self, filepath) -> bool:
        """Load the circle/ward hierarchy from a file, once.

        Later calls are ignored. If the file cannot be read the hierarchy
        stays empty, which leaves the circle and ward filters with nothing
        to match.
        """
        if self.wards_loaded:
            return True
        self.wards_loaded = True

        try:
            self.wards_by_circle = load_wards_file(filepath)
        except (OSError, UnicodeDecodeError) as e:
            self.warnings.append({
                'type': 'warning',
                'source': str(filepath),
                'message': f"Could not load wards file: {e}",
                'suggestion': "Circle and ward filters will have no effect.",
            })
            return False
        return True

    def upload_text(self, text: str) -> int:
        """Replace the complaint records with those parsed from text."""
        self.records = parse_csv_text(text)
        return len(self.records)

    def upload_file(self, filepath) -> bool:
        """Replace the complaint records from a CSV file.

        On a read failure the previous records are kept.
        """
        try:
            text = read_text_file(filepath)
        except (OSError, UnicodeDecodeError) as e:
            self.warnings.append({
                'type': 'warning',
                'source': str(filepath),
                'message': f"Could not read complaint file: {e}",
                'suggestion': "Previously loaded complaints are still in use.",
            })
            return False
        self.upload_text(text)
        return True

    def circle_names(self) -> List[str]:
        return list(self.wards_by_circle)

    def ward_choices(self) -> List[str]:
        return all_wards(self.wards_by_circle)

    def render(self, selected_circle: str = ALL, selected_ward: str = ALL) -> ComplaintReport:
        return build_report(self.records, self.wards_by_circle, selected_circle, selected_ward)
