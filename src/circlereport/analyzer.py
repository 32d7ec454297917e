"""
Complaint Analyzer - Filtering and aggregation logic.

Filters parsed complaint records by circle, ward and complaint subtype, and
groups them into per-circle sections for the report.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

ALL = 'all'

# Complaint subtypes that appear in reports, in display order
ALLOWED_SUBTYPES = (
    'Illegal Dumping of C&D waste',
    'Waste Not Collected',
    'Dhalao Not Clear',
    'Service Not Available',
)

SUBTYPE_COLORS = {
    'Illegal Dumping of C&D waste': '#FF6347',  # Tomato
    'Waste Not Collected': '#4682B4',           # Steel Blue
    'Dhalao Not Clear': '#32CD32',              # Lime Green
    'Service Not Available': '#FFD700',         # Gold
}

WARD_FIELD = 'Ward'
SUBTYPE_FIELD = 'complaintsubtype'


@dataclass
class CircleSection:
    """Complaints belonging to one circle after filtering."""
    name: str
    wards: List[str]
    records: List[dict] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.records)


@dataclass
class ComplaintReport:
    """Everything needed to render one report."""
    selected_circle: str
    selected_ward: str
    overall_counts: Dict[str, int]
    sections: List[CircleSection]

    @property
    def total(self) -> int:
        """Complaints shown across all circle sections."""
        return sum(section.count for section in self.sections)


# ============================================================================
# PREDICATES
# ============================================================================

def extract_ward_number(record: dict) -> str:
    """Ward number from a record's 'Ward' field ('12-Kumar' -> '12').

    Returns '' when the field is missing or empty.
    """
    ward = record.get(WARD_FIELD)
    if not ward:
        return ''
    return ward.split('-')[0]


def matches_ward(ward_number: str, selected_ward: str) -> bool:
    """Ward filter: 'all', or exact string match ('07' != '7')."""
    return selected_ward == ALL or ward_number == selected_ward


def matches_selected_circle(ward_number: str, hierarchy: Dict[str, List[str]],
                            selected_circle: str) -> bool:
    """Circle filter for the overall counts.

    Looks up the selected circle by name; an unknown circle matches nothing.
    """
    if selected_circle == ALL:
        return True
    circle_wards = hierarchy.get(selected_circle)
    return bool(circle_wards) and ward_number in circle_wards


def in_circle_wards(ward_number: str, circle_wards: Optional[List[str]]) -> bool:
    """Circle filter for a circle section: membership in that circle's wards."""
    return ward_number in (circle_wards or [])


def is_allowed_subtype(record: dict) -> bool:
    return record.get(SUBTYPE_FIELD) in ALLOWED_SUBTYPES


# ============================================================================
# AGGREGATION
# ============================================================================

def count_by_subtype(records: List[dict], hierarchy: Dict[str, List[str]],
                     selected_circle: str = ALL, selected_ward: str = ALL) -> Dict[str, int]:
    """
    Count complaints per allowed subtype for the current selection.

    Every allowed subtype is present in the result, with 0 if nothing matched.
    """
    counts = {subtype: 0 for subtype in ALLOWED_SUBTYPES}

    for record in records:
        ward_number = extract_ward_number(record)
        if not matches_selected_circle(ward_number, hierarchy, selected_circle):
            continue
        if not is_allowed_subtype(record):
            continue
        if not matches_ward(ward_number, selected_ward):
            continue
        counts[record[SUBTYPE_FIELD]] += 1

    return counts


def circles_to_render(hierarchy: Dict[str, List[str]],
                      selected_circle: str = ALL) -> List[Tuple[str, List[str]]]:
    """Circles shown in the report, paired with their ward ids.

    A selected circle missing from the hierarchy is still shown, with no wards.
    """
    if selected_circle == ALL:
        return list(hierarchy.items())
    return [(selected_circle, hierarchy.get(selected_circle) or [])]


def filter_circle_records(records: List[dict], circle_wards: Optional[List[str]],
                          selected_ward: str = ALL) -> List[dict]:
    """Records in the given wards with an allowed subtype, in source order."""
    matched = []
    for record in records:
        ward_number = extract_ward_number(record)
        if (in_circle_wards(ward_number, circle_wards)
                and is_allowed_subtype(record)
                and matches_ward(ward_number, selected_ward)):
            matched.append(record)
    return matched


def build_report(records: List[dict], hierarchy: Dict[str, List[str]],
                 selected_circle: str = ALL, selected_ward: str = ALL) -> ComplaintReport:
    """
    Build the report for one circle/ward selection.

    The overall counts and the circle sections use separate circle filters:
    the counts test the selected circle's ward list by name, while each
    section tests membership in its own circle's ward list. When a ward is
    listed under several circles, its complaints appear in every one of those
    sections (and in the total) but only once in the overall counts.

    Args:
        records: Parsed complaint records
        hierarchy: Circle name -> ward ids
        selected_circle: Circle name or 'all'
        selected_ward: Ward id or 'all'

    Returns:
        ComplaintReport. Inputs are not modified.
    """
    overall_counts = count_by_subtype(records, hierarchy, selected_circle, selected_ward)

    sections = []
    for circle_name, circle_wards in circles_to_render(hierarchy, selected_circle):
        sections.append(CircleSection(
            name=circle_name,
            wards=list(circle_wards),
            records=filter_circle_records(records, circle_wards, selected_ward),
        ))

    return ComplaintReport(
        selected_circle=selected_circle,
        selected_ward=selected_ward,
        overall_counts=overall_counts,
        sections=sections,
    )
