"""
Ward hierarchy parser.

Parses the line-oriented circle/ward listing:

    Shahdara North Circle Wards:
    - 221-Dilshad Garden
    - 222-New Seemapuri

into {'Shahdara North': ['221', '222']}. Only the leading ward number is
kept; the name after the dash is discarded. Lines that fit neither shape are
ignored.
"""

import re
from typing import Dict, List

CIRCLE_SUFFIX = ' Circle Wards:'
WARD_PREFIX = '- '

WARD_LINE_PATTERN = re.compile(r'^(\d+)-(.+)$', re.ASCII)


def parse_wards_by_circle(text: str) -> Dict[str, List[str]]:
    """
    Parse circle sections into an ordered circle -> ward id mapping.

    Ward ids keep their source order and duplicates are preserved. A ward
    line before the first circle header has nowhere to go and is skipped.
    Declaring the same circle twice starts its list over.
    """
    circles = {}
    current_circle = ''

    for raw_line in text.split('\n'):
        line = raw_line.strip()
        if not line:
            continue

        if line.endswith(CIRCLE_SUFFIX):
            current_circle = line[:-len(CIRCLE_SUFFIX)]
            circles[current_circle] = []
        elif line.startswith(WARD_PREFIX) and current_circle:
            ward_info = line[len(WARD_PREFIX):].strip()
            match = WARD_LINE_PATTERN.match(ward_info)
            if match:
                circles[current_circle].append(match.group(1))

    return circles


def load_wards_file(filepath) -> Dict[str, List[str]]:
    """Read and parse a hierarchy file. I/O errors propagate."""
    with open(filepath, 'r', encoding='utf-8-sig') as f:
        return parse_wards_by_circle(f.read())


def all_wards(hierarchy: Dict[str, List[str]]) -> List[str]:
    """Distinct ward ids across every circle, in numeric order.

    Ids with the same number ('7', '07') keep their first-seen order.
    """
    seen = dict.fromkeys(ward for wards in hierarchy.values() for ward in wards)
    return sorted(seen, key=int)
