"""
Delimited-text parser for complaint exports.

Turns raw CSV text into a list of complaint records (header -> value dicts).
Fields may be wrapped in double quotes to carry literal commas. Escaped
quotes inside a quoted field ("") are NOT supported: each quote character
simply toggles the quoted state, so "" contributes nothing to the value.

Lines whose field count does not match the header row are dropped without
raising, so a partially broken export still produces a report.
"""

from typing import Dict, List

# Scanner states
UNQUOTED = 'unquoted'
QUOTED = 'quoted'

QUOTE_CHAR = '"'
DELIMITER = ','

# Source column names that are stored under a different record key
RENAMED_COLUMNS = {
    'Phone Number': 'Phone',
}


def split_header(line: str) -> List[str]:
    """Split the header row on commas, trimming each name.

    Header names are never quoted in the exports this tool reads, so the
    header row is split without the quote-aware scanner.
    """
    return [header.strip() for header in line.split(DELIMITER)]


def split_line(line: str) -> List[str]:
    """Split one data line into trimmed field values.

    A single left-to-right pass with two states:
        UNQUOTED - a comma ends the current field
        QUOTED   - a comma is literal field content
    Every quote character switches state and is dropped from the value.
    The last accumulated field is always appended, so a line with N commas
    outside quotes yields N + 1 fields.
    """
    values = []
    current = []
    state = UNQUOTED

    for char in line:
        if char == QUOTE_CHAR:
            state = QUOTED if state == UNQUOTED else UNQUOTED
        elif char == DELIMITER and state == UNQUOTED:
            values.append(''.join(current).strip())
            current = []
        else:
            current.append(char)

    values.append(''.join(current).strip())
    return values


def record_key(header: str) -> str:
    """Return the record key used for a source column."""
    return RENAMED_COLUMNS.get(header, header)


def build_record(headers: List[str], values: List[str]) -> Dict[str, str]:
    """Zip headers to values positionally, applying column renames."""
    record = {}
    for header, value in zip(headers, values):
        record[record_key(header)] = value
    return record


def parse_csv_text(text: str) -> List[Dict[str, str]]:
    """
    Parse CSV text with a header row into complaint records.

    Args:
        text: Raw file contents. Lines are separated by '\\n'; a trailing
              '\\r' is removed by the per-line trim.

    Returns:
        List of record dicts in source order. Empty lines and lines with the
        wrong number of fields are skipped.
    """
    lines = text.split('\n')
    headers = split_header(lines[0])
    records = []

    for raw_line in lines[1:]:
        line = raw_line.strip()
        if not line:
            continue

        values = split_line(line)
        if len(values) != len(headers):
            continue  # Malformed row

        records.append(build_record(headers, values))

    return records


def count_malformed_lines(text: str) -> int:
    """Count non-empty data lines that parse_csv_text would drop."""
    lines = text.split('\n')
    expected = len(split_header(lines[0]))
    dropped = 0
    for raw_line in lines[1:]:
        line = raw_line.strip()
        if line and len(split_line(line)) != expected:
            dropped += 1
    return dropped


def read_text_file(filepath) -> str:
    """Read a text file as UTF-8, dropping a leading byte-order mark."""
    with open(filepath, 'r', encoding='utf-8-sig', newline='') as f:
        return f.read()


def parse_csv_file(filepath) -> List[Dict[str, str]]:
    """Read and parse a complaint CSV file. I/O errors propagate."""
    return parse_csv_text(read_text_file(filepath))
