"""Tests for analyzer module - circle/ward/subtype filtering and aggregation."""

import copy

import pytest

from circlereport.analyzer import (
    ALLOWED_SUBTYPES,
    SUBTYPE_COLORS,
    build_report,
    circles_to_render,
    count_by_subtype,
    extract_ward_number,
    filter_circle_records,
    in_circle_wards,
    is_allowed_subtype,
    matches_selected_circle,
    matches_ward,
)
from circlereport.csv_parser import parse_csv_text


def complaint(ward, subtype='Waste Not Collected', name=''):
    return {'Ward': ward, 'complaintsubtype': subtype, 'Name': name}


@pytest.fixture
def hierarchy():
    return {
        'North': ['1', '2'],
        'South': ['3', '4'],
    }


@pytest.fixture
def records():
    return [
        complaint('1-Alpha', 'Waste Not Collected', 'a'),
        complaint('2-Beta', 'Dhalao Not Clear', 'b'),
        complaint('3-Gamma', 'Illegal Dumping of C&D waste', 'c'),
        complaint('3-Gamma', 'Stray Animals', 'd'),
        complaint('4-Delta', 'Service Not Available', 'e'),
        complaint('9-Nowhere', 'Waste Not Collected', 'f'),
        complaint('', 'Waste Not Collected', 'g'),
        complaint('1-Alpha', 'Dhalao Not Clear', 'h'),
    ]


class TestSubtypeTaxonomy:
    def test_four_subtypes_in_order(self):
        assert ALLOWED_SUBTYPES == (
            'Illegal Dumping of C&D waste',
            'Waste Not Collected',
            'Dhalao Not Clear',
            'Service Not Available',
        )

    def test_every_subtype_has_a_color(self):
        assert set(SUBTYPE_COLORS) == set(ALLOWED_SUBTYPES)


class TestExtractWardNumber:
    def test_number_and_name(self):
        assert extract_ward_number({'Ward': '12-Kumar'}) == '12'

    def test_name_with_dash(self):
        assert extract_ward_number({'Ward': '7-Old-Town'}) == '7'

    def test_no_dash(self):
        assert extract_ward_number({'Ward': '15'}) == '15'

    def test_empty_ward(self):
        assert extract_ward_number({'Ward': ''}) == ''

    def test_missing_ward(self):
        assert extract_ward_number({}) == ''


class TestPredicates:
    def test_matches_ward_all(self):
        assert matches_ward('', 'all')
        assert matches_ward('5', 'all')

    def test_matches_ward_is_string_equality(self):
        assert matches_ward('7', '7')
        assert not matches_ward('07', '7')
        assert not matches_ward('', '7')

    def test_matches_selected_circle(self, hierarchy):
        assert matches_selected_circle('9', hierarchy, 'all')
        assert matches_selected_circle('1', hierarchy, 'North')
        assert not matches_selected_circle('3', hierarchy, 'North')

    def test_matches_unknown_circle(self, hierarchy):
        assert not matches_selected_circle('1', hierarchy, 'East')

    def test_in_circle_wards(self):
        assert in_circle_wards('1', ['1', '2'])
        assert not in_circle_wards('3', ['1', '2'])
        assert not in_circle_wards('1', None)
        assert not in_circle_wards('', [])

    def test_is_allowed_subtype(self):
        assert is_allowed_subtype({'complaintsubtype': 'Dhalao Not Clear'})
        assert not is_allowed_subtype({'complaintsubtype': 'dhalao not clear'})
        assert not is_allowed_subtype({})


class TestCountBySubtype:
    def test_all_circles_all_wards(self, records, hierarchy):
        counts = count_by_subtype(records, hierarchy)
        assert counts == {
            'Illegal Dumping of C&D waste': 1,
            'Waste Not Collected': 3,
            'Dhalao Not Clear': 2,
            'Service Not Available': 1,
        }

    def test_zero_filled(self, hierarchy):
        counts = count_by_subtype([], hierarchy)
        assert counts == {subtype: 0 for subtype in ALLOWED_SUBTYPES}
        assert list(counts) == list(ALLOWED_SUBTYPES)

    def test_selected_circle(self, records, hierarchy):
        counts = count_by_subtype(records, hierarchy, 'South')
        assert counts['Illegal Dumping of C&D waste'] == 1
        assert counts['Service Not Available'] == 1
        assert counts['Waste Not Collected'] == 0

    def test_selected_ward(self, records, hierarchy):
        counts = count_by_subtype(records, hierarchy, 'all', '1')
        assert counts['Waste Not Collected'] == 1
        assert counts['Dhalao Not Clear'] == 1
        assert sum(counts.values()) == 2

    def test_unknown_circle_counts_nothing(self, records, hierarchy):
        assert sum(count_by_subtype(records, hierarchy, 'East').values()) == 0

    def test_sum_matches_filtered_allowed_records(self, records, hierarchy):
        for circle in ('all', 'North', 'South'):
            for ward in ('all', '1', '3', '9', ''):
                counts = count_by_subtype(records, hierarchy, circle, ward)
                expected = 0
                for record in records:
                    ward_number = extract_ward_number(record)
                    if (matches_selected_circle(ward_number, hierarchy, circle)
                            and matches_ward(ward_number, ward)
                            and is_allowed_subtype(record)):
                        expected += 1
                assert sum(counts.values()) == expected
                assert sum(counts.values()) <= len(records)


class TestCirclesToRender:
    def test_all(self, hierarchy):
        assert circles_to_render(hierarchy, 'all') == [('North', ['1', '2']), ('South', ['3', '4'])]

    def test_selected(self, hierarchy):
        assert circles_to_render(hierarchy, 'South') == [('South', ['3', '4'])]

    def test_missing_circle_has_no_wards(self, hierarchy):
        assert circles_to_render(hierarchy, 'East') == [('East', [])]

    def test_empty_hierarchy(self):
        assert circles_to_render({}, 'all') == []


class TestFilterCircleRecords:
    def test_keeps_source_order(self, records):
        names = [r['Name'] for r in filter_circle_records(records, ['1', '2'])]
        assert names == ['a', 'b', 'h']

    def test_excludes_disallowed_subtypes(self, records):
        names = [r['Name'] for r in filter_circle_records(records, ['3'])]
        assert names == ['c']

    def test_ward_filter(self, records):
        names = [r['Name'] for r in filter_circle_records(records, ['1', '2'], '2')]
        assert names == ['b']

    def test_none_wards(self, records):
        assert filter_circle_records(records, None) == []


class TestBuildReport:
    """Tests for build_report."""

    def test_single_row_scenario(self):
        records = parse_csv_text('Ward,complaintsubtype\n12-Kumar,Waste Not Collected')
        report = build_report(records, {'C': ['12']}, 'all', 'all')
        assert report.overall_counts == {
            'Illegal Dumping of C&D waste': 0,
            'Waste Not Collected': 1,
            'Dhalao Not Clear': 0,
            'Service Not Available': 0,
        }
        assert report.total == 1

    def test_overall_counts_ignore_hierarchy_when_all(self):
        """With circle 'all' the overall counts include wards outside every circle."""
        records = [complaint('12-Kumar')]
        report = build_report(records, {}, 'all', 'all')
        assert report.overall_counts['Waste Not Collected'] == 1
        assert report.sections == []
        assert report.total == 0

    def test_all_circles(self, records, hierarchy):
        report = build_report(records, hierarchy)
        assert [s.name for s in report.sections] == ['North', 'South']
        assert [r['Name'] for r in report.sections[0].records] == ['a', 'b', 'h']
        assert [r['Name'] for r in report.sections[1].records] == ['c', 'e']
        assert report.total == 5

    def test_selected_circle(self, records, hierarchy):
        report = build_report(records, hierarchy, 'South')
        assert [s.name for s in report.sections] == ['South']
        assert report.sections[0].wards == ['3', '4']
        assert report.total == 2

    def test_unknown_circle_renders_empty_section(self, records, hierarchy):
        report = build_report(records, hierarchy, 'East')
        assert len(report.sections) == 1
        assert report.sections[0].name == 'East'
        assert report.sections[0].records == []
        assert report.total == 0
        assert sum(report.overall_counts.values()) == 0

    def test_ward_not_in_any_circle(self, records, hierarchy):
        report = build_report(records, hierarchy, 'all', '9')
        assert all(section.count == 0 for section in report.sections)
        assert report.total == 0

    def test_empty_ward_only_matches_all(self, hierarchy):
        records = [complaint('', 'Waste Not Collected')]
        assert sum(build_report(records, hierarchy, 'all', 'all').overall_counts.values()) == 1
        assert sum(build_report(records, hierarchy, 'all', '1').overall_counts.values()) == 0

    def test_leading_zero_ward_is_distinct(self):
        records = [complaint('07-Foo')]
        report = build_report(records, {'A': ['7']}, 'all', '7')
        assert report.total == 0
        assert sum(report.overall_counts.values()) == 0

    def test_ward_listed_under_two_circles(self):
        """A shared ward shows in both sections but counts once overall."""
        hierarchy = {'A': ['1'], 'B': ['1', '2']}
        records = [complaint('1-Shared')]

        report = build_report(records, hierarchy, 'all', 'all')
        assert report.overall_counts['Waste Not Collected'] == 1
        assert [s.count for s in report.sections] == [1, 1]
        assert report.total == 2

        report = build_report(records, hierarchy, 'A', 'all')
        assert report.overall_counts['Waste Not Collected'] == 1
        assert [s.name for s in report.sections] == ['A']
        assert report.total == 1

    def test_selection_recorded(self, records, hierarchy):
        report = build_report(records, hierarchy, 'North', '2')
        assert report.selected_circle == 'North'
        assert report.selected_ward == '2'

    def test_idempotent_and_inputs_untouched(self, records, hierarchy):
        records_before = copy.deepcopy(records)
        hierarchy_before = copy.deepcopy(hierarchy)

        first = build_report(records, hierarchy, 'all', 'all')
        second = build_report(records, hierarchy, 'all', 'all')

        assert first == second
        assert records == records_before
        assert hierarchy == hierarchy_before
