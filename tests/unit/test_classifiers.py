"""Test chart-vs-table and chart-data detection."""

import pytest

from md2deck.classifiers import (
    chart_data_from_table,
    is_chart_data,
    is_chart_table,
    parse_chart_data,
    parse_csv_chart_data,
    parse_json_chart_data,
    parse_number,
)


@pytest.mark.parametrize("value,expected", [
    ("100", 100.0),
    (" 12.5% ", 12.5),
    ("-3", -3.0),
    ("1e3", 1000.0),
    (".5", 0.5),
    ("42 units", 42.0),
    (7, 7.0),
    ("abc", None),
    ("", None),
    ("$100", None),
    (True, None),
    (None, None),
])
def test_parse_number(value, expected):
    assert parse_number(value) == expected


def test_numeric_table_is_chart():
    headers = ["Month", "Sales", "Profit"]
    rows = [["Jan", "100", "20"], ["Feb", "120", "25"]]

    assert is_chart_table(headers, rows)


def test_status_table_is_not_chart():
    headers = ["Project", "Status", "Completion"]
    rows = [
        ["Alpha", "In progress", "50%"],
        ["Beta", "Done", "100%"],
        ["Gamma", "Blocked", "10%"],
    ]

    assert not is_chart_table(headers, rows)


def test_threshold_is_strict():
    """Exactly 80% numeric is not enough."""
    headers = ["Label", "A", "B", "C", "D", "E"]
    rows = [
        ["x", "1", "2", "3", "4", "n/a"],
        ["y", "1", "2", "3", "4", "n/a"],
    ]

    assert not is_chart_table(headers, rows)


@pytest.mark.parametrize("headers,rows", [
    (["Only"], [["1"], ["2"]]),
    (["Month", "Sales"], [["Jan", "100"]]),
    (["Month", "Sales"], []),
])
def test_too_small_tables_are_not_charts(headers, rows):
    assert not is_chart_table(headers, rows)


def test_chart_data_from_table_coerces_blanks():
    headers = ["Month", "Sales"]
    rows = [["Jan", "100"], ["Feb", "-"], ["Mar"]]

    data = chart_data_from_table(headers, rows)

    assert data.labels == ["Jan", "Feb", "Mar"]
    assert data.datasets[0].label == "Sales"
    assert data.datasets[0].data == [100, 0, 0]


def test_csv_chart_data():
    data = parse_csv_chart_data("Month,Sales,Profit\nJan,100,20\nFeb,120,25")

    assert data.labels == ["Jan", "Feb"]
    assert [ds.label for ds in data.datasets] == ["Sales", "Profit"]
    assert data.datasets[0].data == [100, 120]
    assert data.datasets[1].data == [20, 25]


def test_csv_quoted_labels():
    data = parse_csv_chart_data('City,Population\n"New York, NY",8.3\n"Austin, TX",0.97')

    assert data.labels == ["New York, NY", "Austin, TX"]
    assert data.datasets[0].data == [8.3, 0.97]


def test_csv_non_numeric_cells_become_zero():
    data = parse_csv_chart_data("Month,Sales\nJan,100\nFeb,pending")

    assert data.datasets[0].data == [100, 0]


@pytest.mark.parametrize("text", [
    "Month,Sales\nJan,100\nFeb,120",
    "Month, Sales\n\nJan, 100\n",
    '{"labels": ["a"], "datasets": [{"data": [1]}]}',
])
def test_is_chart_data_accepts(text):
    assert is_chart_data(text)


@pytest.mark.parametrize("text", [
    "",
    "   ",
    "Just a sentence, with a comma",
    "Month,Sales",
    "Month,Sales\nJan,100,extra",
    "Names,Roles\nAnn,Lead\nBo,Dev",
    "single\ncolumn",
    "[1, 2, 3]",
    "{not json",
])
def test_is_chart_data_rejects(text):
    assert not is_chart_data(text)


def test_json_chart_data_top_level():
    parsed = parse_json_chart_data(
        '{"type": "pie", "title": "Share", "labels": ["A", "B"],'
        ' "datasets": [{"label": "Votes", "data": [3, "4"], "backgroundColor": ["#f00", "#0f0"]}]}'
    )

    assert parsed.chart_type == "pie"
    assert parsed.title == "Share"
    assert parsed.data.labels == ["A", "B"]
    assert parsed.data.datasets[0].data == [3, 4]
    assert parsed.data.datasets[0].background_color == ["#f00", "#0f0"]


def test_json_chart_data_nested_under_data():
    parsed = parse_json_chart_data(
        '{"chartType": "line", "data": {"labels": [1, 2], "datasets": [{"label": "x", "data": [5, 6]}]}}'
    )

    assert parsed.chart_type == "line"
    assert parsed.data.labels == ["1", "2"]
    assert parsed.data.datasets[0].data == [5, 6]


@pytest.mark.parametrize("text", [
    '{"labels": ["a"]}',
    '{"labels": ["a"], "datasets": []}',
    '{"labels": ["a"], "datasets": [{"label": "no data"}]}',
    '{"labels": "a", "datasets": [{"data": [1]}]}',
])
def test_json_chart_data_invalid(text):
    assert parse_json_chart_data(text) is None


def test_parse_chart_data_prefers_json():
    parsed = parse_chart_data('{"labels": ["a", "b"], "datasets": [{"label": "s", "data": [1, 2]}]}')

    assert parsed.data.labels == ["a", "b"]


def test_parse_chart_data_falls_back_to_csv():
    parsed = parse_chart_data("Label,Value\nx,1\ny,2")

    assert parsed.chart_type is None
    assert parsed.data.datasets[0].data == [1, 2]


def test_parse_chart_data_garbage():
    assert parse_chart_data("not a chart at all") is None
