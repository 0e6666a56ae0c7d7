"""
Content classifiers: chart-vs-table and chart-data detection.

Everything here is a pure function over already-buffered text or cells.
Non-numeric cells are coerced to ``0`` on every path so that each dataset
always has one value per label.
"""
import csv
import json
import logging
import re
from dataclasses import dataclass
from typing import Any, List, Optional

from .models import ChartData, ChartDataset

logger = logging.getLogger(__name__)

# More than this share of numeric data cells turns a table into a chart.
CHART_TABLE_THRESHOLD = 0.8

CHART_LANGUAGES = ("chart", "csv")

# Leading numeric prefix, the way JavaScript's parseFloat reads it
_NUMBER_RE = re.compile(r'^\s*([+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?))')


@dataclass
class ParsedChart:
    """Chart data recovered from a text block, plus any type/title it declared."""
    data: ChartData
    chart_type: Optional[str] = None
    title: Optional[str] = None


def parse_number(value: Any) -> Optional[float]:
    """
    Read the leading number of *value*.

    ``"12.5%"`` → 12.5, ``"1e3"`` → 1000.0, ``"abc"`` → None. Real numbers are
    returned as floats; booleans are not numbers.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if not isinstance(value, str):
        return None

    match = _NUMBER_RE.match(value)
    if not match:
        return None
    return float(match.group(1).replace("Infinity", "inf"))


def _coerce(value: Any) -> float:
    number = parse_number(value)
    return 0.0 if number is None else number


def _json_object(text: str) -> Optional[dict]:
    stripped = text.strip()
    if not stripped.startswith("{"):
        return None
    try:
        payload = json.loads(stripped)
    except ValueError:
        return None
    return payload if isinstance(payload, dict) else None


def _csv_rows(text: str) -> Optional[List[List[str]]]:
    """
    Rows of *text* if it is CSV-shaped chart data, else None.

    Every non-empty line must have as many fields as the header, the header
    needs at least one column besides the labels, and at least one data cell
    outside the label column must be numeric.
    """
    lines = [line.strip() for line in text.strip().splitlines() if line.strip()]
    if len(lines) < 2:
        return None

    rows = [[cell.strip() for cell in row] for row in csv.reader(lines, skipinitialspace=True)]
    header = rows[0]
    if len(header) < 2:
        return None
    if any(len(row) != len(header) for row in rows[1:]):
        return None
    if not any(parse_number(cell) is not None for row in rows[1:] for cell in row[1:]):
        return None
    return rows


def is_chart_data(text: str) -> bool:
    """True when *text* is a JSON object or CSV-shaped numeric data."""
    if not text or not text.strip():
        return False
    return _json_object(text) is not None or _csv_rows(text) is not None


def parse_csv_chart_data(text: str) -> Optional[ChartData]:
    """
    Parse CSV column-wise: the first column becomes ``labels``, every other
    column a dataset named after its header.
    """
    rows = _csv_rows(text)
    if rows is None:
        return None

    header, body = rows[0], rows[1:]
    return ChartData(
        labels=[row[0] for row in body],
        datasets=[
            ChartDataset(label=header[col], data=[_coerce(row[col]) for row in body])
            for col in range(1, len(header))
        ],
    )


def parse_json_chart_data(text: str) -> Optional[ParsedChart]:
    """
    Parse inline JSON chart data.

    Accepts either ``{"labels": [...], "datasets": [...]}`` or the same
    structure nested under ``"data"``; a top-level ``"type"`` / ``"title"`` is
    carried along.
    """
    payload = _json_object(text)
    if payload is None:
        logger.warning("⚠️ Chart block is not a JSON object")
        return None

    block = payload.get("data") if isinstance(payload.get("data"), dict) else payload
    labels = block.get("labels")
    datasets = block.get("datasets")
    if not isinstance(labels, list) or not isinstance(datasets, list) or not datasets:
        logger.warning("⚠️ Chart JSON needs a 'labels' list and a non-empty 'datasets' list")
        return None

    parsed_sets = []
    for index, dataset in enumerate(datasets):
        if not isinstance(dataset, dict) or not isinstance(dataset.get("data"), list):
            logger.warning(f"⚠️ Chart JSON dataset {index} has no 'data' list")
            return None
        parsed_sets.append(ChartDataset(
            label=str(dataset.get("label", "")),
            data=[_coerce(value) for value in dataset["data"]],
            background_color=dataset.get("backgroundColor"),
            border_color=dataset.get("borderColor"),
            border_width=dataset.get("borderWidth"),
        ))

    chart_type = payload.get("type") or payload.get("chartType")
    title = payload.get("title")
    return ParsedChart(
        data=ChartData(labels=[str(label) for label in labels], datasets=parsed_sets),
        chart_type=str(chart_type) if chart_type else None,
        title=str(title) if title else None,
    )


def parse_chart_data(text: str) -> Optional[ParsedChart]:
    """Parse *text* as JSON or CSV chart data; None (with a warning) on failure."""
    if _json_object(text) is not None:
        return parse_json_chart_data(text)

    data = parse_csv_chart_data(text)
    if data is None:
        logger.warning("⚠️ Could not parse chart data block; dropping it")
        return None
    return ParsedChart(data=data)


def is_chart_table(headers: List[str], rows: List[List[str]]) -> bool:
    """
    Decide whether a Markdown table should render as a chart.

    Needs at least two columns and two data rows, and more than 80% of the
    cells after the first column must be numeric.
    """
    if len(headers) < 2 or len(rows) < 2:
        return False

    cells = [cell for row in rows for cell in row[1:]]
    if not cells:
        return False

    numeric = sum(1 for cell in cells if parse_number(cell) is not None)
    return numeric / len(cells) > CHART_TABLE_THRESHOLD


def chart_data_from_table(headers: List[str], rows: List[List[str]]) -> ChartData:
    """First column → labels, remaining columns → one dataset each."""
    return ChartData(
        labels=[row[0] if row else "" for row in rows],
        datasets=[
            ChartDataset(
                label=headers[col],
                data=[_coerce(row[col]) if col < len(row) else 0.0 for row in rows],
            )
            for col in range(1, len(headers))
        ],
    )
