"""Report export - CSV, Excel and PDF files under REPORTS_DIR."""

import csv
import io
import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Iterable, Sequence

from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

from admissions.core.config import settings
from admissions.db.enums import ExportFormat
from admissions.services import pdf_service
from admissions.utils.dates import ensure_utc, utcnow

logger = logging.getLogger(__name__)

FILE_EXTENSIONS = {
    ExportFormat.CSV: "csv",
    ExportFormat.EXCEL: "xlsx",
    ExportFormat.PDF: "pdf",
}

# Spreadsheet apps evaluate cells starting with these characters as formulas
CSV_DANGEROUS_PREFIXES = ("=", "+", "-", "@")

# Column widths are capped so long text does not produce unusable sheets
MAX_COLUMN_WIDTH = 50


# =============================================================================
# Tabular view of a report payload
# =============================================================================

def _flatten(data: dict[str, Any], prefix: str = "") -> list[tuple[str, Any]]:
    rows: list[tuple[str, Any]] = []
    for key, value in data.items():
        name = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, dict):
            rows.extend(_flatten(value, name))
        else:
            rows.append((name, value))
    return rows


def report_table(data: dict[str, Any]) -> tuple[list[str], list[list[Any]]]:
    """
    Headers and rows for a report.

    Advisor and campaign reports use their detail list; any other payload is
    flattened into key/value rows.
    """
    for key in ("advisors", "campaigns"):
        items = data.get(key)
        if isinstance(items, list) and items:
            headers = list(items[0].keys())
            return headers, [[item.get(h) for h in headers] for item in items]

    return ["key", "value"], [[k, v] for k, v in _flatten(data)]


def _csv_safe(value: str) -> str:
    if value and value.startswith(CSV_DANGEROUS_PREFIXES):
        return f"'{value}"
    return value


def _serialize_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, (dict, list)):
        return json.dumps(value, sort_keys=True, default=str)
    return str(value)


def _write_csv(headers: Sequence[str], rows: Iterable[Sequence[Any]]) -> str:
    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(headers)
    for row in rows:
        writer.writerow([_csv_safe(_serialize_value(value)) for value in row])
    return output.getvalue()


def _excel_value(value: Any) -> Any:
    if value is None or isinstance(value, (int, float)):
        return value
    # openpyxl turns any string starting with "=" into a live formula
    text = value if isinstance(value, str) else _serialize_value(value)
    return _csv_safe(text)


def _write_excel(path: Path, headers: Sequence[str], rows: Iterable[Sequence[Any]], title: str) -> None:
    workbook = Workbook()
    worksheet = workbook.active
    worksheet.title = title[:31]

    worksheet.append(list(headers))
    for cell in worksheet[1]:
        cell.font = Font(bold=True)
    for row in rows:
        worksheet.append([_excel_value(value) for value in row])

    # Auto-size columns from the longest rendered value
    for index, column in enumerate(worksheet.iter_cols(), start=1):
        longest = max((len(str(cell.value)) for cell in column if cell.value is not None), default=0)
        worksheet.column_dimensions[get_column_letter(index)].width = min(longest + 2, MAX_COLUMN_WIDTH)

    workbook.save(path)


# =============================================================================
# Export
# =============================================================================

def report_filename(report_type: str, fmt: ExportFormat, timestamp: datetime) -> str:
    """report_<type>_<ISO timestamp without colons>.<ext>"""
    stamp = ensure_utc(timestamp).isoformat(timespec="microseconds").replace(":", "")
    return f"report_{report_type}_{stamp}.{FILE_EXTENSIONS[fmt]}"


def export_report(
    data: dict[str, Any],
    fmt: ExportFormat | str,
    reports_dir: str | Path | None = None,
    timestamp: datetime | None = None,
) -> str:
    """
    Write a generated report to disk and return the file path.

    Raises:
        ValueError: unknown export format
    """
    fmt = ExportFormat(fmt)
    directory = Path(reports_dir or settings.REPORTS_DIR)
    directory.mkdir(parents=True, exist_ok=True)

    report_type = data.get("type", "report")
    path = directory / report_filename(report_type, fmt, timestamp or utcnow())

    if fmt == ExportFormat.CSV:
        headers, rows = report_table(data)
        path.write_text(_write_csv(headers, rows), encoding="utf-8")
    elif fmt == ExportFormat.EXCEL:
        headers, rows = report_table(data)
        _write_excel(path, headers, rows, title=report_type.capitalize())
    else:
        path.write_bytes(pdf_service.generate_report_pdf(data))

    logger.info("Exported %s report to %s", report_type, path)
    return str(path)
