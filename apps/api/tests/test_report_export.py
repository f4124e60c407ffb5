"""Tests for report file export (CSV, Excel, PDF)."""
import csv
from datetime import datetime, timezone
from pathlib import Path

import pytest
from openpyxl import load_workbook

from admissions.db.enums import ExportFormat
from admissions.services import report_export_service

STAMP = datetime(2026, 3, 5, 14, 7, 9, 123456, tzinfo=timezone.utc)


def _advisors_report():
    return {
        "type": "advisors",
        "period": {"start": "2026-02-01T00:00:00+00:00", "end": "2026-03-01T00:00:00+00:00"},
        "generated_at": STAMP.isoformat(),
        "filters": {},
        "advisors": [
            {"advisor_id": "a1", "name": "=HYPERLINK(\"x\")", "prospects": 4, "enrolled": 1,
             "communications": 9, "conversion_rate": 25.0},
            {"advisor_id": "a2", "name": "Luis Diaz", "prospects": 0, "enrolled": 0,
             "communications": 0, "conversion_rate": 0},
        ],
    }


def test_report_filename_format():
    name = report_export_service.report_filename("executive", ExportFormat.EXCEL, STAMP)
    assert name == "report_executive_2026-03-05T140709.123456+0000.xlsx"
    assert ":" not in name


def test_csv_export_uses_detail_rows_and_guards_formulas(tmp_path):
    path = report_export_service.export_report(
        _advisors_report(), "csv", reports_dir=tmp_path, timestamp=STAMP
    )
    assert Path(path).name.startswith("report_advisors_")
    assert path.endswith(".csv")

    with open(path, newline="", encoding="utf-8") as f:
        rows = list(csv.reader(f))
    assert rows[0] == ["advisor_id", "name", "prospects", "enrolled", "communications", "conversion_rate"]
    assert rows[1][1] == "'=HYPERLINK(\"x\")"
    assert rows[2][1] == "Luis Diaz"


def test_csv_export_flattens_summary_reports(tmp_path):
    data = {
        "type": "executive",
        "period": {"start": "2026-02-01", "end": "2026-03-01"},
        "summary": {"total_prospects": 3, "roi": -12.5},
    }
    path = report_export_service.export_report(data, ExportFormat.CSV, reports_dir=tmp_path)

    with open(path, newline="", encoding="utf-8") as f:
        rows = list(csv.reader(f))
    assert rows[0] == ["key", "value"]
    assert ["period.start", "2026-02-01"] in rows
    assert ["summary.total_prospects", "3"] in rows
    # Negative numbers are prefixed too
    assert ["summary.roi", "'-12.5"] in rows


def test_excel_export(tmp_path):
    path = report_export_service.export_report(
        _advisors_report(), "excel", reports_dir=tmp_path, timestamp=STAMP
    )
    assert path.endswith(".xlsx")

    sheet = load_workbook(path).active
    assert sheet.title == "Advisors"
    assert sheet["A1"].value == "advisor_id"
    assert sheet["A1"].font.bold
    assert sheet["C2"].value == 4
    assert sheet.max_row == 3


def test_pdf_export(tmp_path):
    path = report_export_service.export_report(
        _advisors_report(), "pdf", reports_dir=tmp_path, timestamp=STAMP
    )
    assert path.endswith(".pdf")
    assert Path(path).read_bytes()[:4] == b"%PDF"


def test_unknown_format_rejected(tmp_path):
    with pytest.raises(ValueError):
        report_export_service.export_report(_advisors_report(), "docx", reports_dir=tmp_path)


def test_excel_export_keeps_formulas_inert(tmp_path):
    path = report_export_service.export_report(
        _advisors_report(), "excel", reports_dir=tmp_path, timestamp=STAMP
    )

    sheet = load_workbook(path).active
    cell = sheet["B2"]
    assert cell.data_type == "s"
    assert cell.value == "'=HYPERLINK(\"x\")"
    assert sheet["B3"].value == "Luis Diaz"
