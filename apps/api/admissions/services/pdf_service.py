"""
PDF Report Generation Service.

Renders generated report payloads as text-and-table PDFs with reportlab.
"""

import io
from typing import Any

from reportlab.lib import colors
from reportlab.lib.pagesizes import letter
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

REPORT_TITLES = {
    "executive": "Executive Report",
    "advisors": "Advisor Performance Report",
    "campaigns": "Campaign Performance Report",
    "conversions": "Conversion Report",
}

HEADER_COLOR = colors.HexColor("#3b82f6")
STRIPE_COLOR = colors.HexColor("#eff6ff")
GRID_COLOR = colors.HexColor("#e2e8f0")


def _styles() -> dict[str, ParagraphStyle]:
    styles = getSampleStyleSheet()
    return {
        "title": ParagraphStyle(
            "ReportTitle",
            parent=styles["Heading1"],
            fontSize=20,
            spaceAfter=12,
            textColor=colors.HexColor("#1e293b"),
        ),
        "heading": ParagraphStyle(
            "ReportHeading",
            parent=styles["Heading2"],
            fontSize=13,
            spaceAfter=8,
            spaceBefore=14,
            textColor=colors.HexColor("#334155"),
        ),
        "subheading": ParagraphStyle(
            "ReportSubHeading",
            parent=styles["Normal"],
            fontSize=10,
            textColor=colors.HexColor("#64748b"),
            spaceAfter=8,
        ),
        "normal": styles["Normal"],
    }


def _table(rows: list[list[Any]]) -> Table:
    table = Table([[str(cell) for cell in row] for row in rows], repeatRows=1)
    table.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, 0), HEADER_COLOR),
                ("TEXTCOLOR", (0, 0), (-1, 0), colors.whitesmoke),
                ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                ("FONTSIZE", (0, 0), (-1, 0), 9),
                ("FONTSIZE", (0, 1), (-1, -1), 8),
                ("ALIGN", (1, 0), (-1, -1), "CENTER"),
                ("GRID", (0, 0), (-1, -1), 0.5, GRID_COLOR),
                ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, STRIPE_COLOR]),
                ("TOPPADDING", (0, 0), (-1, -1), 5),
                ("BOTTOMPADDING", (0, 0), (-1, -1), 5),
            ]
        )
    )
    return table


def _counts_table(counts: dict[str, int], label: str) -> Table:
    rows = [[label, "Count"]]
    rows.extend([key, value] for key, value in counts.items())
    return _table(rows)


# =============================================================================
# Type-specific bodies
# =============================================================================

def _executive_body(data: dict, styles: dict) -> list:
    summary = data.get("summary", {})
    elements = [Paragraph("Key Metrics", styles["heading"])]
    elements.append(_table([
        ["Metric", "Value"],
        ["Total prospects", summary.get("total_prospects", 0)],
        ["Enrolled", summary.get("enrolled", 0)],
        ["Conversion rate", f"{summary.get('conversion_rate', 0):.2f}%"],
        ["Revenue", f"{summary.get('revenue', 0):,.2f}"],
        ["Campaign spend", f"{summary.get('spend', 0):,.2f}"],
        ["ROI", f"{summary.get('roi', 0):.2f}%"],
    ]))
    if data.get("by_status"):
        elements.append(Paragraph("Prospects by Status", styles["heading"]))
        elements.append(_counts_table(data["by_status"], "Status"))
    if data.get("by_origin"):
        elements.append(Paragraph("Prospects by Origin", styles["heading"]))
        elements.append(_counts_table(data["by_origin"], "Origin"))
    return elements


def _advisors_body(data: dict, styles: dict) -> list:
    advisors = data.get("advisors", [])
    if not advisors:
        return [Paragraph("No advisors found.", styles["normal"])]
    rows = [["Advisor", "Prospects", "Enrolled", "Communications", "Conversion"]]
    for a in advisors:
        rows.append([
            a["name"],
            a["prospects"],
            a["enrolled"],
            a["communications"],
            f"{a['conversion_rate']:.2f}%",
        ])
    return [Paragraph("Advisors", styles["heading"]), _table(rows)]


def _campaigns_body(data: dict, styles: dict) -> list:
    elements = []
    campaigns = data.get("campaigns", [])
    if campaigns:
        rows = [["Campaign", "Channel", "Spent", "Leads", "Enrolled", "CPL", "ROI"]]
        for c in campaigns:
            rows.append([
                c["name"][:30],
                c["channel"],
                f"{c['spent']:,.2f}",
                c["leads"],
                c["enrollments"],
                f"{c['cost_per_lead']:,.2f}",
                f"{c['roi']:.2f}%",
            ])
        elements.extend([Paragraph("Campaigns", styles["heading"]), _table(rows)])
    else:
        elements.append(Paragraph("No campaigns found.", styles["normal"]))

    totals = data.get("totals", {})
    if totals:
        elements.append(Paragraph("Totals", styles["heading"]))
        elements.append(_table([["Metric", "Value"]] + [[k, v] for k, v in totals.items()]))
    return elements


def _conversions_body(data: dict, styles: dict) -> list:
    elements = [
        Paragraph(
            f"Overall conversion rate: {data.get('conversion_rate', 0):.2f}%",
            styles["normal"],
        ),
        Paragraph("Funnel", styles["heading"]),
    ]
    rows = [["Stage", "Prospects"]]
    rows.extend([stage["status"], stage["count"]] for stage in data.get("funnel", []))
    elements.append(_table(rows))

    by_origin = data.get("by_origin", [])
    if by_origin:
        origin_rows = [["Origin", "Prospects", "Enrolled", "Conversion"]]
        for o in by_origin:
            origin_rows.append(
                [o["origin"], o["total"], o["enrolled"], f"{o['conversion_rate']:.2f}%"]
            )
        elements.extend([Paragraph("Conversion by Origin", styles["heading"]), _table(origin_rows)])
    return elements


BODY_RENDERERS = {
    "executive": _executive_body,
    "advisors": _advisors_body,
    "campaigns": _campaigns_body,
    "conversions": _conversions_body,
}


def generate_report_pdf(data: dict[str, Any]) -> bytes:
    """
    Generate a PDF for a report payload.

    Args:
        data: Output of report_service.generate (type, period, generated_at, body)

    Returns:
        PDF bytes
    """
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=letter,
        rightMargin=50,
        leftMargin=50,
        topMargin=50,
        bottomMargin=50,
    )
    styles = _styles()
    report_type = data.get("type", "")
    period = data.get("period", {})

    elements = [
        Paragraph(REPORT_TITLES.get(report_type, "Report"), styles["title"]),
        Paragraph(
            f"Period: {period.get('start', '')} to {period.get('end', '')} | "
            f"Generated: {data.get('generated_at', '')}",
            styles["subheading"],
        ),
        Spacer(1, 10),
    ]
    renderer = BODY_RENDERERS.get(report_type)
    if renderer:
        elements.extend(renderer(data, styles))

    doc.build(elements)
    return buffer.getvalue()
