import io
import json

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

LEVEL_COLORS = {
    "SAFE": colors.HexColor("#16a34a"),
    "SUSPICIOUS": colors.orange,
    "DANGEROUS": colors.red,
}


def _escape(text):
    return (text or "").replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def build_json(report):
    return json.dumps(report, ensure_ascii=False, indent=2).encode("utf-8")


def build_pdf(report):
    buf = io.BytesIO()
    doc = SimpleDocTemplate(
        buf,
        pagesize=A4,
        rightMargin=20 * mm,
        leftMargin=20 * mm,
        topMargin=20 * mm,
        bottomMargin=20 * mm,
    )
    styles = getSampleStyleSheet()
    title_style = ParagraphStyle(
        name="TitleStyle",
        parent=styles["Heading1"],
        fontSize=22,
        leading=28,
        alignment=1,
        spaceAfter=20,
    )
    heading_style = ParagraphStyle(
        name="HeadingStyle",
        parent=styles["Heading2"],
        fontSize=15,
        leading=19,
        spaceBefore=15,
        spaceAfter=10,
        textColor=colors.HexColor("#2563eb"),
    )
    normal_style = ParagraphStyle(
        name="NormalStyle",
        parent=styles["Normal"],
        fontSize=10,
        leading=14,
        spaceAfter=6,
    )

    level = report.get("level", "")
    story = [Paragraph("Email Scam Analysis Report", title_style), Spacer(1, 10)]

    meta = [
        ["Sender", Paragraph(_escape(report.get("sender")), normal_style)],
        ["Subject", Paragraph(_escape(report.get("subject")), normal_style)],
        ["Score", "%.2f" % report.get("score", 0.0)],
        ["Level", level],
    ]
    t = Table(meta, colWidths=[35 * mm, 135 * mm])
    t.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (0, -1), colors.HexColor("#f1f5f9")),
                ("TEXTCOLOR", (1, 3), (1, 3), LEVEL_COLORS.get(level, colors.black)),
                ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
                ("PADDING", (0, 0), (-1, -1), 6),
                ("VALIGN", (0, 0), (-1, -1), "TOP"),
            ]
        )
    )
    story.append(t)

    story.append(Paragraph("Feature scores", heading_style))
    features = report.get("features", {})
    weights = report.get("weights", {})
    contributions = report.get("contributions", {})
    rows = [["Feature", "Raw score", "Weight", "Contribution"]]
    for name, value in features.items():
        rows.append([
            name,
            "%.3f" % value,
            "%.2f" % weights.get(name, 0.0),
            "%.3f" % contributions.get(name, 0.0),
        ])
    ft = Table(rows, colWidths=[40 * mm, 40 * mm, 40 * mm, 40 * mm])
    ft.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#f1f5f9")),
                ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
                ("PADDING", (0, 0), (-1, -1), 6),
            ]
        )
    )
    story.append(ft)

    story.append(Paragraph("Indicators", heading_style))
    indicators = report.get("indicators", [])
    if not indicators:
        story.append(Paragraph("No scam indicators found.", normal_style))
    for ind in indicators:
        story.append(Paragraph("- " + _escape(ind), normal_style))

    story.append(Paragraph("Recommendation", heading_style))
    story.append(Paragraph(_escape(report.get("advice")), normal_style))

    doc.build(story)
    return buf.getvalue()
