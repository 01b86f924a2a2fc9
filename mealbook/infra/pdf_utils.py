import io
from reportlab.lib.pagesizes import A4, landscape
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer
from reportlab.lib import colors
from reportlab.lib.styles import getSampleStyleSheet

from mealbook.domain.Plan import DAYS, MEAL_TYPES
from mealbook.utilities.constants import PDF_TITLE, EMPTY_CELL_LABEL


def generate_pdf_for_week(week_view):
    """Generate a PDF table: Day / Breakfast / Lunch / Dinner / Snack from PlanRepository.week_view()."""
    buf = io.BytesIO()
    doc = SimpleDocTemplate(
        buf, pagesize=landscape(A4),
        rightMargin=20, leftMargin=20, topMargin=20, bottomMargin=20
    )

    styles = getSampleStyleSheet()
    elements = [
        Paragraph(PDF_TITLE, styles["Title"]),
        Spacer(1, 16),
    ]

    data = [["Day"] + MEAL_TYPES]
    for day in DAYS:
        row = [day]
        for meal_type in MEAL_TYPES:
            cell = week_view[day][meal_type]
            label = cell["recipe_name"] or EMPTY_CELL_LABEL
            if cell["rotate"]:
                label = f"{label} (rotate weekly)"
            row.append(label)
        data.append(row)

    table = Table(data, repeatRows=1)
    table.setStyle(TableStyle([
        ("BACKGROUND", (0,0), (-1,0), colors.HexColor("#4CAF50")),
        ("TEXTCOLOR", (0,0), (-1,0), colors.whitesmoke),
        ("ALIGN", (0,0), (-1,-1), "CENTER"),
        ("FONTNAME", (0,0), (-1,0), "Helvetica-Bold"),
        ("FONTSIZE", (0,0), (-1,0), 12),
        ("BOTTOMPADDING", (0,0), (-1,0), 10),
        ("GRID", (0,0), (-1,-1), 0.5, colors.grey),
    ]))

    elements.append(table)
    doc.build(elements)
    return buf.getvalue()
