"""
Printable vehicle sheet.

``build_vehicle_sheet`` turns a vehicle, its costs and its photos into the
text lines of the document; ``render_vehicle_pdf`` lays those lines out with
reportlab. No figure is computed here beyond what ``compute_totals`` returns.
"""

from dataclasses import dataclass, field
from datetime import datetime
from io import BytesIO
from typing import Any, Iterable, List
from xml.sax.saxutils import escape

from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import inch
from reportlab.lib.enums import TA_CENTER
from reportlab.platypus import SimpleDocTemplate, Paragraph, Spacer

from fleet_ledger.services.financials import compute_totals

import logging
logger = logging.getLogger(__name__)

MAX_PHOTOS = 3
NOT_APPLICABLE = "N/A"


def format_money(cents: int) -> str:
    """Format integer cents as '1 234,56 €' without going through floats."""
    sign = "-" if cents < 0 else ""
    units, minor = divmod(abs(cents), 100)
    grouped = f"{units:,}".replace(",", " ")
    return f"{sign}{grouped},{minor:02d} €"


def format_date(moment: datetime) -> str:
    return moment.strftime("%d/%m/%Y")


def _enum_value(value: Any) -> str:
    return getattr(value, "value", value)


@dataclass
class VehicleSheet:
    title: str
    details: List[str] = field(default_factory=list)
    financials: List[str] = field(default_factory=list)
    costs: List[str] = field(default_factory=list)
    photos: List[str] = field(default_factory=list)


def build_vehicle_sheet(vehicle: Any, costs: Iterable[Any], photos: Iterable[Any]) -> VehicleSheet:
    """Collect the lines of the export document of one vehicle."""
    costs = list(costs)
    totals = compute_totals(vehicle, costs)

    sheet = VehicleSheet(title="Vehicle sheet")
    sheet.details = [
        f"Make/Model: {vehicle.make} {vehicle.model}",
        f"Year: {vehicle.year}",
        f"Status: {_enum_value(vehicle.status)}",
        f"Mileage: {vehicle.mileage} km",
    ]

    sheet.financials.append(f"Purchase price: {format_money(vehicle.purchase_price)}")
    if vehicle.sale_price is not None:
        sheet.financials.append(f"Sale price: {format_money(vehicle.sale_price)}")
    sheet.financials.append(f"Variable costs: {format_money(totals.variable_costs)}")
    sheet.financials.append(f"Total cost: {format_money(totals.total_cost)}")
    margin = format_money(totals.margin) if totals.margin is not None else NOT_APPLICABLE
    sheet.financials.append(f"Margin: {margin}")

    if not costs:
        sheet.costs.append("No costs recorded.")
    for cost in costs:
        sheet.costs.append(
            f"- {cost.label} ({_enum_value(cost.category)}): "
            f"{format_money(cost.amount)} on {format_date(cost.incurred_at)}"
        )

    ordered_photos = sorted(photos, key=lambda p: (p.position, p.id))
    for index, photo in enumerate(ordered_photos[:MAX_PHOTOS], start=1):
        sheet.photos.append(f"{index}. {photo.url}")

    return sheet


def render_vehicle_pdf(sheet: VehicleSheet) -> bytes:
    """Render the sheet as a single-column A4 PDF."""
    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        rightMargin=72,
        leftMargin=72,
        topMargin=72,
        bottomMargin=36,
        title=sheet.title,
    )

    styles = getSampleStyleSheet()
    title_style = ParagraphStyle(
        'SheetTitle',
        parent=styles['Heading1'],
        fontSize=18,
        alignment=TA_CENTER,
        spaceAfter=18,
    )
    heading_style = styles['Heading2']
    body_style = styles['Normal']

    def paragraphs(lines):
        # Paragraph parses markup, so user text is escaped
        return [Paragraph(escape(line), body_style) for line in lines]

    story = [Paragraph(escape(sheet.title), title_style)]
    story.extend(paragraphs(sheet.details))
    story.append(Spacer(1, 0.2 * inch))
    story.extend(paragraphs(sheet.financials))
    story.append(Spacer(1, 0.2 * inch))
    story.append(Paragraph("Costs", heading_style))
    story.extend(paragraphs(sheet.costs))
    story.append(Spacer(1, 0.2 * inch))
    story.append(Paragraph("Main photos", heading_style))
    story.extend(paragraphs(sheet.photos))

    doc.build(story)
    pdf = buffer.getvalue()
    logger.info(f"Rendered '{sheet.title}' PDF ({len(pdf)} bytes)")
    return pdf
