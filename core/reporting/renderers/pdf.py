from pathlib import Path
from xml.sax.saxutils import escape

from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib import colors
from reportlab.platypus import (
    SimpleDocTemplate,
    Paragraph,
    Spacer,
    Table,
    TableStyle,
    Image,
)
from reportlab.lib.styles import getSampleStyleSheet

from core.reporting.contexts import PdfForecastContext

_TABLE_STYLE = TableStyle([
    ("BACKGROUND", (0, 0), (-1, 0), colors.lightgrey),
    ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
    ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
    ("VALIGN", (0, 0), (-1, -1), "TOP"),
])


class PdfForecastRenderer:
    def render(self, ctx: PdfForecastContext, output_path: Path) -> Path:
        doc = SimpleDocTemplate(
            str(output_path),
            pagesize=landscape(A4),
            leftMargin=40,
            rightMargin=40,
            topMargin=40,
            bottomMargin=40,
        )

        styles = getSampleStyleSheet()
        result = ctx.result
        story = []

        # ---------------- Title ----------------
        story.append(Paragraph(f"Workload Forecast - {escape(ctx.project_id)}", styles["Title"]))
        story.append(Spacer(1, 12))

        # ---------------- Summary ----------------
        info = [
            f"As of: {ctx.as_of.isoformat()} ({ctx.weeks_ahead} weeks ahead)",
            f"Resources: {result.summary.total_resources}",
            f"Over-allocated resources: {result.summary.over_allocated_count}",
            f"Average utilization: {result.summary.average_utilization}%",
            f"Bottlenecks: {len(result.bottlenecks)}",
            f"Burnout risks: {len(result.burnout_risks)}",
        ]
        for line in info:
            story.append(Paragraph(line, styles["Normal"]))
        story.append(Spacer(1, 16))

        # ---------------- Capacity chart ----------------
        if ctx.capacity_png_path:
            story.append(Paragraph("Capacity vs Allocation", styles["Heading2"]))
            story.append(Spacer(1, 8))
            img = Image(ctx.capacity_png_path)
            img._restrictSize(720, 280)
            story.append(img)
            story.append(Spacer(1, 16))

        # ---------------- Bottlenecks ----------------
        if result.bottlenecks:
            story.append(Paragraph("Predicted Bottlenecks", styles["Heading2"]))
            story.append(Spacer(1, 8))
            data = [["Resource", "Week", "Utilization %", "Severity", "Tasks"]]
            for b in result.bottlenecks:
                data.append([
                    b.resource_name,
                    b.week.isoformat(),
                    f"{b.utilization:.1f}",
                    b.severity.value,
                    Paragraph(escape(", ".join(t.task_name for t in b.contributing_tasks)), styles["Normal"]),
                ])
            table = Table(data, colWidths=[160, 80, 90, 70, 340])
            table.setStyle(_TABLE_STYLE)
            story.append(table)
            story.append(Spacer(1, 16))

        # ---------------- Burnout ----------------
        if result.burnout_risks:
            story.append(Paragraph("Burnout Risks", styles["Heading2"]))
            story.append(Spacer(1, 8))
            data = [["Resource", "Consecutive weeks", "Risk"]]
            for risk in result.burnout_risks:
                data.append([risk.resource_name, risk.consecutive_overload_weeks, risk.risk_level.value])
            table = Table(data, colWidths=[240, 140, 100])
            table.setStyle(_TABLE_STYLE)
            story.append(table)
            story.append(Spacer(1, 16))

        # ---------------- Suggestions ----------------
        if result.rebalance_suggestions:
            story.append(Paragraph("Rebalance Suggestions", styles["Heading2"]))
            story.append(Spacer(1, 8))
            data = [["Type", "Description", "Impact", "Confidence"]]
            for s in result.rebalance_suggestions:
                data.append([
                    s.type.value,
                    Paragraph(escape(s.description), styles["Normal"]),
                    Paragraph(escape(s.estimated_impact), styles["Normal"]),
                    s.confidence,
                ])
            table = Table(data, colWidths=[70, 380, 200, 70])
            table.setStyle(_TABLE_STYLE)
            story.append(table)

        doc.build(story)
        return output_path
