from pathlib import Path
from openpyxl import Workbook
from openpyxl.styles import Font, Alignment, PatternFill, Border, Side

from core.reporting.contexts import ExcelForecastContext


class ExcelForecastRenderer:
    def render(self, ctx: ExcelForecastContext, output_path: Path) -> Path:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        wb = Workbook()
        result = ctx.result

        header_font = Font(bold=True)
        title_font = Font(bold=True, size=14)
        center = Alignment(horizontal="center")
        thin_border = Border(
            left=Side(style="thin"),
            right=Side(style="thin"),
            top=Side(style="thin"),
            bottom=Side(style="thin"),
        )
        header_fill = PatternFill("solid", fgColor="DDDDDD")
        overload_fill = PatternFill("solid", fgColor="FFC7CE")

        def header_row(ws, headers):
            for col_index, h in enumerate(headers, start=1):
                cell = ws.cell(row=1, column=col_index, value=h)
                cell.font = header_font
                cell.alignment = center
                cell.fill = header_fill
                cell.border = thin_border

        def data_row(ws, row_index, values):
            for col_index, v in enumerate(values, start=1):
                ws.cell(row=row_index, column=col_index, value=v).border = thin_border

        # ---------------- Summary ----------------
        ws = wb.active
        ws.title = "Summary"

        ws["A1"] = f"Workload Forecast - {ctx.project_id}"
        ws["A1"].font = title_font

        row = 3

        def kv(key, value):
            nonlocal row
            ws[f"A{row}"] = key
            ws[f"B{row}"] = value
            ws[f"A{row}"].font = header_font
            ws[f"A{row}"].border = thin_border
            ws[f"B{row}"].border = thin_border
            row += 1

        kv("Project ID", ctx.project_id)
        kv("As of", ctx.as_of.isoformat())
        kv("Weeks ahead", ctx.weeks_ahead)

        row += 1
        kv("Resources", result.summary.total_resources)
        kv("Over-allocated resources", result.summary.over_allocated_count)
        kv("Average utilization (%)", result.summary.average_utilization)
        kv("Bottlenecks", len(result.bottlenecks))
        kv("Burnout risks", len(result.burnout_risks))

        ws.column_dimensions["A"].width = 30
        ws.column_dimensions["B"].width = 25

        # ---------------- Utilization ----------------
        ws_util = wb.create_sheet("Utilization")
        week_starts = sorted({w.week_start for wl in ctx.workloads for w in wl.weeks})
        header_row(ws_util, ["Resource", "Role", "Average (%)"] + [d.isoformat() for d in week_starts])
        for r_i, wl in enumerate(ctx.workloads, start=2):
            by_week = {w.week_start: w.utilization for w in wl.weeks}
            data_row(
                ws_util,
                r_i,
                [wl.resource_name, wl.role, round(wl.average_utilization, 1)]
                + [round(by_week.get(d, 0.0), 1) for d in week_starts],
            )
            for c_i, d in enumerate(week_starts, start=4):
                if by_week.get(d, 0.0) > 100:
                    ws_util.cell(r_i, c_i).fill = overload_fill

        ws_util.column_dimensions["A"].width = 28
        ws_util.column_dimensions["B"].width = 20

        # ---------------- Capacity ----------------
        ws_cap = wb.create_sheet("Capacity")
        header_row(ws_cap, ["Week", "Capacity (h)", "Allocated (h)", "Surplus (h)", "Deficit (h)"])
        for r_i, w in enumerate(result.capacity_forecast, start=2):
            data_row(
                ws_cap,
                r_i,
                [w.week.isoformat(), w.total_capacity, w.total_allocated, w.surplus, w.deficit],
            )
        for col_letter in ("A", "B", "C", "D", "E"):
            ws_cap.column_dimensions[col_letter].width = 15

        # ---------------- Bottlenecks ----------------
        ws_b = wb.create_sheet("Bottlenecks")
        header_row(ws_b, ["Resource", "Week", "Utilization (%)", "Severity", "Contributing tasks"])
        for r_i, b in enumerate(result.bottlenecks, start=2):
            tasks = ", ".join(f"{t.task_name} ({t.hours_per_week:g} h)" for t in b.contributing_tasks)
            data_row(
                ws_b,
                r_i,
                [b.resource_name, b.week.isoformat(), round(b.utilization, 1), b.severity.value, tasks],
            )
        ws_b.column_dimensions["A"].width = 28
        ws_b.column_dimensions["E"].width = 60

        # ---------------- Burnout ----------------
        ws_r = wb.create_sheet("Burnout")
        header_row(ws_r, ["Resource", "Consecutive weeks", "Risk level"])
        for r_i, risk in enumerate(result.burnout_risks, start=2):
            data_row(ws_r, r_i, [risk.resource_name, risk.consecutive_overload_weeks, risk.risk_level.value])
        ws_r.column_dimensions["A"].width = 28
        ws_r.column_dimensions["B"].width = 20

        # ---------------- Suggestions ----------------
        if result.rebalance_suggestions:
            ws_s = wb.create_sheet("Suggestions")
            header_row(ws_s, ["Type", "Description", "Estimated impact", "Confidence", "Resource", "Task"])
            for r_i, s in enumerate(result.rebalance_suggestions, start=2):
                data_row(
                    ws_s,
                    r_i,
                    [
                        s.type.value,
                        s.description,
                        s.estimated_impact,
                        s.confidence,
                        s.affected_resource_id or "",
                        s.affected_task_id or "",
                    ],
                )
            ws_s.column_dimensions["B"].width = 60
            ws_s.column_dimensions["C"].width = 30

        wb.save(output_path)
        return output_path
