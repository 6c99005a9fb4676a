"""Report export - one tabular representation, rendered as CSV or printable HTML"""

import csv
import io
from dataclasses import dataclass
from html import escape
from typing import Any, List
from appraisal_ledger.domain.models import Report, DailyRow
from appraisal_ledger.domain.reports import row_amount

BASE_HEADERS = ["Label", "Count", "Total Valuation", "Earnings"]
DAILY_EXTRA_HEADERS = ["Bank", "Customer"]

REPORT_TITLES = {
    "bankwise": "Bankwise Breakdown",
    "monthly": "Monthly Breakdown",
    "daily": "Daily Breakdown",
}


@dataclass
class ReportTable:
    """Headers, data rows and totals footer shared by every export path"""

    title: str
    headers: List[str]
    rows: List[List[Any]]
    footer: List[Any]


def to_table(report: Report) -> ReportTable:
    """Flatten a report into header + rows + footer"""
    is_daily = report.mode == "daily"
    headers = BASE_HEADERS + (DAILY_EXTRA_HEADERS if is_daily else [])

    rows = []
    for row in report.rows:
        cells = [row.label, row.count, row_amount(row), row.salary]
        if isinstance(row, DailyRow):
            cells += [row.bank, row.customer or ""]
        rows.append(cells)

    footer = ["Totals", report.totals.count, report.totals.amount, report.totals.salary]
    if is_daily:
        footer += ["", ""]

    title = REPORT_TITLES[report.mode]
    if report.month:
        title = f"{title} ({report.month})"

    return ReportTable(title=title, headers=headers, rows=rows, footer=footer)


def _csv_value(value: Any) -> Any:
    # 3000.0 -> 3000
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def to_csv(table: ReportTable) -> str:
    """Header row followed by one line per data row, quoted where needed"""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(table.headers)
    writer.writerows([_csv_value(c) for c in row] for row in table.rows)
    return buffer.getvalue()


def format_cell(value: Any) -> str:
    """Thousands separators for numbers, plain text otherwise"""
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, int) or (isinstance(value, float) and value.is_integer()):
        return f"{int(value):,}"
    if isinstance(value, float):
        return f"{value:,.2f}"
    return str(value)


def to_print_html(table: ReportTable, report_date: str) -> str:
    """Render the same table as a standalone printable HTML page"""
    head = "".join(f"<th>{escape(h)}</th>" for h in table.headers)
    body = "".join(
        "<tr>" + "".join(f"<td>{escape(format_cell(c))}</td>" for c in row) + "</tr>"
        for row in table.rows
    )
    if not table.rows:
        body = f'<tr><td colspan="{len(table.headers)}" class="empty">No records found.</td></tr>'
        foot = ""
    else:
        foot = "<tr>" + "".join(f"<td>{escape(format_cell(c))}</td>" for c in table.footer) + "</tr>"

    return f"""<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>{escape(table.title)}</title>
<style>
    body {{ font-family: Arial, sans-serif; padding: 20px; }}
    h1 {{ color: #0f172a; }}
    .period {{ color: #666; margin-bottom: 20px; }}
    table.report-table {{ width: 100%; border-collapse: collapse; font-size: 12px; }}
    table.report-table th {{ background-color: #f1f5f9; border: 1px solid #ccc; padding: 6px; text-align: left; }}
    table.report-table td {{ border: 1px solid #ddd; padding: 5px; }}
    table.report-table tfoot td {{ font-weight: bold; background-color: #0f172a; color: #fff; }}
    td.empty {{ text-align: center; font-style: italic; color: #94a3b8; }}
</style>
</head>
<body onload="window.print()">
<h1>{escape(table.title)}</h1>
<div class="period">Report Date: {escape(report_date)}</div>
<table class="report-table">
<thead><tr>{head}</tr></thead>
<tbody>{body}</tbody>
<tfoot>{foot}</tfoot>
</table>
</body>
</html>
"""
