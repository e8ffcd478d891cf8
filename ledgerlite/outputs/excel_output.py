# ledgerlite/outputs/excel_output.py

"""Excel output module backed by XlsxWriter.

The workbook has a ``Summary`` worksheet with the month's totals and a
``Top Categories`` worksheet listing the largest expense categories.
Amounts are written as numbers with a currency format so they stay usable
in formulas.
"""

from __future__ import annotations

import os

import xlsxwriter

from ledgerlite.outputs.base import BaseOutput


class ExcelOutput(BaseOutput):
    """Generate a local Excel workbook for one monthly report."""

    SUMMARY = "Summary"
    TOP_CATEGORIES = "Top Categories"

    def __init__(self, config: dict):
        self.config = config
        self.export_dir = config.get("export_dir", "exports")

    def write(self, report, year: int, month: int) -> str:
        os.makedirs(self.export_dir, exist_ok=True)
        out_path = os.path.join(self.export_dir, self.report_basename(year, month) + ".xlsx")

        workbook = xlsxwriter.Workbook(out_path)
        try:
            amount_fmt = workbook.add_format({"num_format": "$#,##0.00"})
            bold = workbook.add_format({"bold": True})

            ws = workbook.add_worksheet(self.SUMMARY)
            ws.write(0, 0, f"Monthly Financial Report - {year}-{month:02d}", bold)
            rows = [
                ("Total Income", report.total_income),
                ("Total Expense", report.total_expense),
                ("Net Balance", report.net),
            ]
            for r, (label, amount) in enumerate(rows, start=1):
                ws.write(r, 0, label)
                ws.write_number(r, 1, float(amount), amount_fmt)
            ws.write(len(rows) + 1, 0, "Total Transactions")
            ws.write_number(len(rows) + 1, 1, report.transaction_count)
            ws.set_column(0, 0, 22)
            ws.set_column(1, 1, 14)

            cats = workbook.add_worksheet(self.TOP_CATEGORIES)
            cats.write_row(0, 0, ["Category", "Amount"], bold)
            for r, item in enumerate(report.top_categories, start=1):
                cats.write(r, 0, item.category)
                cats.write_number(r, 1, float(item.amount), amount_fmt)
            cats.set_column(0, 0, 24)
            cats.set_column(1, 1, 14)
        finally:
            workbook.close()

        return out_path
