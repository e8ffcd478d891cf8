# ledgerlite/outputs/csv_output.py

import csv
import os
from decimal import Decimal

from ledgerlite.outputs.base import BaseOutput


def format_amount(amount):
    return f"{Decimal(amount):.2f}"


class CSVOutput(BaseOutput):
    """
    Writes a monthly report to ``Report_<Year>_<MM>.csv`` in the export
    directory: the totals first, then the top expense categories.
    """
    def __init__(self, config):
        self.config     = config
        self.export_dir = config.get('export_dir', 'exports')

    def write(self, report, year, month):
        os.makedirs(self.export_dir, exist_ok=True)
        out_path = os.path.join(self.export_dir, self.report_basename(year, month) + '.csv')

        with open(out_path, 'w', newline='', encoding='utf-8') as f:
            writer = csv.writer(f)
            writer.writerow([f"Monthly Financial Report - {year}-{month:02d}"])
            writer.writerow(['Total Income',       format_amount(report.total_income)])
            writer.writerow(['Total Expense',      format_amount(report.total_expense)])
            writer.writerow(['Net Balance',        format_amount(report.net)])
            writer.writerow(['Total Transactions', report.transaction_count])
            writer.writerow([])
            writer.writerow(['Top Expense Categories'])
            writer.writerow(['Category', 'Amount'])
            for item in report.top_categories:
                writer.writerow([item.category, format_amount(item.amount)])

        return out_path
