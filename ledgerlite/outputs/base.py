# ledgerlite/outputs/base.py
from abc import ABC, abstractmethod


class BaseOutput(ABC):
    @abstractmethod
    def write(self, report, year, month):
        """Write a finished monthly report and return the output path."""
        pass

    @staticmethod
    def report_basename(year, month):
        return f"Report_{year}_{month:02d}"
