"""
services/export_service.py
---------------------------
Generates CSV and Excel exports of the company reports.
"""

import io
from typing import Optional

import pandas as pd

from services.report_service import ReportService
from utils.logger import get_logger

logger = get_logger(__name__)

COMPANY_COLUMNS = ["company", "users", "average_payment", "total_payments"]


class ExportService:
    """Generates downloadable company reports in CSV and Excel formats."""

    def __init__(self, reports: Optional[ReportService] = None):
        self.reports = reports or ReportService()

    def _company_frame(self) -> pd.DataFrame:
        """One row per company, merging user counts, averages and sums."""
        counts = pd.DataFrame(
            [{"company": c.company_name, "users": c.user_count} for c in self.reports.user_count_by_company()],
            columns=["company", "users"],
        )
        averages = pd.DataFrame(
            [{"company": a.company_name, "average_payment": a.average_amount} for a in self.reports.company_averages()],
            columns=["company", "average_payment"],
        )
        sums = pd.DataFrame(
            [{"company": s.company_name, "total_payments": s.total_amount} for s in self.reports.payment_sum_by_company()],
            columns=["company", "total_payments"],
        )
        df = counts.merge(averages, on="company", how="outer").merge(sums, on="company", how="outer")
        return df.sort_values("company").reset_index(drop=True)[COMPANY_COLUMNS]

    def export_company_report_csv(self) -> io.BytesIO:
        """
        Export the per-company report as a CSV file.

        Returns:
            A BytesIO buffer containing the CSV data.
        """
        df = self._company_frame()
        buffer = io.BytesIO()
        df.to_csv(buffer, index=False, encoding="utf-8")
        buffer.seek(0)
        logger.info(f"Exported {len(df)} companies as CSV")
        return buffer

    def export_company_report_excel(self) -> io.BytesIO:
        """
        Export the per-company report as an Excel (.xlsx) file.

        Besides the ``Companies`` sheet, the workbook carries ``Payers``
        (above-average payers) and ``LastNames`` (payment range per last name).

        Returns:
            A BytesIO buffer containing the Excel data.
        """
        df = self._company_frame()
        payers = pd.DataFrame(
            [
                {
                    "username": p.user.username,
                    "full_name": p.user.full_name,
                    "average_payment": p.average_amount,
                }
                for p in self.reports.above_average_payers()
            ],
            columns=["username", "full_name", "average_payment"],
        )
        last_names = pd.DataFrame(
            [
                {"lastname": r.lastname, "min_payment": r.min_amount, "max_payment": r.max_amount}
                for r in self.reports.min_max_payments_by_last_name()
            ],
            columns=["lastname", "min_payment", "max_payment"],
        )

        buffer = io.BytesIO()
        with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
            df.to_excel(writer, sheet_name="Companies", index=False)
            payers.to_excel(writer, sheet_name="Payers", index=False)
            last_names.to_excel(writer, sheet_name="LastNames", index=False)

        buffer.seek(0)
        logger.info(f"Exported {len(df)} companies as Excel")
        return buffer
