"""
Unit tests for CSV and Excel exports of the company report.

Tests cover:
- Merging user counts, averages and sums into one row per company
- Companies without payments keep empty cells
- Excel workbook sheets
"""

from datetime import date
from unittest.mock import MagicMock

import pandas as pd
import pytest

from models.report import (
    CompanyAverage,
    CompanyPaymentSum,
    CompanyUserCount,
    LastNamePaymentRange,
    PayerAverage,
)
from models.user import PersonalInfo, User
from services.export_service import COMPANY_COLUMNS, ExportService
from services.report_service import ReportService


@pytest.fixture
def reports():
    service = MagicMock(spec=ReportService)
    service.user_count_by_company.return_value = [
        CompanyUserCount(2, "Apple"),
        CompanyUserCount(1, "Initech"),
    ]
    service.company_averages.return_value = [CompanyAverage("Apple", 410.0)]
    service.payment_sum_by_company.return_value = [CompanyPaymentSum("Apple", 2050)]
    service.above_average_payers.return_value = [
        PayerAverage(User(2, "SteveJobs", PersonalInfo("Steve", "Jobs", date(1955, 2, 24))), 450.0)
    ]
    service.min_max_payments_by_last_name.return_value = [LastNamePaymentRange("Jobs", 600, 250)]
    return service


class TestCsvExport:

    def test_one_row_per_company(self, reports):
        buffer = ExportService(reports).export_company_report_csv()

        df = pd.read_csv(buffer)
        assert list(df.columns) == COMPANY_COLUMNS
        assert df["company"].tolist() == ["Apple", "Initech"]

        apple = df[df["company"] == "Apple"].iloc[0]
        assert apple["users"] == 2
        assert apple["average_payment"] == 410.0
        assert apple["total_payments"] == 2050

    def test_company_without_payments_has_empty_cells(self, reports):
        df = pd.read_csv(ExportService(reports).export_company_report_csv())

        initech = df[df["company"] == "Initech"].iloc[0]
        assert initech["users"] == 1
        assert pd.isna(initech["average_payment"])
        assert pd.isna(initech["total_payments"])

    def test_empty_store(self):
        service = MagicMock(spec=ReportService)
        service.user_count_by_company.return_value = []
        service.company_averages.return_value = []
        service.payment_sum_by_company.return_value = []

        df = pd.read_csv(ExportService(service).export_company_report_csv())

        assert list(df.columns) == COMPANY_COLUMNS
        assert df.empty


class TestExcelExport:

    def test_workbook_sheets(self, reports):
        buffer = ExportService(reports).export_company_report_excel()

        sheets = pd.read_excel(buffer, sheet_name=None, engine="openpyxl")
        assert list(sheets) == ["Companies", "Payers", "LastNames"]
        assert sheets["Companies"]["company"].tolist() == ["Apple", "Initech"]
        assert sheets["Payers"]["full_name"].tolist() == ["Steve Jobs"]
        assert sheets["LastNames"].iloc[0].tolist() == ["Jobs", 250, 600]
