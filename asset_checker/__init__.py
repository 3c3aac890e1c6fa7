"""Daily asset accountability: roster vs. report reconciliation toolkit."""
from asset_checker.application.use_cases import (
    AssetsReportContext,
    FetchAssetsReportUseCase,
    fetch_assets_report_table_data,
)
from asset_checker.domain.services import AssetReconciler, RowComposer, compose, reconcile
from asset_checker.infrastructure.repositories.excel_repositories import (
    SpreadsheetReportsRepository,
    SpreadsheetRosterRepository,
)

__all__ = [
    "AssetsReportContext",
    "FetchAssetsReportUseCase",
    "fetch_assets_report_table_data",
    "AssetReconciler",
    "RowComposer",
    "compose",
    "reconcile",
    "SpreadsheetReportsRepository",
    "SpreadsheetRosterRepository",
]
