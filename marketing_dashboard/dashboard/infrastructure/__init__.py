"""Infrastructure layer package."""

from .default_data import DefaultWeeklyDataProvider
from .marketing_api import FileMarketingDataSource, HttpMarketingDataSource, build_data_source
from .report_exporter import save_output_workbook, save_summary_html, save_summary_json

__all__ = [
    "DefaultWeeklyDataProvider",
    "FileMarketingDataSource",
    "HttpMarketingDataSource",
    "build_data_source",
    "save_output_workbook",
    "save_summary_html",
    "save_summary_json",
]
