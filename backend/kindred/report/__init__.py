from kindred.report.abstract_report import AbstractReport
from kindred.report.elements import (
    MediaFile,
    ReportBaseCell,
    ReportBaseElement,
    ReportBaseFootnote,
    ReportBaseHtml,
    ReportBaseImage,
    ReportBaseLine,
    ReportBasePageheader,
    ReportBaseText,
    ReportBaseTextbox,
)

__all__ = [
    "AbstractReport",
    "MediaFile",
    "ReportBaseCell",
    "ReportBaseElement",
    "ReportBaseFootnote",
    "ReportBaseHtml",
    "ReportBaseImage",
    "ReportBaseLine",
    "ReportBasePageheader",
    "ReportBaseText",
    "ReportBaseTextbox",
]
