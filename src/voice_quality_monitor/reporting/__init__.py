from .html_report import HTMLReportGenerator
from .json_export import load_export, write_export
from .junit import JUnitXMLWriter
from .regression import RegressionDetector

__all__ = [
    "HTMLReportGenerator",
    "JUnitXMLWriter",
    "RegressionDetector",
    "load_export",
    "write_export",
]
