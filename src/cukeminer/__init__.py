"""Cukeminer - parse Cucumber HTML test reports."""

__version__ = "1.0.0"

from .models import Feature, Report, Scenario, Step, StepStatus, compute_status
from .parser import ReportParseError, parse_document, parse_report_file

__all__ = [
    "__version__",
    "Feature",
    "Report",
    "Scenario",
    "Step",
    "StepStatus",
    "compute_status",
    "ReportParseError",
    "parse_document",
    "parse_report_file",
]
