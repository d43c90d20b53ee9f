"""Interactive report viewer."""

from .app import ReportViewerApp

__all__ = ["ReportViewerApp"]
