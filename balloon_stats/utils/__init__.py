"""
Utility helpers.

Functions
---------
ReportFormatter
    Render or save flight statistics as text or JSON
"""

from balloon_stats.utils.output import ReportFormatter, SUPPORTED_FORMATS

__all__ = ["ReportFormatter", "SUPPORTED_FORMATS"]
