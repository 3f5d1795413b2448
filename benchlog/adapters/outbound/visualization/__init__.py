"""
Visualization Adapters

HTML reports and the charts embedded in them.
"""

from .html_report import HtmlReportGenerator, ReportConfig
from .charts import ChartGenerator, ChartOutput

__all__ = [
    "HtmlReportGenerator",
    "ReportConfig",
    "ChartGenerator",
    "ChartOutput",
]
