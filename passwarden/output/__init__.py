"""
PassWarden Output
==================

Console rendering and report generation.
"""

from passwarden.output.console import PassWardenConsoleOutput
from passwarden.output.report import PassWardenReportGenerator

__all__ = ["PassWardenConsoleOutput", "PassWardenReportGenerator"]
