"""
Text report and chart output for simulations.
"""

from .report import format_report, print_report, report_lines
from .visualization import render_chart, DEFAULT_CURRENCY

__all__ = [
    'format_report',
    'print_report',
    'report_lines',
    'render_chart',
    'DEFAULT_CURRENCY'
]
