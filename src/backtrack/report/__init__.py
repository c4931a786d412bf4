"""
Reporting module for backtrack.

This module renders the state of a history buffer for debugging.

Output formats:
    - Console: Rich terminal output with the recorded items and cursor marks
    - JSON: Structured output for programmatic consumption

Example:
    from backtrack.report import generate_console_report, generate_json_report

    generate_console_report(buffer)
    print(generate_json_report(buffer))
"""

from backtrack.report.console import generate_console_report
from backtrack.report.json import build_report_dict, generate_json_report

__all__ = [
    "generate_console_report",
    "generate_json_report",
    "build_report_dict",
]
