"""
JSON report generator for backtrack.

Generates structured JSON output describing a history buffer: statistics,
live cursors and the recorded items. Items are rendered with repr() since
recorded values need not be JSON serializable.
"""

import json
from datetime import UTC, datetime
from typing import Any

from backtrack.record import HistoryBuffer


def generate_json_report(buffer: HistoryBuffer[Any], indent: int = 2) -> str:
    """
    Generate a JSON report for a history buffer.

    Args:
        buffer: The buffer to report on
        indent: JSON indentation level (default: 2)

    Returns:
        JSON string with the full report
    """
    report = build_report_dict(buffer)
    return json.dumps(report, indent=indent, default=_json_serializer)


def build_report_dict(buffer: HistoryBuffer[Any]) -> dict[str, Any]:
    """
    Build a report dictionary for a history buffer.

    Args:
        buffer: The buffer to report on

    Returns:
        Dictionary with statistics, cursors and items
    """
    return {
        "report_version": "1.0",
        "generated_at": datetime.now(UTC).isoformat(),
        "statistics": buffer.stats().model_dump(),
        "cursors": [info.model_dump(mode="json") for info in buffer.cursor_infos()],
        "items": [
            {"index": index, "repr": repr(item), "type": type(item).__name__}
            for index, item in enumerate(buffer.snapshot())
        ],
    }


def _json_serializer(obj: Any) -> Any:
    """Custom JSON serializer for non-standard types."""
    if isinstance(obj, datetime):
        return obj.isoformat()
    if hasattr(obj, "model_dump"):
        return obj.model_dump()
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")
