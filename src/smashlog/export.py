"""
Export Functionality for smashlog

Provides export formats for analysis results:
- JSON (default): complete result, programmatic access
- CSV: the per-code frequency table
"""

import csv
import json
import logging
from datetime import datetime
from io import StringIO
from pathlib import Path
from typing import Any

from smashlog import __version__
from smashlog.core.config import ExportConfig
from smashlog.core.models import AnalysisResult
from smashlog.core.taxonomy import classify, display_name

logger = logging.getLogger(__name__)

CSV_COLUMNS = ["raw_code", "display_name", "category", "count", "share"]


# ============================================================================
# Data Conversion
# ============================================================================


def result_to_dict(result: AnalysisResult) -> dict[str, Any]:
    """Convert an AnalysisResult to a JSON-safe dictionary."""
    counts = result.counts
    total = counts.total

    frequencies = [
        {
            "raw_code": freq.raw_code,
            "display_name": display_name(freq.raw_code),
            "category": classify(freq.raw_code).value,
            "count": freq.count,
        }
        for freq in result.frequencies
    ]

    top = result.top_action
    return {
        "player": {
            "student_id": result.header.student_id,
            "match_number": result.header.match_number,
        },
        "counts": {
            "attack": counts.attack,
            "shield": counts.shield,
            "dodge": counts.dodge,
            "total": total,
        },
        "ratios": {
            "attack": counts.attack_ratio,
            "shield": counts.shield_ratio,
            "dodge": counts.dodge_ratio,
        },
        "most_frequent_category": counts.most_frequent.value,
        "frequencies": frequencies,
        "top_action": (
            {"raw_code": top.raw_code, "display_name": display_name(top.raw_code), "count": top.count}
            if top
            else None
        ),
    }


# ============================================================================
# JSON Export
# ============================================================================


def export_to_json(
    result: AnalysisResult,
    output_path: Path | None = None,
    indent: int = 2,
    include_metadata: bool = True,
) -> str:
    """
    Export an analysis result to JSON format.

    Args:
        result: Analysis result
        output_path: Optional path to write the file
        indent: JSON indentation level
        include_metadata: Whether to include export metadata

    Returns:
        JSON string
    """
    export_data = result_to_dict(result)

    if include_metadata:
        export_data = {
            "_metadata": {
                "exported_at": datetime.now().isoformat(),
                "format": "smashlog_json",
                "version": __version__,
            },
            **export_data,
        }

    json_str = json.dumps(export_data, indent=indent, ensure_ascii=False)

    if output_path:
        output_path.write_text(json_str, encoding="utf-8")
        logger.info(f"Exported JSON to: {output_path}")

    return json_str


# ============================================================================
# CSV Export
# ============================================================================


def export_to_csv(
    result: AnalysisResult,
    output_path: Path | None = None,
    delimiter: str = ",",
) -> str:
    """
    Export the per-code frequency table to CSV format.

    The share column is the code's percentage of all actions.

    Returns:
        CSV string
    """
    total = result.counts.total
    buffer = StringIO()
    writer = csv.writer(buffer, delimiter=delimiter, lineterminator="\n")
    writer.writerow(CSV_COLUMNS)

    for freq in result.frequencies:
        share = freq.count / total * 100 if total else 0.0
        writer.writerow([
            freq.raw_code,
            display_name(freq.raw_code),
            classify(freq.raw_code).value,
            freq.count,
            f"{share:.1f}",
        ])

    csv_str = buffer.getvalue()

    if output_path:
        output_path.write_text(csv_str, encoding="utf-8")
        logger.info(f"Exported CSV to: {output_path}")

    return csv_str


# ============================================================================
# Dispatch
# ============================================================================


def export_result(
    result: AnalysisResult,
    output_path: Path,
    config: ExportConfig | None = None,
) -> str:
    """
    Export a result, choosing the format from the file extension.

    Raises:
        ValueError: If the extension is not .json or .csv
    """
    config = config or ExportConfig()
    suffix = output_path.suffix.lower().lstrip(".") or config.default_format

    if suffix == "json":
        return export_to_json(
            result,
            output_path,
            indent=config.json_indent,
            include_metadata=config.include_metadata,
        )
    elif suffix == "csv":
        return export_to_csv(result, output_path, delimiter=config.csv_delimiter)
    else:
        raise ValueError(f"Unsupported export format: {output_path.suffix}")
