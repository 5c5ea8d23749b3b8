"""CSV export functionality for saved configurations."""

import csv
from io import StringIO
from pathlib import Path
from typing import TextIO

from tt_class.models.pydantic_models import CATEGORIES, SavedConfigurationRead

# Fixed columns, followed by one column per modification category
BASE_COLUMNS = [
    "id",
    "make",
    "model",
    "base_class",
    "base_class_points",
    "modification_points",
    "total_points",
    "final_class",
    "created_at",
]
EXPORT_COLUMNS = BASE_COLUMNS + list(CATEGORIES)


def configuration_to_row(config: SavedConfigurationRead) -> dict[str, str]:
    """Convert a saved configuration to a CSV row.

    Multiple items in one category are joined with "; ".
    """
    row = {
        "id": str(config.id),
        "make": config.make,
        "model": config.model,
        "base_class": config.base_class,
        "base_class_points": str(config.base_class_points),
        "modification_points": str(config.modification_points),
        "total_points": str(config.total_points),
        "final_class": config.final_class,
        "created_at": config.created_at.isoformat(),
    }
    for category in CATEGORIES:
        row[category] = "; ".join(config.mods.get(category, []))
    return row


def export_to_csv(
    configs: list[SavedConfigurationRead],
    output: Path | TextIO | None = None,
) -> str:
    """Export saved configurations to CSV.

    Args:
        configs: Configurations to export.
        output: Optional file path or file-like object. If None, returns string.

    Returns:
        CSV string if output is None, empty string otherwise.
    """
    rows = [configuration_to_row(config) for config in configs]

    if isinstance(output, Path):
        with open(output, "w", newline="", encoding="utf-8") as f:
            _write_rows(f, rows)
        return ""

    if output is None:
        buffer = StringIO()
        _write_rows(buffer, rows)
        return buffer.getvalue()

    _write_rows(output, rows)
    return ""


def _write_rows(stream: TextIO, rows: list[dict[str, str]]) -> None:
    writer = csv.DictWriter(stream, fieldnames=EXPORT_COLUMNS)
    writer.writeheader()
    writer.writerows(rows)
