"""JSON export functionality for saved configurations."""

import json
from pathlib import Path
from typing import Any, TextIO

from tt_class.models.pydantic_models import SavedConfigurationRead


def configuration_to_dict(config: SavedConfigurationRead) -> dict[str, Any]:
    """Convert a saved configuration to a JSON-serializable dictionary."""
    return config.model_dump(mode="json")


def export_to_json(
    configs: list[SavedConfigurationRead],
    output: Path | TextIO | None = None,
    indent: int = 2,
) -> str:
    """Export saved configurations to JSON.

    Args:
        configs: Configurations to export.
        output: Optional file path or file-like object. If None, returns string.
        indent: JSON indentation level.

    Returns:
        JSON string if output is None, empty string otherwise.
    """
    data = {
        "count": len(configs),
        "configurations": [configuration_to_dict(config) for config in configs],
    }

    if output is None:
        return json.dumps(data, indent=indent, ensure_ascii=False)

    if isinstance(output, Path):
        with open(output, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=indent, ensure_ascii=False)
        return ""

    json.dump(data, output, indent=indent, ensure_ascii=False)
    return ""
