"""Export modules."""

from tt_class.export.csv_exporter import export_to_csv
from tt_class.export.json_exporter import export_to_json

__all__ = ["export_to_csv", "export_to_json"]
