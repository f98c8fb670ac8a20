"""Report exporters."""

from src.infrastructure.export.csv_export import export_filename, inventory_rows, to_csv

__all__ = ["to_csv", "export_filename", "inventory_rows"]
