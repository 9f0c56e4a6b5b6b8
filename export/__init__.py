"""Export-Modul: Excel (openpyxl) und Terminal-Darstellung (Rich) für die Anlage."""

from export.excel_export import ExcelExporter

__all__ = ["ExcelExporter"]
