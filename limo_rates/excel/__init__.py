"""Excel invoice output."""
from limo_rates.excel.generator import generate_invoice_workbook

__all__ = ["generate_invoice_workbook"]
