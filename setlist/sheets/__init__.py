# Spreadsheet access and cell/row helpers
from setlist.sheets.a1 import a1_range, column_index, column_letter
from setlist.sheets.client import GoogleSheetRepository, SheetRepository, build_sheets_service
from setlist.sheets.hyperlink import CellData, decode_hyperlink, encode_hyperlink
from setlist.sheets.locator import find_append_target, find_user_column

__all__ = [
    "a1_range",
    "column_index",
    "column_letter",
    "GoogleSheetRepository",
    "SheetRepository",
    "build_sheets_service",
    "CellData",
    "decode_hyperlink",
    "encode_hyperlink",
    "find_append_target",
    "find_user_column",
]
