"""
Google Sheets v4 access behind a narrow repository interface.

Ledger logic only talks to SheetRepository, so it can run against an
in-memory grid in tests.
"""

from __future__ import annotations

from typing import Any, Protocol

from googleapiclient.discovery import build

from setlist.errors import translate_http_error
from setlist.log import get_logger
from setlist.sheets.hyperlink import CellData

CELL_FIELDS = "sheets.data.rowData.values(formattedValue,hyperlink,userEnteredValue)"


class SheetRepository(Protocol):
    """Spreadsheet operations the ledger depends on."""

    def sheet_titles(self) -> list[str]: ...

    def add_sheet(self, title: str, row_count: int, column_count: int) -> None: ...

    def read_values(self, range_a1: str) -> list[list[str]]: ...

    def read_cells(self, range_a1: str) -> list[list[CellData]]: ...

    def write_values(self, range_a1: str, rows: list[list[str]], raw: bool = False) -> None: ...


def build_sheets_service(credentials: Any) -> Any:
    """Build an authenticated Sheets API client."""
    return build("sheets", "v4", credentials=credentials, cache_discovery=False)


class GoogleSheetRepository:
    """SheetRepository backed by the Sheets API."""

    def __init__(self, service: Any, spreadsheet_id: str):
        self._service = service
        self._spreadsheet_id = spreadsheet_id
        self._logger = get_logger(__name__)

    def _execute(self, request: Any, context: str) -> dict:
        try:
            return request.execute()
        except Exception as e:
            self._logger.error(f"Sheets API error ({context}): {e}")
            raise translate_http_error(e, f"Sheets {context}") from e

    def sheet_titles(self) -> list[str]:
        response = self._execute(
            self._service.spreadsheets().get(
                spreadsheetId=self._spreadsheet_id,
                fields="sheets.properties.title",
            ),
            "get spreadsheet",
        )
        return [
            s.get("properties", {}).get("title", "")
            for s in response.get("sheets", [])
        ]

    def add_sheet(self, title: str, row_count: int, column_count: int) -> None:
        body = {
            "requests": [
                {
                    "addSheet": {
                        "properties": {
                            "title": title,
                            "gridProperties": {
                                "rowCount": row_count,
                                "columnCount": column_count,
                            },
                        }
                    }
                }
            ]
        }
        self._execute(
            self._service.spreadsheets().batchUpdate(
                spreadsheetId=self._spreadsheet_id,
                body=body,
            ),
            "add sheet",
        )
        self._logger.info(f"Created sheet {title!r}")

    def read_values(self, range_a1: str) -> list[list[str]]:
        response = self._execute(
            self._service.spreadsheets().values().get(
                spreadsheetId=self._spreadsheet_id,
                range=range_a1,
            ),
            f"read {range_a1}",
        )
        return [[str(v) for v in row] for row in response.get("values", [])]

    def read_cells(self, range_a1: str) -> list[list[CellData]]:
        response = self._execute(
            self._service.spreadsheets().get(
                spreadsheetId=self._spreadsheet_id,
                ranges=[range_a1],
                fields=CELL_FIELDS,
            ),
            f"read cells {range_a1}",
        )

        sheets = response.get("sheets") or [{}]
        data = sheets[0].get("data") or [{}]
        row_data = data[0].get("rowData", [])

        return [
            [CellData.from_api(cell) for cell in row.get("values", [])]
            for row in row_data
        ]

    def write_values(self, range_a1: str, rows: list[list[str]], raw: bool = False) -> None:
        self._execute(
            self._service.spreadsheets().values().update(
                spreadsheetId=self._spreadsheet_id,
                range=range_a1,
                valueInputOption="RAW" if raw else "USER_ENTERED",
                body={"values": rows},
            ),
            f"write {range_a1}",
        )
        self._logger.debug(f"Wrote {len(rows)} row(s) to {range_a1}")
