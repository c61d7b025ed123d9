"""
Google Sheets Document Store

DESIGN DECISION: Google Sheets can hold the shared document because:
1. Everyone on the trip can open the raw data in a browser
2. No database setup required
3. Built-in backup (Google's infrastructure)

LAYOUT: one worksheet, one row per top-level document field:

    field | json_value | updated_at

TRADEOFFS:
- No push notifications, so subscribers are fed by polling (``poll``)
- No transactions; writers in other processes are last-write-wins per field
- Each update is a single batch request, so it lands whole or not at all
- Each cell holds at most 50,000 characters, plenty for one trip
"""

import json
import threading
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any, Optional

import gspread
from google.oauth2.service_account import Credentials
from pydantic import ValidationError
from tenacity import retry, stop_after_attempt, wait_exponential

from tripboard.config import get_settings
from tripboard.logger import get_logger
from tripboard.models.trip import TripDocument
from tripboard.services.storage.interface import (
    Change,
    ConnectionError,
    NotFoundError,
    StorageError,
    TripDocumentStore,
    merge_updates,
)


logger = get_logger(__name__)

DOCUMENT_COLUMNS = ["field", "json_value", "updated_at"]


class GoogleSheetsClient:
    """
    Low-level Google Sheets client wrapper.

    Handles authentication and provides retry logic for API calls.
    """

    def __init__(self):
        self._client: Optional[gspread.Client] = None
        self._spreadsheet: Optional[gspread.Spreadsheet] = None
        self._settings = get_settings().google_sheets

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    def connect(self) -> gspread.Client:
        """
        Establish connection to Google Sheets.

        Uses service account credentials for authentication.
        """
        if self._client is None:
            try:
                scopes = [
                    "https://www.googleapis.com/auth/spreadsheets",
                    "https://www.googleapis.com/auth/drive",
                ]
                credentials = Credentials.from_service_account_file(
                    self._settings.credentials_path,
                    scopes=scopes,
                )
                self._client = gspread.authorize(credentials)
            except FileNotFoundError:
                raise ConnectionError(
                    f"Google credentials file not found: {self._settings.credentials_path}"
                )
            except Exception as e:
                raise ConnectionError(f"Failed to connect to Google Sheets: {e}")

        return self._client

    def get_spreadsheet(self) -> gspread.Spreadsheet:
        """Get the configured spreadsheet."""
        if self._spreadsheet is None:
            client = self.connect()
            try:
                self._spreadsheet = client.open_by_key(
                    self._settings.spreadsheet_id
                )
            except gspread.SpreadsheetNotFound:
                raise ConnectionError(
                    f"Spreadsheet not found: {self._settings.spreadsheet_id}"
                )
        return self._spreadsheet

    def get_document_sheet(self) -> gspread.Worksheet:
        """Get or create the worksheet holding the trip document."""
        spreadsheet = self.get_spreadsheet()
        try:
            sheet = spreadsheet.worksheet(self._settings.document_sheet_name)
        except gspread.WorksheetNotFound:
            sheet = spreadsheet.add_worksheet(
                title=self._settings.document_sheet_name,
                rows=100,
                cols=len(DOCUMENT_COLUMNS),
            )
            sheet.append_row(DOCUMENT_COLUMNS)
        return sheet


class GoogleSheetsTripStore(TripDocumentStore):
    """
    Google Sheets implementation of the document store.

    Field values are JSON-serialized into the ``json_value`` column.
    """

    def __init__(self, client: Optional[GoogleSheetsClient] = None):
        super().__init__()
        self._client = client or GoogleSheetsClient()
        self._last_seen: Optional[str] = None
        # Serializes writers within this process only
        self._lock = threading.Lock()

    def _read_fields(self, rows: list[list[str]]) -> dict[str, tuple[int, Any]]:
        """Map field name -> (sheet row number, decoded value)."""
        fields = {}
        for row_number, row in enumerate(rows[1:], start=2):
            if not row or not row[0]:
                continue
            try:
                fields[row[0]] = (row_number, json.loads(row[1]) if len(row) > 1 and row[1] else None)
            except json.JSONDecodeError as e:
                raise StorageError(f"Corrupt value for field '{row[0]}': {e}")
        return fields

    def _to_row(self, field: str, value: Any, stamp: str) -> list[str]:
        return [field, json.dumps(value, ensure_ascii=False), stamp]

    def _load(self) -> tuple[gspread.Worksheet, list[list[str]], dict[str, tuple[int, Any]]]:
        try:
            sheet = self._client.get_document_sheet()
            rows = sheet.get_all_values()
        except Exception as e:
            raise StorageError(f"Failed to read trip document: {e}")
        return sheet, rows, self._read_fields(rows)

    @staticmethod
    def _build(fields: Mapping[str, tuple[int, Any]]) -> TripDocument:
        data = {name: value for name, (_, value) in fields.items()}
        try:
            return TripDocument.model_validate(data)
        except ValidationError as e:
            raise StorageError(f"Stored trip document is invalid: {e}")

    async def get_document(self) -> Optional[TripDocument]:
        """Read all field rows and rebuild the document."""
        _, _, fields = self._load()
        if not fields:
            return None
        return self._build(fields)

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    async def set_document(self, document: TripDocument) -> None:
        """Rewrite the sheet with one row per field."""
        data = document.to_wire()
        stamp = data.get("updatedAt") or datetime.now(timezone.utc).isoformat()
        rows = [self._to_row(name, value, stamp) for name, value in data.items()]
        with self._lock:
            try:
                sheet = self._client.get_document_sheet()
                sheet.clear()
                sheet.append_rows([DOCUMENT_COLUMNS, *rows], value_input_option="RAW")
            except Exception as e:
                raise StorageError(f"Failed to write trip document: {e}")

        logger.info("document_replaced", title=document.title, backend="google_sheets")
        self._last_seen = stamp
        self._notify(document)

    async def update_fields(self, updates: Mapping[str, Any]) -> TripDocument:
        return await self.modify(lambda current: updates)

    async def modify(self, change: Change) -> TripDocument:
        """
        Rewrite only the rows of the fields that changed, plus ``updatedAt``.

        All rows go out in ONE batch request, so a failed write leaves the
        sheet as it was rather than half-updated.
        """
        with self._lock:
            sheet, rows, fields = self._load()
            if not fields:
                raise NotFoundError("No trip document to update")

            current = {name: value for name, (_, value) in fields.items()}
            updates = change(self._build(fields))
            document = merge_updates(current, updates)
            data = document.to_wire()
            stamp = data["updatedAt"]

            batch = []
            next_row = len(rows) + 1
            for name in dict.fromkeys([*updates, "updatedAt"]):
                if name in fields:
                    row_number = fields[name][0]
                else:
                    row_number = next_row
                    next_row += 1
                batch.append({
                    "range": f"A{row_number}:C{row_number}",
                    "values": [self._to_row(name, data.get(name), stamp)],
                })

            try:
                # Growing the grid writes no data
                if next_row - 1 > sheet.row_count:
                    sheet.add_rows(next_row - 1 - sheet.row_count)
                sheet.batch_update(batch, value_input_option="RAW")
            except Exception as e:
                raise StorageError(f"Failed to update trip document: {e}")

        logger.info("document_updated", fields=sorted(updates), backend="google_sheets")
        self._last_seen = stamp
        self._notify(document)
        return document

    async def poll(self) -> bool:
        """
        Re-read the sheet and notify subscribers if someone else changed it.

        Returns:
            True if a change was seen
        """
        document = await self.get_document()
        stamp = document.to_wire()["updatedAt"] if document else None
        if stamp == self._last_seen:
            return False

        self._last_seen = stamp
        self._notify(document)
        return True
