"""Unit tests for the Google Sheets storage backend.

Tests cover:
- Reading the document from cell A1 with default fallbacks
- Writing the document as compact JSON
- Bounded retries for transient API failures
- Credential construction and connection errors
"""

import asyncio
import json
import time
from unittest.mock import MagicMock, patch

import pytest
from gspread.exceptions import GSpreadException

from app.exceptions import StorageConnectionError, StorageWriteError
from app.models.document import Claim, Document
from app.storage.sheets import (
    CELL_CHAR_LIMIT,
    SCOPES,
    GoogleSheetsBackend,
    build_credentials,
)


def make_cell(value):
    """Create a mock gspread cell."""
    cell = MagicMock()
    cell.value = value
    return cell


@pytest.fixture
def worksheet():
    """Create a mock worksheet with an empty A1 cell."""
    sheet = MagicMock()
    sheet.acell.return_value = make_cell(None)
    return sheet


@pytest.fixture
def backend(worksheet) -> GoogleSheetsBackend:
    """Create backend around the mock worksheet without retry delays."""
    return GoogleSheetsBackend(worksheet, timeout=1.0, retries=3, retry_delay=0)


class TestGoogleSheetsBackendLoad:
    """Tests for GoogleSheetsBackend.load()."""

    async def test_empty_cell_returns_default(self, backend, worksheet):
        """Test: Empty A1 yields the default document."""
        assert await backend.load() == Document.default()
        worksheet.acell.assert_called_with("A1")

    async def test_corrupt_cell_returns_default(self, backend, worksheet):
        """Test: Unparsable A1 yields the default document."""
        worksheet.acell.return_value = make_cell("{broken")

        assert await backend.load() == Document.default()

    async def test_deeply_nested_cell_returns_default(self, backend, worksheet):
        """Test: A1 nested past the recursion limit yields the default."""
        worksheet.acell.return_value = make_cell("[" * 200_000)

        assert await backend.load() == Document.default()

    async def test_api_failure_returns_default_after_retries(self, backend, worksheet):
        """Test: Persistent API errors yield defaults after all attempts."""
        worksheet.acell.side_effect = GSpreadException("quota exceeded")

        assert await backend.load() == Document.default()
        assert worksheet.acell.call_count == 3

    async def test_transient_failure_is_retried(self, backend, worksheet, roster_document):
        """Test: A single failure followed by success returns stored data."""
        worksheet.acell.side_effect = [
            ConnectionError("reset"),
            make_cell(roster_document.to_json()),
        ]

        assert await backend.load() == roster_document
        assert worksheet.acell.call_count == 2

    async def test_timeout_counts_as_failure(self, worksheet):
        """Test: Reads exceeding the timeout fall back to defaults."""

        def slow_cell(label):
            time.sleep(0.2)
            return make_cell(Document.default().to_json())

        worksheet.acell.side_effect = slow_cell
        backend = GoogleSheetsBackend(worksheet, timeout=0.01, retries=1, retry_delay=0)

        assert await backend.load() == Document.default()


class TestGoogleSheetsBackendSave:
    """Tests for GoogleSheetsBackend.save()."""

    async def test_save_writes_compact_json_to_a1(self, backend, worksheet, roster_document):
        """Test: The whole document is written into A1."""
        await backend.save(roster_document)

        label, text = worksheet.update_acell.call_args.args
        assert label == "A1"
        assert "\n" not in text
        assert json.loads(text) == roster_document.to_dict()

    async def test_round_trip(self, backend, worksheet, roster_document):
        """Test: load() after save() returns an equal document."""
        roster_document.slots_for("Ms. Novak")["16:00"] = Claim(
            id="a", name="Jan", token="t"
        )
        worksheet.update_acell.side_effect = (
            lambda label, text: setattr(worksheet.acell.return_value, "value", text)
        )

        await backend.save(roster_document)

        assert await backend.load() == roster_document

    async def test_write_failure_raises_storage_write_error(self, backend, worksheet):
        """Test: Failing writes surface as StorageWriteError after retries."""
        worksheet.update_acell.side_effect = GSpreadException("forbidden")

        with pytest.raises(StorageWriteError):
            await backend.save(Document.default())

        assert worksheet.update_acell.call_count == 3

    async def test_slow_write_is_not_overtaken_by_later_save(self, worksheet):
        """Test: A write slower than the read timeout still finishes first."""
        stored = {}
        calls = []

        def write_cell(label, text):
            calls.append(text)
            if len(calls) == 1:
                time.sleep(0.3)
            stored[label] = text

        worksheet.update_acell.side_effect = write_cell
        backend = GoogleSheetsBackend(worksheet, timeout=0.05, retries=2, retry_delay=0)
        newer = Document(
            reservations={"Ms. Novak": {"16:00": Claim(id="a", name="Jan", token="t")}}
        )

        await backend.save(Document())
        await backend.save(newer)
        await asyncio.sleep(0.4)

        assert len(calls) == 2
        assert Document.from_json(stored["A1"]) == newer

    async def test_http_timeout_on_write_is_retried(self, backend, worksheet):
        """Test: A write cut off by the HTTP timeout is attempted again."""
        worksheet.update_acell.side_effect = [TimeoutError("read timed out"), None]

        await backend.save(Document.default())

        assert worksheet.update_acell.call_count == 2

    async def test_oversized_document_is_rejected_before_write(self, backend, worksheet):
        """Test: Documents beyond the cell limit never reach the API."""
        document = Document(
            reservations={
                "Ms. Novak": {
                    f"{i}": Claim(id=f"id{i}", name="x" * 50, token="t" * 32)
                    for i in range(CELL_CHAR_LIMIT // 50)
                }
            }
        )

        with pytest.raises(StorageWriteError):
            await backend.save(document)

        worksheet.update_acell.assert_not_called()


class TestGoogleSheetsBackendVerify:
    """Tests for GoogleSheetsBackend.verify_connection()."""

    async def test_verify_connection_success(self, backend):
        """Test: Readable sheet verifies successfully."""
        assert await backend.verify_connection() is True

    async def test_verify_connection_failure(self, backend, worksheet):
        """Test: Unreachable sheet raises StorageConnectionError."""
        worksheet.acell.side_effect = GSpreadException("unavailable")

        with pytest.raises(StorageConnectionError):
            await backend.verify_connection()


class TestBuildCredentials:
    """Tests for service account credential construction."""

    def test_credentials_file_takes_precedence(self):
        """Test: A credentials file is used when configured."""
        with patch("app.storage.sheets.Credentials") as MockCredentials:
            build_credentials("creds.json", "bot@example.com", "key")

        MockCredentials.from_service_account_file.assert_called_once_with(
            "creds.json", scopes=SCOPES
        )
        MockCredentials.from_service_account_info.assert_not_called()

    def test_escaped_newlines_in_private_key_are_restored(self):
        """Test: Literal \\n sequences from env vars become newlines."""
        with patch("app.storage.sheets.Credentials") as MockCredentials:
            build_credentials(None, "bot@example.com", "-----BEGIN\\nabc\\n-----END")

        info = MockCredentials.from_service_account_info.call_args.args[0]
        assert info["client_email"] == "bot@example.com"
        assert info["private_key"] == "-----BEGIN\nabc\n-----END"

    def test_missing_credentials_raise(self):
        """Test: No credential source raises StorageConnectionError."""
        with pytest.raises(StorageConnectionError):
            build_credentials(None, None, None)


class TestGoogleSheetsBackendConnect:
    """Tests for GoogleSheetsBackend.connect()."""

    def test_connect_opens_first_worksheet(self):
        """Test: connect() authorizes and opens worksheet 0 of the sheet."""
        with patch("app.storage.sheets.build_credentials") as mock_creds, patch(
            "app.storage.sheets.gspread.authorize"
        ) as mock_authorize:
            spreadsheet = mock_authorize.return_value.open_by_key.return_value

            backend = GoogleSheetsBackend.connect(
                "sheet-123", credentials_file="creds.json", timeout=5.0, retries=2
            )

        mock_authorize.assert_called_once_with(mock_creds.return_value)
        mock_authorize.return_value.http_client.set_timeout.assert_called_once_with(5.0)
        mock_authorize.return_value.open_by_key.assert_called_once_with("sheet-123")
        spreadsheet.get_worksheet.assert_called_once_with(0)
        assert backend._worksheet is spreadsheet.get_worksheet.return_value
        assert backend._timeout == 5.0
        assert backend._retries == 2

    def test_connect_wraps_api_errors(self):
        """Test: gspread errors during setup become StorageConnectionError."""
        with patch("app.storage.sheets.build_credentials"), patch(
            "app.storage.sheets.gspread.authorize"
        ) as mock_authorize:
            mock_authorize.return_value.open_by_key.side_effect = GSpreadException(
                "not shared"
            )

            with pytest.raises(StorageConnectionError):
                GoogleSheetsBackend.connect("sheet-123", credentials_file="creds.json")

    def test_connect_fails_without_worksheets(self):
        """Test: A spreadsheet without worksheets cannot be used."""
        with patch("app.storage.sheets.build_credentials"), patch(
            "app.storage.sheets.gspread.authorize"
        ) as mock_authorize:
            spreadsheet = mock_authorize.return_value.open_by_key.return_value
            spreadsheet.get_worksheet.return_value = None

            with pytest.raises(StorageConnectionError):
                GoogleSheetsBackend.connect("sheet-123", credentials_file="creds.json")
