"""Google Sheets storage backend.

The spreadsheet is used purely as a remote blob container: the entire
document is serialized into cell A1 of the first worksheet. There is no
per-row mapping.
"""

import asyncio
import logging
from typing import Any, Callable, Optional, TypeVar

import gspread
from google.auth.exceptions import GoogleAuthError
from google.oauth2.service_account import Credentials
from gspread.exceptions import GSpreadException

from app.exceptions import StorageConnectionError, StorageWriteError
from app.models.document import Document
from app.storage.base import PersistenceBackend

logger = logging.getLogger(__name__)

T = TypeVar("T")

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]
TOKEN_URI = "https://oauth2.googleapis.com/token"
DOCUMENT_CELL = "A1"
# Google Sheets refuses cell values longer than this
CELL_CHAR_LIMIT = 50_000

DEFAULT_TIMEOUT = 10.0

REMOTE_ERRORS = (asyncio.TimeoutError, GSpreadException, GoogleAuthError, OSError)


def build_credentials(
    credentials_file: Optional[str] = None,
    client_email: Optional[str] = None,
    private_key: Optional[str] = None,
) -> Credentials:
    """Create service account credentials from a file or raw key material.

    Args:
        credentials_file: Path to a service account JSON file.
        client_email: Service account email (used without a file).
        private_key: PEM private key; literal ``\\n`` sequences are
            turned into newlines, as env vars usually carry them escaped.

    Returns:
        Credentials scoped for spreadsheet access.

    Raises:
        StorageConnectionError: If neither source is configured.
    """
    if credentials_file:
        return Credentials.from_service_account_file(credentials_file, scopes=SCOPES)
    if client_email and private_key:
        info = {
            "type": "service_account",
            "client_email": client_email,
            "private_key": private_key.replace("\\n", "\n"),
            "token_uri": TOKEN_URI,
        }
        return Credentials.from_service_account_info(info, scopes=SCOPES)
    raise StorageConnectionError(
        "Google Sheets credentials are not configured "
        "(set GOOGLE_CREDENTIALS_FILE or GOOGLE_SERVICE_ACCOUNT_EMAIL "
        "and GOOGLE_PRIVATE_KEY)"
    )


class GoogleSheetsBackend(PersistenceBackend):
    """Stores the document as compact JSON in one spreadsheet cell.

    Every remote call runs in a worker thread and is attempted at most
    ``retries`` times. Reads are abandoned after ``timeout`` seconds. Writes
    are never abandoned while their thread still runs, since a stale write
    landing after a newer one would undo it; they are bounded by the HTTP
    timeout that ``connect()`` sets on the gspread client instead.
    """

    display_name = "Google Sheets"

    def __init__(
        self,
        worksheet: gspread.Worksheet,
        timeout: float = DEFAULT_TIMEOUT,
        retries: int = 3,
        retry_delay: float = 0.5,
    ) -> None:
        """Initialize Google Sheets backend.

        Args:
            worksheet: Worksheet whose A1 cell holds the document.
            timeout: Seconds a read may take before it is retried.
            retries: Attempts per operation before giving up.
            retry_delay: Base delay between attempts, grows linearly.
        """
        super().__init__()
        self._worksheet = worksheet
        self._timeout = timeout
        self._retries = max(1, retries)
        self._retry_delay = retry_delay

    @classmethod
    def connect(
        cls,
        sheet_id: str,
        credentials_file: Optional[str] = None,
        client_email: Optional[str] = None,
        private_key: Optional[str] = None,
        **kwargs: Any,
    ) -> "GoogleSheetsBackend":
        """Authorize and open the spreadsheet.

        This performs blocking network calls and is meant to run once at
        startup.

        Args:
            sheet_id: Spreadsheet key.
            credentials_file: Path to a service account JSON file.
            client_email: Service account email.
            private_key: Service account private key.
            **kwargs: Passed to the constructor (timeout, retries).

        Returns:
            Connected backend.

        Raises:
            StorageConnectionError: If authorization or opening fails.
        """
        try:
            credentials = build_credentials(credentials_file, client_email, private_key)
            client = gspread.authorize(credentials)
            client.http_client.set_timeout(kwargs.get("timeout", DEFAULT_TIMEOUT))
            spreadsheet = client.open_by_key(sheet_id)
            worksheet = spreadsheet.get_worksheet(0)
        except StorageConnectionError:
            raise
        except (GSpreadException, GoogleAuthError, OSError, ValueError) as e:
            logger.error(f"Failed to connect to Google Sheets: {e}")
            raise StorageConnectionError(
                f"Failed to connect to Google Sheets: {e}"
            ) from e

        if worksheet is None:
            raise StorageConnectionError(f"Spreadsheet {sheet_id} has no worksheets")

        logger.info(
            "Connected to Google Sheet",
            extra={"title": spreadsheet.title, "sheet_id": sheet_id},
        )
        return cls(worksheet, **kwargs)

    def _read_cell(self) -> Optional[str]:
        return self._worksheet.acell(DOCUMENT_CELL).value

    def _write_cell(self, text: str) -> None:
        self._worksheet.update_acell(DOCUMENT_CELL, text)

    async def _call(
        self, func: Callable[..., T], *args: Any, abandon_on_timeout: bool = True
    ) -> T:
        """Run a blocking gspread call with bounded retries.

        With ``abandon_on_timeout`` the wait is cut off after ``timeout``
        seconds. Without it the call always runs to completion before the
        next attempt starts or the method returns.

        Raises:
            StorageConnectionError: If every attempt failed.
        """
        last_error: Optional[BaseException] = None
        for attempt in range(1, self._retries + 1):
            try:
                if not abandon_on_timeout:
                    return await asyncio.to_thread(func, *args)
                return await asyncio.wait_for(
                    asyncio.to_thread(func, *args), timeout=self._timeout
                )
            except REMOTE_ERRORS as e:
                last_error = e
                logger.warning(
                    "Google Sheets call failed",
                    extra={
                        "operation": func.__name__,
                        "attempt": attempt,
                        "retries": self._retries,
                        "error": repr(e),
                    },
                )
                if attempt < self._retries and self._retry_delay > 0:
                    await asyncio.sleep(self._retry_delay * attempt)

        raise StorageConnectionError(
            f"Google Sheets unavailable after {self._retries} attempts: {last_error!r}"
        ) from last_error

    async def load(self) -> Document:
        """Read the document from cell A1.

        Returns:
            Stored document, or defaults if the cell is empty, corrupt or
            the sheet cannot be reached.
        """
        try:
            raw = await self._call(self._read_cell)
        except StorageConnectionError as e:
            return self._fallback(str(e))

        if not raw:
            return self._fallback("document cell is empty", level=logging.WARNING)

        try:
            return Document.from_json(raw)
        except ValueError as e:
            return self._fallback(f"corrupt content: {e}")

    async def save(self, document: Document) -> None:
        """Overwrite cell A1 with the serialized document.

        Raises:
            StorageWriteError: If the document is too large for one cell or
                the sheet cannot be written.
        """
        text = document.to_json()
        if len(text) > CELL_CHAR_LIMIT:
            logger.error(
                "Document exceeds spreadsheet cell limit",
                extra={"size": len(text), "limit": CELL_CHAR_LIMIT},
            )
            raise StorageWriteError(
                f"Document size {len(text)} exceeds cell limit of {CELL_CHAR_LIMIT}"
            )

        try:
            await self._call(self._write_cell, text, abandon_on_timeout=False)
        except StorageConnectionError as e:
            raise StorageWriteError(f"Failed to write document: {e}") from e
        logger.debug("Document saved to Google Sheets", extra={"size": len(text)})

    async def verify_connection(self) -> bool:
        """Verify the document cell can be read.

        Raises:
            StorageConnectionError: If the sheet cannot be reached.
        """
        await self._call(self._read_cell)
        return True
