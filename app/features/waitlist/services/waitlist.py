from datetime import date
from typing import Optional

import gspread
import requests
from google.auth.exceptions import GoogleAuthError
from google.oauth2.service_account import Credentials

from app.features.waitlist.schemas.waitlist import LeadRecord, WaitlistIn
from app.platform.config import Settings
from app.platform.exceptions import AccessError, ConfigurationError
from app.platform.logger import get_logger

logger = get_logger(__name__)

SHEETS_SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]


class LeadSheetService:
    """Appends waitlist leads to a Google Sheet."""

    def __init__(self, settings: Settings):
        self.settings = settings

    def _check_config(self) -> None:
        if not (
            self.settings.GOOGLE_SHEETS_ID
            and self.settings.GOOGLE_SHEETS_CLIENT_EMAIL
            and self.settings.GOOGLE_SHEETS_PRIVATE_KEY
        ):
            raise ConfigurationError("Missing required environment variables")

    def _credentials(self) -> Credentials:
        info = {
            "type": "service_account",
            # Keys pasted into env files usually carry literal "\n" sequences
            "private_key": self.settings.GOOGLE_SHEETS_PRIVATE_KEY.replace("\\n", "\n"),
            "client_email": self.settings.GOOGLE_SHEETS_CLIENT_EMAIL,
            "token_uri": "https://oauth2.googleapis.com/token",
        }
        if self.settings.GOOGLE_SHEETS_PROJECT_ID:
            info["project_id"] = self.settings.GOOGLE_SHEETS_PROJECT_ID
        return Credentials.from_service_account_info(info, scopes=SHEETS_SCOPES)

    def _open_sheet(self) -> gspread.Spreadsheet:
        # A key that does not parse is reported like any other refused access
        try:
            client = gspread.authorize(self._credentials())
            return client.open_by_key(self.settings.GOOGLE_SHEETS_ID)
        except (
            gspread.exceptions.GSpreadException,
            GoogleAuthError,
            requests.exceptions.RequestException,
            ValueError,
        ) as e:
            logger.error(f"Failed to access spreadsheet: {e}")
            raise AccessError(str(e)) from e

    def submit(self, lead: WaitlistIn, today: Optional[date] = None) -> LeadRecord:
        self._check_config()
        spreadsheet = self._open_sheet()

        record = LeadRecord(
            name=lead.name,
            email=lead.email,
            phone=lead.phone,
            plan=lead.plan,
            submitted_date=today or date.today(),
        )
        response = spreadsheet.values_append(
            self.settings.GOOGLE_SHEETS_RANGE,
            params={"valueInputOption": "USER_ENTERED"},
            body={"values": [record.to_row()]},
        )
        logger.info(f"Append response: {response.get('updates', {}).get('updatedRange')}")
        return record
