"""
Google Sheets access for the repositories.

A single SheetsStore is built when the application starts and shared by every
request. Calls block, carry no client-side retry, and any failure surfaces as
StoreUnavailable.
"""
import logging
from functools import wraps

import gspread
import requests
from google.auth.exceptions import GoogleAuthError
from google.oauth2.service_account import Credentials

from bpsheet.errors import StoreUnavailable

logger = logging.getLogger(__name__)

SCOPES = ['https://www.googleapis.com/auth/spreadsheets']

# Environment keys that together describe a service account
SERVICE_ACCOUNT_ENV_KEYS = {
    'type': 'GOOGLE_SA_TYPE',
    'project_id': 'GOOGLE_SA_PROJECT_ID',
    'private_key_id': 'GOOGLE_SA_PRIVATE_KEY_ID',
    'private_key': 'GOOGLE_SA_PRIVATE_KEY',
    'client_email': 'GOOGLE_SA_CLIENT_EMAIL',
    'client_id': 'GOOGLE_SA_CLIENT_ID',
}

_STORE_ERRORS = (gspread.exceptions.GSpreadException,
                 requests.exceptions.RequestException,
                 GoogleAuthError)


def sheet_name_from_range(range_ref: str) -> str:
    """Sheet title from a range reference such as 'transactions'!A:G."""
    return range_ref.split('!')[0].replace("'", '')


def _quote_sheet_name(sheet_name: str) -> str:
    return "'{}'".format(sheet_name.replace("'", "''"))


def credentials_info_from_config(config) -> dict:
    """Build service-account info from GOOGLE_SA_* values, or None if incomplete."""
    values = {field: config.get(key) for field, key in SERVICE_ACCOUNT_ENV_KEYS.items()}
    if not all(values.values()):
        return None
    values['private_key'] = values['private_key'].replace('\\n', '\n')
    values['token_uri'] = 'https://oauth2.googleapis.com/token'
    return values


def store_call(operation: str):
    """Decorator that turns client and transport failures into StoreUnavailable."""
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except _STORE_ERRORS as e:
                raise StoreUnavailable(f'Spreadsheet {operation} failed') from e
        return wrapper
    return decorator


class SheetsStore:
    """Row operations against one spreadsheet."""

    def __init__(self, spreadsheet):
        self._spreadsheet = spreadsheet

    @classmethod
    def from_config(cls, config):
        """
        Authorise with a service account and open the configured spreadsheet.

        Raises RuntimeError when the spreadsheet id or credentials are missing,
        so a misconfigured process fails at startup instead of on first use.
        """
        sheet_id = config.get('GOOGLE_SHEET_ID')
        if not sheet_id:
            raise RuntimeError('GOOGLE_SHEET_ID environment variable is required')

        info = credentials_info_from_config(config)
        if info is not None:
            credentials = Credentials.from_service_account_info(info, scopes=SCOPES)
        else:
            key_file = config.get('GOOGLE_APPLICATION_CREDENTIALS')
            if not key_file:
                raise RuntimeError(
                    'Google credentials are required: set the GOOGLE_SA_* variables '
                    'or GOOGLE_APPLICATION_CREDENTIALS'
                )
            credentials = Credentials.from_service_account_file(key_file, scopes=SCOPES)

        try:
            client = gspread.authorize(credentials)
            spreadsheet = client.open_by_key(sheet_id)
        except _STORE_ERRORS as e:
            raise RuntimeError(f'Unable to open spreadsheet {sheet_id}: {e}') from e

        logger.info('Connected to spreadsheet %s', sheet_id)
        return cls(spreadsheet)

    @store_call('read')
    def read_range(self, range_ref: str) -> list:
        response = self._spreadsheet.values_get(range_ref)
        return response.get('values', [])

    @store_call('append')
    def append_row(self, range_ref: str, row: list) -> None:
        self._spreadsheet.values_append(
            range_ref,
            params={'valueInputOption': 'USER_ENTERED', 'insertDataOption': 'INSERT_ROWS'},
            body={'values': [row]},
        )

    @store_call('update')
    def overwrite_row(self, sheet_name: str, row_index: int, row: list) -> None:
        """Overwrite one row starting at column A. row_index is 1-based."""
        self._spreadsheet.values_update(
            f'{_quote_sheet_name(sheet_name)}!A{row_index}',
            params={'valueInputOption': 'USER_ENTERED'},
            body={'values': [row]},
        )

    @store_call('delete')
    def delete_structural_row(self, sheet_id: int, row_index: int) -> None:
        """Remove one row (1-based) and shift the rows below it up."""
        self._spreadsheet.batch_update({
            'requests': [{
                'deleteDimension': {
                    'range': {
                        'sheetId': sheet_id,
                        'dimension': 'ROWS',
                        'startIndex': row_index - 1,
                        'endIndex': row_index,
                    }
                }
            }]
        })

    @store_call('metadata lookup')
    def get_sheet_id(self, sheet_name: str):
        """Numeric sheet id for a tab title, or None."""
        metadata = self._spreadsheet.fetch_sheet_metadata()
        for sheet in metadata.get('sheets', []):
            properties = sheet.get('properties', {})
            if properties.get('title') == sheet_name:
                return properties.get('sheetId')
        return None
