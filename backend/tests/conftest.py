"""
Shared fixtures: an in-memory spreadsheet and a configured Flask app.
"""
import copy
import pytest

from bpsheet import create_app
from bpsheet.store.sheets_client import sheet_name_from_range

TEST_CONFIG = {
    'JWT_SECRET_KEY': 'test-secret',
    'JWT_ACCESS_TOKEN_EXPIRES': '1h',
    'ADMIN_USERNAME': 'admin',
    'ADMIN_PASSWORD': 'correct-horse',
    'AUDIT_LOG_FILE': '',
}


class FakeSheetsStore:
    """In-memory stand-in for SheetsStore that records every call."""

    def __init__(self, sheets=None):
        self.sheets = {}
        self.calls = []
        for sheet_id, (name, rows) in enumerate((sheets or {}).items(), start=100):
            self.sheets[name] = {'id': sheet_id, 'rows': [list(r) for r in rows]}

    def rows(self, sheet_name):
        return self.sheets[sheet_name]['rows']

    def _sheet(self, sheet_name):
        return self.sheets.setdefault(sheet_name, {'id': 100 + len(self.sheets), 'rows': []})

    def read_range(self, range_ref):
        self.calls.append(('read_range', range_ref))
        sheet = self.sheets.get(sheet_name_from_range(range_ref))
        return copy.deepcopy(sheet['rows']) if sheet else []

    def append_row(self, range_ref, row):
        self.calls.append(('append_row', range_ref, list(row)))
        self._sheet(sheet_name_from_range(range_ref))['rows'].append(list(row))

    def overwrite_row(self, sheet_name, row_index, row):
        self.calls.append(('overwrite_row', sheet_name, row_index, list(row)))
        rows = self._sheet(sheet_name)['rows']
        while len(rows) < row_index:
            rows.append([])
        rows[row_index - 1] = list(row)

    def delete_structural_row(self, sheet_id, row_index):
        self.calls.append(('delete_structural_row', sheet_id, row_index))
        for sheet in self.sheets.values():
            if sheet['id'] == sheet_id:
                del sheet['rows'][row_index - 1]
                return
        raise AssertionError(f'unknown sheet id {sheet_id}')

    def get_sheet_id(self, sheet_name):
        self.calls.append(('get_sheet_id', sheet_name))
        sheet = self.sheets.get(sheet_name)
        return sheet['id'] if sheet else None

    def call_names(self):
        return [call[0] for call in self.calls]


@pytest.fixture
def store():
    return FakeSheetsStore({
        'transactions': [['id', 'date', 'systolic', 'diastolic', 'pulse', 'category_id', 'note']],
        'categories': [
            ['id', 'name', 'color_hex'],
            ['1', '一般測量', '#9E9E9E'],
            ['cat-1', 'Morning', '#FF0000'],
        ],
        'budgets': [['id', 'amount']],
    })


@pytest.fixture
def app(store):
    return create_app(config=TEST_CONFIG, store=store)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_headers(client):
    response = client.post('/auth/login', json={
        'username': TEST_CONFIG['ADMIN_USERNAME'],
        'password': TEST_CONFIG['ADMIN_PASSWORD'],
    })
    assert response.status_code == 200
    return {'Authorization': f"Bearer {response.get_json()['token']}"}
