"""
Repository behaviour against the in-memory spreadsheet.
"""
import pytest

from bpsheet.errors import NotFound, StoreUnavailable, ImmutableEntity
from bpsheet.models import reading_table, category_table, threshold_table
from bpsheet.repositories import (
    ReadingRepository, CategoryRepository, ThresholdRepository, attach_categories,
)
from .conftest import FakeSheetsStore

READING_HEADER = ['id', 'date', 'systolic', 'diastolic', 'pulse', 'category_id', 'note']


def reading_repo(rows):
    store = FakeSheetsStore({'transactions': [READING_HEADER] + rows})
    return store, ReadingRepository(store, reading_table())


class TestFindById:

    def test_trims_whitespace(self):
        _, repo = reading_repo([['1', '2024-01-01', '118', '76'],
                                [' 42 ', '2024-01-02', '121', '79']])
        found = repo.find_by_id('42')
        assert found.row_index == 3
        assert found.data['systolic'] == '121'

    def test_is_case_sensitive(self):
        _, repo = reading_repo([['abc', '2024-01-01', '118', '76']])
        assert repo.find_by_id('ABC') is None
        assert repo.find_by_id('abc').row_index == 2

    def test_first_match_wins(self):
        _, repo = reading_repo([['7', 'first', '1', '1'], ['7', 'second', '2', '2']])
        assert repo.find_by_id('7').data['date'] == 'first'

    def test_numeric_target_is_coerced(self):
        _, repo = reading_repo([['1001', '2024-01-01', '120', '80']])
        assert repo.find_by_id(1001).row_index == 2

    def test_header_only_or_empty(self):
        _, repo = reading_repo([])
        assert repo.find_by_id('1') is None
        store = FakeSheetsStore({})
        assert ReadingRepository(store, reading_table()).find_by_id('1') is None

    def test_header_without_id_column(self):
        store = FakeSheetsStore({'transactions': [['date', 'systolic'], ['2024-01-01', '120']]})
        assert ReadingRepository(store, reading_table()).find_by_id('2024-01-01') is None


class TestListAll:

    def test_short_rows_are_padded(self):
        _, repo = reading_repo([['1', '2024-01-01', '118', '76']])
        assert repo.list_all() == [{
            'id': '1', 'date': '2024-01-01', 'systolic': '118', 'diastolic': '76',
            'pulse': '', 'category_id': '', 'note': '',
        }]

    def test_empty_sheet(self):
        _, repo = reading_repo([])
        assert repo.list_all() == []


class TestAppend:

    def test_encodes_in_column_order_and_echoes(self):
        store, repo = reading_repo([])
        payload = {'diastolic': '80', 'id': '1001', 'systolic': '120', 'date': '2024-01-01'}
        assert repo.append(payload) is payload
        assert store.rows('transactions')[-1] == ['1001', '2024-01-01', '120', '80', '', '', '']

    def test_empty_sheet_gets_header_first(self):
        store = FakeSheetsStore({'transactions': []})
        repo = ReadingRepository(store, reading_table())
        repo.append({'id': '1001', 'date': '2024-01-01', 'systolic': '120', 'diastolic': '80'})

        assert store.rows('transactions') == [
            READING_HEADER,
            ['1001', '2024-01-01', '120', '80', '', '', ''],
        ]
        assert repo.find_by_id('1001').row_index == 2

    def test_header_is_not_repeated(self):
        store, repo = reading_repo([])
        repo.append({'id': '1', 'date': 'd', 'systolic': '1', 'diastolic': '1'})
        assert store.rows('transactions')[0] == READING_HEADER
        assert len(store.rows('transactions')) == 2


class TestUpdate:

    def test_merge_keeps_untouched_fields_and_forces_id(self):
        store, repo = reading_repo([['5', '2024-01-01', '130', '85', '70', 'cat-1', 'after run']])
        merged = repo.update('5', {'systolic': '125', 'id': '999'})

        assert merged['id'] == '5'
        assert merged['systolic'] == '125'
        assert merged['note'] == 'after run'
        assert store.calls[-1] == ('overwrite_row', 'transactions', 2,
                                   ['5', '2024-01-01', '125', '85', '70', 'cat-1', 'after run'])

    def test_id_keeps_stored_value(self):
        store, repo = reading_repo([[' 42 ', '2024-01-01', '130', '85']])
        merged = repo.update('42', {'note': 'x'})
        assert merged['id'] == ' 42 '

    def test_missing_row(self):
        store, repo = reading_repo([['1', '2024-01-01', '118', '76']])
        with pytest.raises(NotFound):
            repo.update('2', {'note': 'x'})
        assert 'overwrite_row' not in store.call_names()


class TestDelete:

    def test_removes_exact_row(self):
        store, repo = reading_repo([['1', 'a', '1', '1'], ['2', 'b', '2', '2'], ['3', 'c', '3', '3']])
        repo.delete('2')

        sheet_id = store.sheets['transactions']['id']
        assert ('delete_structural_row', sheet_id, 3) in store.calls
        assert [r['id'] for r in repo.list_all()] == ['1', '3']

    def test_missing_row(self):
        store, repo = reading_repo([])
        with pytest.raises(NotFound):
            repo.delete('1')
        assert 'delete_structural_row' not in store.call_names()

    def test_unresolvable_sheet(self):
        store, repo = reading_repo([['1', 'a', '1', '1']])
        store.get_sheet_id = lambda name: None
        with pytest.raises(StoreUnavailable):
            repo.delete('1')
        assert 'delete_structural_row' not in store.call_names()


class TestCategoryRepository:

    def make(self, rows=None):
        store = FakeSheetsStore({'categories': [['id', 'name', 'color_hex']] + (rows or [])})
        return store, CategoryRepository(store, category_table())

    @pytest.mark.parametrize('category_id', ['1', ' 1 '])
    def test_default_category_is_immutable(self, category_id):
        store, repo = self.make([['1', '一般測量', '#9E9E9E']])
        with pytest.raises(ImmutableEntity):
            repo.update(category_id, {'name': 'Renamed'})
        with pytest.raises(ImmutableEntity):
            repo.delete(category_id)
        assert store.calls == []

    def test_list_empty_returns_default(self):
        _, repo = self.make()
        assert repo.list_all() == [{'id': '1', 'name': '一般測量', 'color_hex': '#9E9E9E'}]

    def test_create_generates_id(self):
        store, repo = self.make()
        category = repo.create('Clinic', '#00AA00')
        assert category['id'].startswith('cat-')
        assert store.rows('categories')[-1] == [category['id'], 'Clinic', '#00AA00']


class TestThresholdRepository:

    def make(self, rows=None):
        store = FakeSheetsStore({'budgets': [['id', 'amount']] + (rows or [])})
        return store, ThresholdRepository(store, threshold_table())

    def test_get_default_without_writing(self):
        store, repo = self.make()
        assert repo.get() == {'id': '1', 'amount': '130'}
        assert store.call_names() == ['read_range']

    def test_get_stored(self):
        _, repo = self.make([['1', '140']])
        assert repo.get() == {'id': '1', 'amount': '140'}

    def test_save_creates_when_absent(self):
        store, repo = self.make()
        assert repo.save('135') == {'id': '1', 'amount': '135'}
        assert 'append_row' in store.call_names()
        assert store.rows('budgets') == [['id', 'amount'], ['1', '135']]

    def test_save_updates_when_present(self):
        store, repo = self.make([['1', '140']])
        repo.save('125')
        assert 'append_row' not in store.call_names()
        assert store.rows('budgets') == [['id', 'amount'], ['1', '125']]

    def test_save_into_sheet_without_header(self):
        store = FakeSheetsStore({'budgets': []})
        repo = ThresholdRepository(store, threshold_table())

        repo.save('135')
        assert store.rows('budgets') == [['id', 'amount'], ['1', '135']]
        assert repo.get() == {'id': '1', 'amount': '135'}

        repo.save('128')
        assert store.rows('budgets') == [['id', 'amount'], ['1', '128']]
        assert store.call_names().count('read_range') == 3


class TestAttachCategories:

    def test_known_and_unknown_categories(self):
        readings = [
            {'id': '1', 'category_id': 'cat-1'},
            {'id': '2', 'category_id': 'cat-gone'},
            {'id': '3', 'category_id': ''},
        ]
        categories = [{'id': 'cat-1', 'name': 'Morning', 'color_hex': '#FF0000'}]

        joined = attach_categories(readings, categories)

        assert joined[0]['category_name'] == 'Morning'
        assert joined[0]['category_color_hex'] == '#FF0000'
        for reading in joined[1:]:
            assert reading['category_name'] == '一般測量'
            assert reading['category_color_hex'] == '#9E9E9E'
        assert 'category_name' not in readings[0]

    def test_list_with_categories_reads_fresh(self):
        store = FakeSheetsStore({
            'transactions': [READING_HEADER, ['1', '2024-01-01', '120', '80', '', 'cat-1']],
            'categories': [['id', 'name', 'color_hex'], ['cat-1', 'Morning', '#FF0000']],
        })
        readings = ReadingRepository(store, reading_table())
        categories = CategoryRepository(store, category_table())

        assert readings.list_with_categories(categories)[0]['category_name'] == 'Morning'
        store.rows('categories')[1][1] = 'Dawn'
        assert readings.list_with_categories(categories)[0]['category_name'] == 'Dawn'
