"""
Generic CRUD over one spreadsheet range.

Every lookup reads the whole range and scans it top to bottom. That is fine
for the few thousand rows a personal tracker accumulates; there is no index.
Writes are not coordinated: two requests updating the same row race, and the
spreadsheet keeps whichever write lands last.
"""
import logging
from collections import namedtuple

from bpsheet.errors import NotFound, StoreUnavailable
from bpsheet.store.row_codec import decode_rows, encode_row, row_to_dict
from bpsheet.store.sheet_check import write_header

logger = logging.getLogger(__name__)

# row_index is the 1-based position in the sheet; the header is row 1.
FoundRow = namedtuple('FoundRow', ['row_index', 'data'])


def _normalize_id(value) -> str:
    return str(value if value is not None else '').strip()


class SheetRepository:
    """List, find, append, update and delete rows of one table."""

    not_found_message = 'Record not found'

    def __init__(self, store, table):
        self.store = store
        self.table = table

    def list_all(self) -> list:
        return decode_rows(self.store.read_range(self.table.range_ref))

    def find_by_id(self, record_id):
        """Return the first row whose id matches (trimmed, case-sensitive), or None."""
        return self._find_in_rows(self.store.read_range(self.table.range_ref), record_id)

    def _find_in_rows(self, rows, record_id):
        if len(rows) < 2:
            return None

        header, data_rows = rows[0], rows[1:]
        if self.table.id_column not in header:
            logger.warning('Sheet %s has no %r column', self.table.sheet_name,
                           self.table.id_column)
            return None
        id_index = header.index(self.table.id_column)

        target = _normalize_id(record_id)
        for offset, row in enumerate(data_rows):
            cell = row[id_index] if id_index < len(row) else ''
            if _normalize_id(cell) == target:
                return FoundRow(offset + 2, row_to_dict(header, row))
        return None

    def append(self, record: dict, rows=None) -> dict:
        """
        Append one row. An empty sheet gets the header row first.

        `rows` is the range as already read by the caller, if any.
        """
        if rows is None:
            rows = self.store.read_range(self.table.range_ref)
        if not rows:
            write_header(self.store, self.table)
        self.store.append_row(self.table.range_ref, encode_row(self.table.columns, record))
        return record

    def update(self, record_id, changes: dict) -> dict:
        """
        Merge `changes` over the stored row and write the whole row back.

        The id always stays the stored one, whatever `changes` contains.
        """
        found = self.find_by_id(record_id)
        if found is None:
            raise NotFound(self.not_found_message)
        return self._overwrite(found, changes)

    def delete(self, record_id) -> None:
        found = self.find_by_id(record_id)
        if found is None:
            raise NotFound(self.not_found_message)

        sheet_id = self.store.get_sheet_id(self.table.sheet_name)
        if sheet_id is None:
            raise StoreUnavailable(f'Sheet {self.table.sheet_name!r} not found')

        self.store.delete_structural_row(sheet_id, found.row_index)

    def _overwrite(self, found, changes: dict) -> dict:
        merged = dict(found.data)
        merged.update(changes)
        merged[self.table.id_column] = found.data[self.table.id_column]

        self.store.overwrite_row(self.table.sheet_name, found.row_index,
                                 encode_row(self.table.columns, merged))
        return merged
