"""
Table definitions: where an entity lives in the spreadsheet and its column order.
"""
from bpsheet.store.sheets_client import sheet_name_from_range


class TableSpec:
    """A sheet range plus the column order used when writing rows."""

    def __init__(self, range_ref: str, columns, id_column: str = 'id'):
        self.range_ref = range_ref
        self.columns = list(columns)
        self.id_column = id_column

    @property
    def sheet_name(self) -> str:
        return sheet_name_from_range(self.range_ref)

    def __repr__(self):
        return f'<TableSpec {self.range_ref} {self.columns}>'
