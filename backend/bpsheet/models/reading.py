"""
Blood pressure reading rows.
"""
from .table import TableSpec

DEFAULT_RANGE = "'transactions'!A:G"

COLUMNS = ['id', 'date', 'systolic', 'diastolic', 'pulse', 'category_id', 'note']

REQUIRED_COLUMNS = ['id', 'date', 'systolic', 'diastolic']


def reading_table(range_ref: str = DEFAULT_RANGE) -> TableSpec:
    return TableSpec(range_ref, COLUMNS)
