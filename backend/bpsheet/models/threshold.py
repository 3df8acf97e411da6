"""
Systolic warning threshold, stored as a single row with id "1".
"""
from .table import TableSpec

DEFAULT_RANGE = "'budgets'!A:B"

COLUMNS = ['id', 'amount']

THRESHOLD_ID = '1'

DEFAULT_THRESHOLD = {
    'id': THRESHOLD_ID,
    'amount': '130',
}


def threshold_table(range_ref: str = DEFAULT_RANGE) -> TableSpec:
    return TableSpec(range_ref, COLUMNS)
