"""
Reading categories. Category "1" is the built-in default and never changes.
"""
from .table import TableSpec

DEFAULT_RANGE = "'categories'!A:C"

COLUMNS = ['id', 'name', 'color_hex']

DEFAULT_CATEGORY_ID = '1'

DEFAULT_CATEGORY = {
    'id': DEFAULT_CATEGORY_ID,
    'name': '一般測量',
    'color_hex': '#9E9E9E',
}


def category_table(range_ref: str = DEFAULT_RANGE) -> TableSpec:
    return TableSpec(range_ref, COLUMNS)


def is_default_category(category_id) -> bool:
    return str(category_id if category_id is not None else '').strip() == DEFAULT_CATEGORY_ID
