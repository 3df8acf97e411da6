"""
Header rows: written into empty sheets, and checked by `flask check-sheets`.

Rows are written in each table's declared column order, so the header row in
the sheet has to list the same columns in the same order.
"""
import logging

logger = logging.getLogger(__name__)


def write_header(store, table) -> None:
    store.append_row(table.range_ref, list(table.columns))
    logger.info('Wrote header row to %s', table.sheet_name)


def check_table(store, table) -> str:
    """Check one table, writing its header if the sheet is empty."""
    rows = store.read_range(table.range_ref)
    if not rows:
        write_header(store, table)
        return f'{table.sheet_name}: header written ({", ".join(table.columns)})'

    header = [str(cell).strip() for cell in rows[0]]
    if header == table.columns:
        return f'{table.sheet_name}: ok'

    logger.warning('Header mismatch in %s: %s != %s', table.sheet_name, header, table.columns)
    return (f'{table.sheet_name}: header mismatch, sheet has [{", ".join(header)}], '
            f'expected [{", ".join(table.columns)}]')


def check_tables(store, tables):
    for table in tables:
        yield check_table(store, table)
