"""
Conversion between spreadsheet rows and dicts.

The first row of a range is its header and acts as the schema: decoding is
driven by whatever header the sheet currently holds, while encoding follows a
column list declared per table. If the two disagree in order, written rows
will be misaligned; `flask check-sheets` reports that case.
"""


def _cell(row, index):
    if index < len(row) and row[index] is not None:
        return row[index]
    return ''


def row_to_dict(header, row):
    """Map one data row onto the header, padding short rows with ''."""
    return {key: _cell(row, index) for index, key in enumerate(header)}


def decode_rows(rows):
    """Decode a block of cells (header first) into a list of dicts."""
    if not rows:
        return []
    header, data_rows = rows[0], rows[1:]
    return [row_to_dict(header, row) for row in data_rows]


def encode_row(columns, obj):
    """Encode a dict as a row in `columns` order. Missing and None become ''."""
    row = []
    for column in columns:
        value = obj.get(column)
        row.append('' if value is None else value)
    return row
