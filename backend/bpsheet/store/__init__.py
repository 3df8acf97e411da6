from .row_codec import decode_rows, encode_row, row_to_dict
from .sheets_client import SheetsStore, sheet_name_from_range
