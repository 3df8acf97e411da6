"""
Input validation for readings, categories and the threshold.

Each validator returns a list of error strings (empty = valid) and runs
before anything is sent to the spreadsheet.
"""
import re

from bpsheet.models.reading import REQUIRED_COLUMNS as READING_REQUIRED

HEX_COLOR_RE = re.compile(r'#[0-9a-fA-F]{6}')


def is_hex_color(value) -> bool:
    return isinstance(value, str) and HEX_COLOR_RE.fullmatch(value) is not None


def validate_reading(data: dict) -> list:
    """Validate a new reading: id, date, systolic and diastolic are required."""
    missing = [key for key in READING_REQUIRED if not data.get(key)]
    if missing:
        return [f'Missing fields: {", ".join(missing)}']
    return []


def validate_reading_update(data: dict) -> list:
    """A patch may omit required fields but may not blank them."""
    blanked = [key for key in READING_REQUIRED
               if key in data and key != 'id' and not data.get(key)]
    if blanked:
        return [f'Fields cannot be empty: {", ".join(blanked)}']
    return []


def validate_category(data: dict) -> list:
    errors = []
    name = data.get('name')
    color_hex = data.get('color_hex')
    if not name or not color_hex:
        errors.append('Name and color are required')
    elif not is_hex_color(color_hex):
        errors.append('Invalid color format (e.g. #ffffff)')
    return errors


def validate_category_update(data: dict) -> list:
    errors = []
    if 'name' in data and not data.get('name'):
        errors.append('Name cannot be empty')
    if 'color_hex' in data and not is_hex_color(data.get('color_hex')):
        errors.append('Invalid color format (e.g. #ffffff)')
    if 'name' not in data and 'color_hex' not in data:
        errors.append('Nothing to update: provide name or color_hex')
    return errors


def validate_threshold(data: dict) -> list:
    amount = data.get('amount')
    if amount is None or str(amount).strip() == '':
        return ['Amount is required']
    try:
        float(str(amount))
    except ValueError:
        return ['Amount must be a number']
    return []
