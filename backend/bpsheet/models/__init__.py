from .table import TableSpec
from .reading import reading_table
from .category import category_table, DEFAULT_CATEGORY, is_default_category
from .threshold import threshold_table, DEFAULT_THRESHOLD
