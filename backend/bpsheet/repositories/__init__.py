from .base import SheetRepository, FoundRow
from .reading_repository import ReadingRepository, attach_categories
from .category_repository import CategoryRepository
from .threshold_repository import ThresholdRepository
