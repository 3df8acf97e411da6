"""Reading repository and the reading/category join."""
from bpsheet.models.category import DEFAULT_CATEGORY
from .base import SheetRepository


def attach_categories(readings: list, categories: list) -> list:
    """
    Add category_name and category_color_hex to each reading.

    Matching is exact string equality on category_id. Readings with an empty,
    stale or unknown category_id get the default category.
    """
    joined = []
    for reading in readings:
        category = next(
            (c for c in categories if c.get('id') == reading.get('category_id')),
            DEFAULT_CATEGORY,
        )
        enriched = dict(reading)
        enriched['category_name'] = category.get('name', '')
        enriched['category_color_hex'] = category.get('color_hex', '')
        joined.append(enriched)
    return joined


class ReadingRepository(SheetRepository):
    not_found_message = 'Reading not found'

    def list_with_categories(self, category_repository) -> list:
        """All readings joined with a freshly read category list."""
        readings = self.list_all()
        categories = category_repository.list_all()
        return attach_categories(readings, categories)
