"""Category repository. The default category is read-only."""
import time

from bpsheet.errors import ImmutableEntity
from bpsheet.models.category import DEFAULT_CATEGORY, is_default_category
from .base import SheetRepository


class CategoryRepository(SheetRepository):
    not_found_message = 'Category not found'

    def list_all(self) -> list:
        categories = super().list_all()
        if not categories:
            return [dict(DEFAULT_CATEGORY)]
        return categories

    def create(self, name: str, color_hex: str) -> dict:
        category = {
            'id': f'cat-{int(time.time() * 1000)}',
            'name': name,
            'color_hex': color_hex,
        }
        return self.append(category)

    def update(self, record_id, changes: dict) -> dict:
        if is_default_category(record_id):
            raise ImmutableEntity('The default category cannot be modified')
        return super().update(record_id, changes)

    def delete(self, record_id) -> None:
        if is_default_category(record_id):
            raise ImmutableEntity('The default category cannot be deleted')
        super().delete(record_id)
