"""Threshold repository: a single row that may not exist yet."""
import logging

from bpsheet.models.threshold import DEFAULT_THRESHOLD, THRESHOLD_ID
from .base import SheetRepository

logger = logging.getLogger(__name__)


class ThresholdRepository(SheetRepository):

    def get(self) -> dict:
        """The stored threshold, or the default when no row exists. Never writes."""
        found = self.find_by_id(THRESHOLD_ID)
        if found is None:
            return dict(DEFAULT_THRESHOLD)
        return found.data

    def save(self, amount) -> dict:
        """Update the threshold row if present, otherwise create it."""
        rows = self.store.read_range(self.table.range_ref)
        found = self._find_in_rows(rows, THRESHOLD_ID)
        if found is not None:
            return self._overwrite(found, {'amount': amount})

        logger.info('No threshold row in %s, creating one', self.table.sheet_name)
        return self.append({'id': THRESHOLD_ID, 'amount': amount}, rows=rows)
