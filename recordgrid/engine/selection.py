"""
Selection tracker: the set of record ids marked for bulk actions.

Membership survives page changes, but toggling and "select all" only accept
ids from the page currently shown.
"""

from __future__ import annotations

from typing import Dict, Iterable, List

from recordgrid.utils.logging import get_logger

log = get_logger(__name__)


class SelectionTracker:
    def __init__(self) -> None:
        # dict keeps selection order for display and bulk deletes
        self._selected: Dict[str, None] = {}

    def __len__(self) -> int:
        return len(self._selected)

    def __contains__(self, record_id: object) -> bool:
        return record_id in self._selected

    @property
    def count(self) -> int:
        return len(self._selected)

    def ids(self) -> List[str]:
        return list(self._selected)

    def is_selected(self, record_id: str) -> bool:
        return record_id in self._selected

    def toggle(self, record_id: str, page_ids: Iterable[str]) -> bool:
        """
        Flip membership of `record_id` and return whether it is now selected.

        Ids that are not on the current page are ignored.
        """
        if record_id not in set(page_ids):
            log.debug("Ignoring selection toggle for off-page id", extra={"record_id": record_id})
            return self.is_selected(record_id)

        if record_id in self._selected:
            del self._selected[record_id]
            return False
        self._selected[record_id] = None
        return True

    def select_all(self, page_ids: Iterable[str]) -> None:
        """Replace the selection with exactly `page_ids`."""
        self._selected = dict.fromkeys(page_ids)

    def clear(self) -> None:
        self._selected = {}

    def discard(self, record_ids: Iterable[str]) -> None:
        for record_id in record_ids:
            self._selected.pop(record_id, None)


__all__ = ["SelectionTracker"]
