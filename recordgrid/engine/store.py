"""
Record store: the ordered collection of records.

Insertion order is the default (pre-sort) order. Ids are unique for the
lifetime of the store; an id that was deleted or replaced is retired and
can never be added again. Every command validates fully before mutating, so
a failing command leaves the store unchanged.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Set

from recordgrid.domain.errors import DuplicateIdError, NotFoundError
from recordgrid.domain.models import Record
from recordgrid.utils.logging import get_logger

log = get_logger(__name__)


class RecordStore:
    def __init__(self, records: Optional[Iterable[Record]] = None) -> None:
        self._records: Dict[str, Record] = {}
        self._retired: Set[str] = set()
        if records is not None:
            self._install(list(records))

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, record_id: object) -> bool:
        return record_id in self._records

    def __iter__(self) -> Iterator[Record]:
        return iter(list(self._records.values()))

    def ids(self) -> List[str]:
        return list(self._records)

    def list_records(self) -> List[Record]:
        return list(self._records.values())

    def get(self, record_id: str) -> Record:
        try:
            return self._records[record_id]
        except KeyError:
            raise NotFoundError("Record", record_id) from None

    def _check_new_id(self, record_id: str) -> None:
        if record_id in self._records or record_id in self._retired:
            raise DuplicateIdError(record_id)

    def add(self, record: Record) -> Record:
        """Append `record` to the end of the collection."""
        self._check_new_id(record.id)
        self._records[record.id] = record
        log.info("Record added", extra={"record_id": record.id, "total": len(self._records)})
        return record

    def update(self, record_id: str, fields: Mapping[str, Any]) -> Record:
        """
        Merge `fields` into the record with `record_id` and return the new version.

        Unspecified fields are kept; an `id` entry in `fields` is ignored.
        Raises pydantic's ValidationError if a merged value has the wrong type.
        """
        current = self.get(record_id)
        updated = current.merged(fields)
        self._records[record_id] = updated
        log.info(
            "Record updated",
            extra={"record_id": record_id, "fields": sorted(k for k in fields if k != "id")},
        )
        return updated

    def delete(self, record_id: str) -> Record:
        record = self.get(record_id)
        del self._records[record_id]
        self._retired.add(record_id)
        log.info("Record deleted", extra={"record_id": record_id, "total": len(self._records)})
        return record

    def delete_many(self, record_ids: Iterable[str]) -> List[Record]:
        """
        Delete every listed record, or none of them.

        Raises NotFoundError naming the first unknown id before anything is removed.
        """
        unique_ids = list(dict.fromkeys(record_ids))
        for record_id in unique_ids:
            if record_id not in self._records:
                raise NotFoundError("Record", record_id)

        removed = [self._records.pop(record_id) for record_id in unique_ids]
        self._retired.update(unique_ids)
        log.info(
            "Records deleted",
            extra={"deleted": len(removed), "total": len(self._records)},
        )
        return removed

    def replace_all(self, records: Iterable[Record]) -> None:
        """
        Discard the whole collection and install `records` in the given order.
        """
        batch = list(records)
        seen: Set[str] = set()
        for record in batch:
            if record.id in seen or record.id in self._records or record.id in self._retired:
                raise DuplicateIdError(record.id)
            seen.add(record.id)

        self._retired.update(self._records)
        self._records = {}
        self._install(batch)
        log.info("Records replaced", extra={"total": len(self._records)})

    def _install(self, batch: List[Record]) -> None:
        for record in batch:
            self._check_new_id(record.id)
            self._records[record.id] = record


__all__ = ["RecordStore"]
