"""
Service layer for tourism flow records.

``TurismoService`` implements list, get, create, update, delete and
get-by-community on top of :mod:`turismo_api.app.core.store`.  Every
call works on a fresh full load of the JSON file; mutations hold the
store lock from the load until the collection has been written back.

Lookups scan the collection in file order and stop at the first match.
Nothing here sorts records.

Outcomes are reported the way the API layer consumes them: ``None`` or
``False`` when a record does not exist, ``ValueError`` for invalid
input, and ``OSError`` (or ``ValueError`` for a malformed grouped
index) when the files cannot be read or written.
"""

from __future__ import annotations

import logging
import uuid
from typing import List, Optional

from turismo_api.app.core.store import get_store
from turismo_api.app.schemas.turismo import Turismo


class TurismoService:
    """Service class for managing tourism flow records."""

    @classmethod
    async def list_records(cls, page: Optional[int] = None, size: Optional[int] = None) -> List[Turismo]:
        """Return all records, or one page of them.

        Pagination applies only when both ``page`` and ``size`` are
        given.  The window is clamped to the collection, so a page past
        the end is an empty list rather than an error.  A window whose
        start lies after its end (negative ``size``) or a negative
        ``page`` raises ``ValueError``.
        """
        records = get_store().load_all()
        if page is None or size is None:
            return records
        if page < 0:
            raise ValueError("page must not be negative")
        start = min(page * size, len(records))
        end = min(start + size, len(records))
        if start > end:
            raise ValueError("Invalid pagination window")
        return records[start:end]

    @classmethod
    async def get_record(cls, record_id: str) -> Optional[Turismo]:
        """Return the first record whose id equals ``record_id``."""
        for record in get_store().load_all():
            if record.id is not None and record.id == record_id:
                return record
        logging.getLogger(__name__).warning("Record with ID %s not found", record_id)
        return None

    @classmethod
    async def create_record(cls, data: Turismo) -> Turismo:
        """Append a new record with a freshly generated id.

        ``from`` and ``timeRange`` are required; a payload missing either
        raises ``ValueError`` and the store is not touched.  Any id sent
        by the client is discarded.
        """
        logger = logging.getLogger(__name__)
        if data.origin is None or data.time_range is None:
            raise ValueError("Invalid payload: Missing required fields.")
        store = get_store()
        with store.locked():
            records = store.load_all()
            record = data.model_copy(update={"id": str(uuid.uuid4())})
            records.append(record)
            store.save_all(records)
        logger.info("Created record %s", record.id)
        return record

    @classmethod
    async def update_record(cls, record_id: str, data: Turismo) -> bool:
        """Overwrite ``from``, ``to``, ``timeRange`` and ``total`` of a record.

        Values are copied verbatim, so a body without ``to`` clears it.
        The id never changes.  Returns ``False`` when no record has the
        given id, in which case nothing is written.
        """
        logger = logging.getLogger(__name__)
        store = get_store()
        with store.locked():
            records = store.load_all()
            for index, record in enumerate(records):
                if record.id == record_id:
                    records[index] = record.model_copy(
                        update={
                            "origin": data.origin,
                            "to": data.to,
                            "time_range": data.time_range,
                            "total": data.total,
                        }
                    )
                    break
            else:
                logger.warning("Update failed: record %s not found", record_id)
                return False
            store.save_all(records)
        logger.info("Updated record %s", record_id)
        return True

    @classmethod
    async def delete_record(cls, record_id: str) -> bool:
        """Remove the first record with the given id.

        Returns ``True`` if a record was deleted, ``False`` otherwise.
        """
        logger = logging.getLogger(__name__)
        store = get_store()
        with store.locked():
            records = store.load_all()
            for index, record in enumerate(records):
                if record.id == record_id:
                    del records[index]
                    break
            else:
                logger.warning("Delete failed: record %s not found", record_id)
                return False
            store.save_all(records)
        logger.info("Deleted record %s", record_id)
        return True

    @classmethod
    async def get_community_records(cls, community: str) -> List[Turismo]:
        """Return the grouped index entry for ``community``.

        The lookup is an exact string match.  An unknown community and a
        community with an empty list both yield ``[]``.
        """
        grouped = get_store().load_grouped_index()
        return grouped.get(community) or []
