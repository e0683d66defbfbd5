"""
Tourism flow record endpoints.

These routes expose the record store over HTTP under ``/api/turismo``.
Confirmation messages and mutation errors are returned as plain text,
the way existing clients of this API expect them; read errors use
``HTTPException`` and therefore carry a JSON ``detail``.

The ``/community/{community}`` route is declared before ``/{record_id}``
so that a community lookup is never mistaken for a record id.
"""

import logging
from typing import List, Optional
from urllib.parse import unquote_plus

from fastapi import APIRouter, HTTPException, Query, status
from fastapi.responses import PlainTextResponse

from turismo_api.app.schemas.turismo import Turismo
from turismo_api.app.services.turismo_service import TurismoService

logger = logging.getLogger(__name__)

router = APIRouter()

RECORD_NOT_FOUND = "Record not found."


@router.get("", response_model=List[Turismo], response_model_exclude_none=True)
@router.get("/", response_model=List[Turismo], response_model_exclude_none=True, include_in_schema=False)
async def list_records(
    page: Optional[int] = Query(None, description="Zero-based page number; requires size"),
    size: Optional[int] = Query(None, description="Page size; requires page"),
) -> List[Turismo]:
    """Return every record, or a single page when both ``page`` and ``size`` are given.

    A page beyond the end of the collection is an empty list.
    """
    try:
        return await TurismoService.list_records(page=page, size=size)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except OSError as e:
        logger.error("Error fetching records: %s", e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error fetching records.") from e


@router.post("", response_class=PlainTextResponse)
@router.post("/", response_class=PlainTextResponse, include_in_schema=False)
async def add_record(turismo: Turismo) -> PlainTextResponse:
    """Add a new record.  ``from`` and ``timeRange`` are required."""
    try:
        await TurismoService.create_record(turismo)
    except ValueError as e:
        return PlainTextResponse(str(e), status_code=status.HTTP_400_BAD_REQUEST)
    except OSError as e:
        logger.error("Error saving record: %s", e)
        return PlainTextResponse("Error saving record.", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
    return PlainTextResponse("Record added successfully.")


@router.get("/community/{community}", response_model=List[Turismo], response_model_exclude_none=True)
async def get_records_by_community(community: str) -> List[Turismo]:
    """Return the pre-grouped records of a community.

    The path segment is form-decoded once more after routing, so names
    encoded with ``+`` for spaces (``Castilla+y+Le%C3%B3n``) match too.
    A consequence is that a literal ``+`` in a name, even sent as ``%2B``,
    is read as a space; grouped index keys containing ``+`` are unreachable.
    Returns 404 when the community has no records.
    """
    decoded = unquote_plus(community)
    try:
        records = await TurismoService.get_community_records(decoded)
    except (OSError, ValueError) as e:
        logger.error("Error loading grouped records: %s", e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error loading grouped records."
        ) from e
    if not records:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"No records found for community {decoded}")
    return records


@router.get("/{record_id}", response_model=Turismo, response_model_exclude_none=True)
async def get_record(record_id: str) -> Turismo:
    """Retrieve a single record by its id.  Raises 404 if it does not exist."""
    try:
        record = await TurismoService.get_record(record_id)
    except OSError as e:
        logger.error("Error fetching record by ID: %s", e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error fetching record.") from e
    if record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=RECORD_NOT_FOUND)
    return record


@router.put("/{record_id}", response_class=PlainTextResponse)
async def update_record(record_id: str, turismo: Turismo) -> PlainTextResponse:
    """Replace ``from``, ``to``, ``timeRange`` and ``total`` of an existing record."""
    try:
        updated = await TurismoService.update_record(record_id, turismo)
    except OSError as e:
        logger.error("Error updating record: %s", e)
        return PlainTextResponse("Error updating record.", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
    if not updated:
        return PlainTextResponse(RECORD_NOT_FOUND, status_code=status.HTTP_404_NOT_FOUND)
    return PlainTextResponse("Record updated successfully.")


@router.delete("/{record_id}", response_class=PlainTextResponse)
async def delete_record(record_id: str) -> PlainTextResponse:
    """Delete a record by id."""
    try:
        deleted = await TurismoService.delete_record(record_id)
    except OSError as e:
        logger.error("Error deleting record: %s", e)
        return PlainTextResponse("Error deleting record.", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
    if not deleted:
        return PlainTextResponse(RECORD_NOT_FOUND, status_code=status.HTTP_404_NOT_FOUND)
    return PlainTextResponse("Record deleted successfully.")
