"""
Pydantic models for tourism flow records.

A record describes how many visitors travelled from one region
(``from``) to another (``to``) during a time range.  The JSON field
names follow the stored data files, so the models use aliases where
the names are not valid or not idiomatic Python attributes: ``_id``
becomes ``id``, ``from`` becomes ``origin`` and ``timeRange`` becomes
``time_range``.  Every field is optional at the model level; the
service decides which fields are required for which operation.
"""

from typing import Optional

from pydantic import BaseModel, Field


class Place(BaseModel):
    """An autonomous community and province pair."""

    comunidad: Optional[str] = Field(None, examples=["Andalucía"])
    provincia: Optional[str] = Field(None, examples=["Sevilla"])


class TimeRange(BaseModel):
    """Start and end dates of a record plus its period label."""

    fecha_inicio: Optional[str] = Field(None, description="Start date (YYYY-MM-DD)", examples=["2024-02-01"])
    fecha_fin: Optional[str] = Field(None, description="End date (YYYY-MM-DD)", examples=["2024-02-28"])
    period: Optional[str] = Field(None, examples=["2024M02"])


class Turismo(BaseModel):
    """A single tourism flow record.

    ``id`` is assigned by the server on creation; any value sent by a
    client when creating a record is replaced.  ``total`` defaults to
    zero when the field is missing but may be explicitly ``null``.
    """

    id: Optional[str] = Field(None, alias="_id")
    origin: Optional[Place] = Field(None, alias="from")
    to: Optional[Place] = None
    time_range: Optional[TimeRange] = Field(None, alias="timeRange")
    total: Optional[int] = 0

    model_config = {
        "populate_by_name": True,
    }

    def to_json(self) -> dict:
        """Return the record as a JSON-ready dict, omitting null fields."""
        return self.model_dump(by_alias=True, exclude_none=True)
