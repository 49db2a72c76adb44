"""Prediction models for a recognized business document."""

from datetime import datetime
from typing import Any, Optional, Union

from pydantic import Field, field_validator, model_validator

from .base import BaseApiModel


class Coordinates(BaseApiModel):
    """Location of an extracted field on the source image.

    Each array holds the polygon points of the field in a different
    coordinate space.
    """

    original: list[list[Optional[float]]] = Field(default_factory=list, description="Pixel coordinates")
    normalized: list[list[Optional[float]]] = Field(default_factory=list, description="0-1 coordinates")
    relative: list[list[Optional[float]]] = Field(default_factory=list)

    @field_validator("original", "normalized", "relative", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value


class GeneralValue(BaseApiModel):
    """A single extracted field: value, confidence and position."""

    value: Any = None
    confidence: Any = None
    coordinates: Optional[Coordinates] = None


class Prediction(BaseApiModel):
    """
    Structured extraction result for one uploaded document.

    Every field is optional: the server omits fields it could not find,
    and a prediction may legitimately contain no fields at all.
    """

    external_id: Optional[str] = None
    created: Optional[Union[datetime, str]] = Field(None, union_mode="left_to_right")
    timestamp: Optional[Union[float, datetime, str]] = Field(None, union_mode="left_to_right")

    # Amounts
    total_amount: Optional[GeneralValue] = None
    vat_amount: Optional[GeneralValue] = None
    net_amount: Optional[GeneralValue] = None
    currency: Optional[GeneralValue] = None

    # Supplier
    supplier_name: Optional[GeneralValue] = None
    business_number: Optional[GeneralValue] = None

    # Document
    issue_date: Optional[GeneralValue] = None
    document_type: Optional[GeneralValue] = None
    primary_document_type: Optional[GeneralValue] = None
    document_number: Optional[GeneralValue] = None
    expense_type: Optional[GeneralValue] = None
    payment_method: Optional[GeneralValue] = None

    @model_validator(mode="before")
    @classmethod
    def _wrap_bare_values(cls, data: Any) -> Any:
        # A field sent as a plain value instead of an object becomes {"value": ...}
        if not isinstance(data, dict):
            return data
        wrapped = dict(data)
        for name, field in cls.model_fields.items():
            if field.annotation != Optional[GeneralValue]:
                continue
            value = wrapped.get(name)
            if value is not None and not isinstance(value, (dict, GeneralValue)):
                wrapped[name] = {"value": value}
        return wrapped

    def extracted_fields(self) -> dict[str, GeneralValue]:
        """Return populated fields keyed by field name, in declaration order."""
        fields = {}
        for name in type(self).model_fields:
            value = getattr(self, name)
            if isinstance(value, GeneralValue):
                fields[name] = value
        return fields
