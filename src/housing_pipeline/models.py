"""Pydantic models used for Raw and Clean validation.

These models define the expected schema for ingested records and for rows of
the cleaned view. Opaque pass-through fields are typed loosely because the
source spreadsheet mixes numbers and formatted strings (e.g. ``"$120,000"``).
"""

from __future__ import annotations

from datetime import date, datetime
from pydantic import BaseModel, Field, ConfigDict


class RawRecord(BaseModel):
    """Schema for one ingested property transaction (before cleaning)."""
    model_config = ConfigDict(extra="forbid")
    unique_id: int = Field(..., ge=0)
    parcel_id: str | None = None
    land_use: str | None = None
    property_address: str | None = None
    sale_date: datetime | date | str | None = None
    sale_price: float | str | None = None
    legal_reference: str | None = None
    sold_as_vacant: str | None = None
    owner_name: str | None = None
    owner_address: str | None = None
    acreage: float | None = None
    tax_district: str | None = None
    land_value: float | None = None
    building_value: float | None = None
    total_value: float | None = None
    year_built: int | None = None
    bedrooms: int | None = None
    full_bath: int | None = None
    half_bath: int | None = None


class CleanRecord(BaseModel):
    """Schema for a row of the cleaned standing view.

    Attributes:
        unique_id: Record identity, unchanged by cleaning.
        property_address: Street part of the original property address.
        property_city: City part of the original property address.
        sale_date: Date-only sale date.
        sold_as_vacant: "Yes"/"No" once normalized; unknown codes pass through.
        owner_address: Street part of the original owner address.
        owner_city: City part of the original owner address.
        owner_state: State part of the original owner address.
    """
    model_config = ConfigDict(extra="forbid")
    unique_id: int = Field(..., ge=0)
    parcel_id: str | None = None
    land_use: str | None = None
    property_address: str | None = None
    property_city: str | None = None
    sale_date: date | None = None
    sale_price: float | str | None = None
    legal_reference: str | None = None
    sold_as_vacant: str | None = None
    owner_name: str | None = None
    owner_address: str | None = None
    owner_city: str | None = None
    owner_state: str | None = None
    acreage: float | None = None
    tax_district: str | None = None
    land_value: float | None = None
    building_value: float | None = None
    total_value: float | None = None
    year_built: int | None = None
    bedrooms: int | None = None
    full_bath: int | None = None
    half_bath: int | None = None
