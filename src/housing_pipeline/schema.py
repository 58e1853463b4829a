"""Column names shared by ingestion, the cleaning passes and the view.

The source spreadsheet uses CamelCase headers (some with trailing spaces, e.g.
``"UniqueID "``); everything inside the pipeline uses the snake_case names below.
"""

from __future__ import annotations

RECORD_COLUMNS: list[str] = [
    "unique_id",
    "parcel_id",
    "land_use",
    "property_address",
    "sale_date",
    "sale_price",
    "legal_reference",
    "sold_as_vacant",
    "owner_name",
    "owner_address",
    "acreage",
    "tax_district",
    "land_value",
    "building_value",
    "total_value",
    "year_built",
    "bedrooms",
    "full_bath",
    "half_bath",
]

SOURCE_HEADERS: dict[str, str] = {
    "UniqueID": "unique_id",
    "ParcelID": "parcel_id",
    "LandUse": "land_use",
    "PropertyAddress": "property_address",
    "SaleDate": "sale_date",
    "SalePrice": "sale_price",
    "LegalReference": "legal_reference",
    "SoldAsVacant": "sold_as_vacant",
    "OwnerName": "owner_name",
    "OwnerAddress": "owner_address",
    "Acreage": "acreage",
    "TaxDistrict": "tax_district",
    "LandValue": "land_value",
    "BuildingValue": "building_value",
    "TotalValue": "total_value",
    "YearBuilt": "year_built",
    "Bedrooms": "bedrooms",
    "FullBath": "full_bath",
    "HalfBath": "half_bath",
}

DUPLICATE_KEY: list[str] = [
    "parcel_id",
    "property_address",
    "sale_price",
    "sale_date",
    "legal_reference",
]

PROPERTY_SPLIT_COLUMNS: list[str] = ["property_split_address", "property_split_city"]
OWNER_SPLIT_COLUMNS: list[str] = [
    "owner_split_address",
    "owner_split_city",
    "owner_split_state",
]
DERIVED_COLUMNS: list[str] = ["new_sale_date", *PROPERTY_SPLIT_COLUMNS, *OWNER_SPLIT_COLUMNS]

# raw forms replaced by derived columns; tax_district stays, the view exposes it
OBSOLETE_COLUMNS: list[str] = ["sale_date", "owner_address", "property_address"]

# (base table column, view column) in view order
VIEW_PROJECTION: list[tuple[str, str]] = [
    ("unique_id", "unique_id"),
    ("parcel_id", "parcel_id"),
    ("land_use", "land_use"),
    ("property_split_address", "property_address"),
    ("property_split_city", "property_city"),
    ("new_sale_date", "sale_date"),
    ("sale_price", "sale_price"),
    ("legal_reference", "legal_reference"),
    ("sold_as_vacant", "sold_as_vacant"),
    ("owner_name", "owner_name"),
    ("owner_split_address", "owner_address"),
    ("owner_split_city", "owner_city"),
    ("owner_split_state", "owner_state"),
    ("acreage", "acreage"),
    ("tax_district", "tax_district"),
    ("land_value", "land_value"),
    ("building_value", "building_value"),
    ("total_value", "total_value"),
    ("year_built", "year_built"),
    ("bedrooms", "bedrooms"),
    ("full_bath", "full_bath"),
    ("half_bath", "half_bath"),
]

VIEW_COLUMNS: list[str] = [alias for _, alias in VIEW_PROJECTION]
