from __future__ import annotations

from typing import Any

import pandas as pd
import pytest


def make_record(unique_id: int, **overrides: Any) -> dict[str, Any]:
    rec: dict[str, Any] = {
        "unique_id": unique_id,
        "parcel_id": f"007 00 0 {unique_id:03d}.00",
        "land_use": "SINGLE FAMILY",
        "property_address": "1808  FOX CHASE DR, GOODLETTSVILLE",
        "sale_date": "2013-04-09",
        "sale_price": 240000,
        "legal_reference": f"20130412-{unique_id:07d}",
        "sold_as_vacant": "No",
        "owner_name": "FRAZIER, CYRENTHA LYNETTE",
        "owner_address": "1808  FOX CHASE DR, GOODLETTSVILLE, TN",
        "acreage": 2.3,
        "tax_district": "GENERAL SERVICES DISTRICT",
        "land_value": 50000.0,
        "building_value": 168200.0,
        "total_value": 235700.0,
        "year_built": 1986.0,
        "bedrooms": 3.0,
        "full_bath": 3.0,
        "half_bath": 0.0,
    }
    rec.update(overrides)
    return rec


@pytest.fixture
def raw_frame() -> pd.DataFrame:
    """Six records covering a backfill, a duplicate, a bad date and Y/N codes."""
    return pd.DataFrame([
        make_record(
            2045, parcel_id="025 07 0 031.00",
            property_address="410  ROSEHILL CT, GOODLETTSVILLE", sold_as_vacant="N",
        ),
        make_record(
            16918, parcel_id="025 07 0 031.00", property_address=None,
            sale_date="April 9, 2014", legal_reference="20140410-0029767",
        ),
        make_record(
            2001, parcel_id="025 07 0 031.00",
            property_address="412  ROSEHILL CT, GOODLETTSVILLE",
            legal_reference="20130501-0000001",
        ),
        make_record(
            3000, parcel_id="091 12 0 102.00", property_address="100  MAIN ST, NASHVILLE",
            sale_date="2016-01-04 00:00:00.000", legal_reference="20160105-0001",
            sold_as_vacant="Y", owner_address=None,
        ),
        make_record(
            3001, parcel_id="091 12 0 102.00", property_address="100  MAIN ST, NASHVILLE",
            sale_date="2016-01-04 00:00:00.000", legal_reference="20160105-0001",
            sold_as_vacant="Yes", owner_address=None,
        ),
        make_record(
            4000, parcel_id="105 03 0 001.00", property_address=None,
            sale_date="not a date", sold_as_vacant="N", owner_address="CLARKSVILLE, TN",
        ),
    ])
