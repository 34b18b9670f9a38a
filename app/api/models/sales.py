"""
API data models for sales reports

Stored values are passed through as they are, except for BSON types that
have no JSON form: ObjectId becomes its hex string, Decimal128 a number and
datetimes are emitted in UTC.
"""

from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import Any, Optional
from datetime import datetime, timezone
from bson import Decimal128, ObjectId


def bson_to_json(value: Any) -> Any:
    """Convert BSON values, nested ones included, to JSON-serializable values"""
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, Decimal128):
        number = value.to_decimal()
        if number.is_finite() and number == number.to_integral_value():
            return int(number)
        return float(number)
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
    if isinstance(value, dict):
        return {key: bson_to_json(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [bson_to_json(item) for item in value]
    return value


class StoredDocument(BaseModel):
    """Base for models read straight from the store"""

    @model_validator(mode="before")
    @classmethod
    def convert_bson(cls, data: Any) -> Any:
        return bson_to_json(data)


class SalesRecord(StoredDocument):
    """Model for a stored sales record, passed through in its stored shape"""
    model_config = ConfigDict(extra="allow")

    stored_id: Optional[Any] = Field(None, alias="_id", description="Store identifier")
    region: Optional[Any] = Field(None, description="Sales region")
    salesperson: Optional[Any] = Field(None, description="Salesperson who made the sale")
    product: Optional[Any] = Field(None, description="Product sold")
    channel: Optional[Any] = Field(None, description="Sales channel")
    amount: Optional[Any] = Field(None, description="Sale amount")
    date: Optional[Any] = Field(None, description="Date of the sale")


class RegionSalesSummary(StoredDocument):
    """Model for total sales of one salesperson within a region"""
    salesperson: Optional[Any] = Field(..., description="Salesperson the total belongs to")
    totalSales: Any = Field(..., description="Sum of sale amounts")
