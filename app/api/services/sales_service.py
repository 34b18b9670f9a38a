"""
Service layer for sales report operations

Builds the queries behind the sales report endpoints and runs each one
against an injected sales collection.
"""

from typing import List, Dict, Any
import logging
import re

import pandas as pd

# Configure logging
logger = logging.getLogger(__name__)


def parse_report_date(value: str):
    """
    Parse a date path segment into a naive UTC datetime

    Raises:
        ValueError: If the value is not a recognisable date
    """
    # Relative words such as "now" or "today" are not dates
    if not re.search(r"\d", value):
        raise ValueError(f"Invalid date: {value!r}")
    timestamp = pd.Timestamp(value)
    if pd.isna(timestamp):
        raise ValueError(f"Invalid date: {value!r}")
    if timestamp.tzinfo is not None:
        timestamp = timestamp.tz_convert("UTC").tz_localize(None)
    return timestamp.to_pydatetime()


def region_summary_pipeline(region: str) -> List[Dict[str, Any]]:
    """Aggregation pipeline totalling sales per salesperson within a region"""
    return [
        {"$match": {"region": region}},
        {
            "$group": {
                "_id": "$salesperson",
                "totalSales": {"$sum": "$amount"},
            }
        },
        {
            "$project": {
                "_id": 0,
                "salesperson": "$_id",
                "totalSales": 1,
            }
        },
        {"$sort": {"salesperson": 1}},
    ]


def region_period_filter(region: str, start_date: str, end_date: str) -> Dict[str, Any]:
    """Filter matching a region within an inclusive date range"""
    return {
        "region": region,
        "date": {
            "$gte": parse_report_date(start_date),
            "$lte": parse_report_date(end_date),
        },
    }


class SalesReportService:
    """
    Read-only queries over the sales collection

    Each method performs exactly one database operation. Errors raised by the
    collection are not caught here.
    """

    def __init__(self, collection):
        self.collection = collection

    async def list_regions(self) -> List[str]:
        """Distinct region values, in store order"""
        return await self.collection.distinct("region")

    async def sales_by_region(self, region: str) -> List[Dict[str, Any]]:
        """Total sales per salesperson for a region, sorted by salesperson"""
        cursor = self.collection.aggregate(region_summary_pipeline(region))
        return await cursor.to_list(length=None)

    async def list_sales_data(self) -> List[Dict[str, Any]]:
        """Every sales record as stored"""
        return await self.collection.find({}).to_list(length=None)

    async def sales_data_by_region_and_period(
        self,
        region: str,
        start_date: str,
        end_date: str
    ) -> List[Dict[str, Any]]:
        """
        Sales records for a region dated within [start_date, end_date]

        An inverted range is passed to the store as is and matches nothing.

        Args:
            region: Region to match exactly
            start_date: Inclusive lower bound
            end_date: Inclusive upper bound

        Returns:
            List[Dict]: Matching records, unordered
        """
        query = region_period_filter(region, start_date, end_date)
        logger.debug(f"Querying sales data with filter {query}")
        return await self.collection.find(query).to_list(length=None)
