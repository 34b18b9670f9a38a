"""
API router for sales reports

Provides read-only endpoints over the sales collection.
"""

from fastapi import APIRouter, Depends
from typing import List
import logging

# Import models and services
from app.api.models.sales import SalesRecord, RegionSalesSummary
from app.api.services.sales_service import SalesReportService
from app.db.session import get_sales_collection

# Create router
router = APIRouter()
logger = logging.getLogger(__name__)


def get_sales_report_service(collection=Depends(get_sales_collection)) -> SalesReportService:
    """Build the report service around the request's sales collection"""
    return SalesReportService(collection)


@router.get(
    "/regions",
    response_model=List[str],
    summary="List sales regions",
    description="Fetch the distinct sales regions"
)
async def list_regions(service: SalesReportService = Depends(get_sales_report_service)):
    try:
        return await service.list_regions()
    except Exception as e:
        logger.error(f"Error getting regions: {str(e)}")
        raise


@router.get(
    "/regions/{region}",
    response_model=List[RegionSalesSummary],
    summary="Sales by region",
    description="Fetch total sales for a region, grouped by salesperson"
)
async def sales_by_region(
    region: str,
    service: SalesReportService = Depends(get_sales_report_service)
):
    """
    Fetch sales for a specific region, grouped by salesperson

    Args:
        region: Region to report on

    Returns:
        List[RegionSalesSummary]: Totals sorted by salesperson
    """
    try:
        return await service.sales_by_region(region)
    except Exception as e:
        logger.error(f"Error getting sales data for region {region}: {str(e)}")
        raise


@router.get(
    "/sales-data",
    response_model=List[SalesRecord],
    response_model_exclude_unset=True,
    summary="List sales data",
    description="Fetch every sales record"
)
async def list_sales_data(service: SalesReportService = Depends(get_sales_report_service)):
    try:
        return await service.list_sales_data()
    except Exception as e:
        logger.error(f"Error getting sales data: {str(e)}")
        raise


@router.get(
    "/sales-data/{region}/{startDate}/{endDate}",
    response_model=List[SalesRecord],
    response_model_exclude_unset=True,
    summary="Sales data by region and time period",
    description="Fetch sales records for a region dated within an inclusive range"
)
async def sales_data_by_region_and_period(
    region: str,
    startDate: str,
    endDate: str,
    service: SalesReportService = Depends(get_sales_report_service)
):
    """
    Fetch sales records for a region and time period

    Args:
        region: Region to match exactly
        startDate: First date of the period, inclusive
        endDate: Last date of the period, inclusive

    Returns:
        List[SalesRecord]: Matching records
    """
    try:
        return await service.sales_data_by_region_and_period(region, startDate, endDate)
    except Exception as e:
        logger.error(f"Error fetching sales data by region and time period: {str(e)}")
        raise
