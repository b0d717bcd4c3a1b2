import datetime
import logging
from typing import Annotated, Dict, List, Optional

from fastapi import APIRouter, Depends, Query, Request

from ...core.exceptions import ReportError
from .filters import resolve_filter
from .pagination import build_page_links
# Schemas for request (SalesListingQuery) and responses
from .schemas import (
    ChartSeries, DashboardTotals, MonthlySeriesOverview, SalesListingQuery, SalesListingResponse
)
# Service functions that contain the query logic
from . import service as report_service

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/reports",
    tags=["Reports"],
    responses={404: {"description": "Not found"}},
)


def get_today() -> datetime.date:
    """Reference date for relative periods; overridden in tests."""
    return datetime.date.today()


@router.get("/sales", response_model=SalesListingResponse)
async def get_sales_listing_report(
    request: Request,
    today: Annotated[datetime.date, Depends(get_today)],
    query: SalesListingQuery = Depends() # Injects query params from SalesListingQuery
):
    sales_filter = resolve_filter(
        query.period, today,
        custom_start=query.start_date, custom_end=query.end_date, status=query.status,
    )
    result = await report_service.get_sales_listing(sales_filter, query.page)
    # repeated keys keep every value in the page links
    query_params: Dict[str, List[str]] = {}
    for key, value in request.query_params.multi_items():
        query_params.setdefault(key, []).append(value)
    links = build_page_links(result.page, result.total_pages, query_params)
    return SalesListingResponse(
        **result.model_dump(), period=query.period, applied_filter=sales_filter, links=links
    )

@router.get("/monthly", response_model=MonthlySeriesOverview)
async def get_monthly_overview_report(
    today: Annotated[datetime.date, Depends(get_today)],
    year: Optional[int] = Query(None, description="Calendar year; defaults to the current year")
):
    year = year if year is not None else today.year
    charts = await report_service.get_all_monthly_series(year)
    series, errors = [], {}
    for metric, chart in charts.items():
        if isinstance(chart, ReportError):
            logger.warning("Monthly %s series unavailable for %s: %s", metric.value, year, chart)
            errors[metric.value] = str(chart)
        else:
            series.append(chart)
    return MonthlySeriesOverview(year=year, series=series, errors=errors)

@router.get("/monthly/{metric}", response_model=ChartSeries)
async def get_monthly_series_report(
    metric: str,
    today: Annotated[datetime.date, Depends(get_today)],
    year: Optional[int] = Query(None, description="Calendar year; defaults to the current year")
):
    return await report_service.get_monthly_chart(year if year is not None else today.year, metric)

@router.get("/summary", response_model=DashboardTotals)
async def get_dashboard_summary_report():
    return await report_service.get_dashboard_totals()
