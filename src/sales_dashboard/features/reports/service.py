"""
Sales Report Service Module

This module holds the read-only queries behind the sales dashboard: the
filtered, paginated invoice listing, the month-bucketed aggregates used for
charts, and the headline totals. Every query failure is logged and re-raised
as a DataSourceError; nothing is retried.
"""

import asyncio
import datetime
import logging
from decimal import Decimal
from numbers import Number
from typing import Dict, List, Tuple, Type, Union

from tortoise import models
from tortoise.exceptions import BaseORMException
from tortoise.functions import Count, Sum

from ...core.config import PAGE_SIZE
from ...core.exceptions import DataSourceError, InvalidArgument, ReportError
from ..billing.models import Client, Hosting, Invoice
from .charts import build_chart, to_series
from .filters import build_sales_predicate
from .pagination import clamp_page, page_offset, total_pages
from .schemas import (
    ChartSeries, DashboardTotals, MetricKind, PageResult, SalesFilter, TransactionRecord
)

logger = logging.getLogger(__name__)

DATA_SOURCE_ERRORS = (BaseORMException, OSError)

CENTS = Decimal("0.01")

# metric -> (model, date field it is bucketed by, summed field or None for a row count)
METRIC_SOURCES: Dict[MetricKind, Tuple[Type[models.Model], str, Union[str, None]]] = {
    MetricKind.SALES_TOTAL: (Invoice, "date", "total"),
    MetricKind.INVOICE_COUNT: (Invoice, "date", None),
    MetricKind.CLIENT_SIGNUPS: (Client, "date_created", None),
    MetricKind.SERVICE_ACTIVATIONS: (Hosting, "registration_date", None),
}


def _to_money(value) -> Decimal:
    return Decimal(str(value)).quantize(CENTS)


def _to_date(value) -> datetime.date:
    # sqlite hands back ISO strings for grouped date columns on some drivers
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, str):
        return datetime.date.fromisoformat(value[:10])
    return value


def _coerce_metric(metric: Union[MetricKind, str]) -> MetricKind:
    try:
        return MetricKind(metric)
    except ValueError:
        raise InvalidArgument(f"Unsupported metric {metric!r}.") from None


def _year_bounds(year: int) -> Tuple[datetime.date, datetime.date]:
    if isinstance(year, bool) or not isinstance(year, int) or not 1 <= year < datetime.MAXYEAR:
        raise InvalidArgument(f"Year {year!r} is out of range.")
    return datetime.date(year, 1, 1), datetime.date(year + 1, 1, 1)


def _to_record(invoice: Invoice) -> TransactionRecord:
    return TransactionRecord(
        invoice_id=invoice.id,
        client_id=invoice.client.id,
        client_first_name=invoice.client.first_name,
        client_last_name=invoice.client.last_name,
        total=invoice.total,
        date=invoice.date,
        payment_method=invoice.payment_method,
        status=invoice.status,
    )


async def list_transactions(sales_filter: SalesFilter, page: int = 1) -> PageResult:
    """
    Lists invoices matching ``sales_filter``, one page at a time.

    Invoices are joined to their owning client and ordered by invoice id so
    the same page always holds the same rows. The total is counted by its own
    query with the same predicate; the page slice and the count run
    concurrently.

    Args:
        sales_filter: Date bounds (inclusive) and optional status to match.
        page: 1-based page number. Values below 1 are clamped to 1.

    Returns:
        PageResult: At most PAGE_SIZE records plus total_records/total_pages.
        A page past the end has no records but keeps the same totals.

    Raises:
        DataSourceError: If either query fails.
    """
    page = clamp_page(page)
    offset = page_offset(page, PAGE_SIZE)
    predicate = build_sales_predicate(sales_filter)
    logger.debug(
        "Listing transactions page=%s filter=%s unbounded=%s", page, sales_filter, sales_filter.is_unbounded
    )

    try:
        page_query = (
            Invoice.filter(predicate)
            .prefetch_related("client")
            .order_by("id")
            .offset(offset)
            .limit(PAGE_SIZE)
        )
        count_query = Invoice.filter(predicate).count()
        invoices, total_records = await asyncio.gather(page_query, count_query)
    except DATA_SOURCE_ERRORS as exc:
        logger.exception("Sales listing query failed for filter %s", sales_filter)
        raise DataSourceError("Could not load the sales listing.") from exc

    return PageResult(
        page=page,
        page_size=PAGE_SIZE,
        offset=offset,
        records=[_to_record(invoice) for invoice in invoices],
        total_records=total_records,
        total_pages=total_pages(total_records, PAGE_SIZE),
    )


# Name used by the dashboard views
get_sales_listing = list_transactions


async def _daily_buckets(model: Type[models.Model], date_field: str, sum_field, **filters) -> List[dict]:
    aggregation = Sum(sum_field) if sum_field else Count("id")
    return await (
        model.filter(**filters)
        .annotate(value=aggregation)
        .group_by(date_field)
        .values(date_field, "value")
    )


async def monthly_aggregate(year: int, metric: Union[MetricKind, str]) -> Dict[int, Number]:
    """
    Aggregates one metric by calendar month for ``year``.

    The year is filtered and grouped by day in SQL; the day buckets are then
    folded into months. Sums come back as Decimal, counts as int.

    Returns:
        Dict[int, Number]: Sparse mapping of month (1-12) to value, holding
        only months with at least one matching record, in month order.

    Raises:
        InvalidArgument: For an unsupported metric or an unusable year.
        DataSourceError: If the query fails.
    """
    metric = _coerce_metric(metric)
    year_start, next_year_start = _year_bounds(year)
    model, date_field, sum_field = METRIC_SOURCES[metric]

    try:
        rows = await _daily_buckets(
            model, date_field, sum_field,
            **{f"{date_field}__gte": year_start, f"{date_field}__lt": next_year_start},
        )
    except DATA_SOURCE_ERRORS as exc:
        logger.exception("Monthly %s aggregation failed for %s", metric.value, year)
        raise DataSourceError(f"Could not aggregate {metric.value} for {year}.") from exc

    aggregate: Dict[int, Number] = {}
    for row in rows:
        if row["value"] is None:
            continue
        month = _to_date(row[date_field]).month
        value = _to_money(row["value"]) if sum_field else int(row["value"])
        aggregate[month] = aggregate.get(month, 0) + value

    logger.debug("Monthly %s for %s: %s", metric.value, year, aggregate)
    return dict(sorted(aggregate.items()))


async def get_monthly_series(year: int, metric: Union[MetricKind, str]) -> List[Number]:
    return to_series(await monthly_aggregate(year, metric))


async def get_monthly_chart(year: int, metric: Union[MetricKind, str]) -> ChartSeries:
    metric = _coerce_metric(metric)
    return build_chart(metric, year, await monthly_aggregate(year, metric))


async def get_all_monthly_series(year: int) -> Dict[MetricKind, Union[ChartSeries, ReportError]]:
    """
    Builds the four dashboard charts for ``year`` concurrently.

    A metric whose query fails maps to its error instead of a chart, so the
    caller can still render the others. Errors outside the report taxonomy
    are re-raised, as is an unusable year.
    """
    _year_bounds(year)
    metrics = list(MetricKind)
    results = await asyncio.gather(
        *(get_monthly_chart(year, metric) for metric in metrics),
        return_exceptions=True,
    )

    charts: Dict[MetricKind, Union[ChartSeries, ReportError]] = {}
    for metric, result in zip(metrics, results):
        if isinstance(result, BaseException) and not isinstance(result, ReportError):
            raise result
        charts[metric] = result
    return charts


async def get_dashboard_totals() -> DashboardTotals:
    """
    Headline figures for the dashboard widgets: all-time client, invoice and
    service counts and the sum of all invoice totals.
    """
    try:
        total_clients, total_invoices, total_services, sales_row = await asyncio.gather(
            Client.all().count(),
            Invoice.all().count(),
            Hosting.all().count(),
            Invoice.all().annotate(total_sales=Sum("total")).first().values("total_sales"),
        )
    except DATA_SOURCE_ERRORS as exc:
        logger.exception("Dashboard totals query failed")
        raise DataSourceError("Could not load the dashboard totals.") from exc

    # SUM over no rows is NULL
    total_sales = (sales_row or {}).get("total_sales")
    total_sales = _to_money(total_sales) if total_sales is not None else Decimal("0.00")
    return DashboardTotals(
        total_clients=total_clients,
        total_invoices=total_invoices,
        total_sales=total_sales,
        total_services=total_services,
    )
