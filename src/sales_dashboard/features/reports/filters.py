"""
Filter resolution for the sales listing.

Turns the period selector from the dashboard form into a concrete date range,
and turns that range into the Tortoise ``Q`` predicate used by both the page
query and the count query.
"""

import datetime
import logging
from typing import List, Optional, Union

from dateutil.relativedelta import relativedelta
from tortoise.expressions import Q

from .schemas import Period, SalesFilter

logger = logging.getLogger(__name__)


def resolve_filter(
    period: Union[Period, str, None],
    today: datetime.date,
    custom_start: Optional[datetime.date] = None,
    custom_end: Optional[datetime.date] = None,
    status: Optional[str] = None,
) -> SalesFilter:
    """
    Resolves a period token into an inclusive [start_date, end_date] filter.

    Args:
        period: One of week, month, year or custom. Any other value yields no
            date bounds at all.
        today: The reference date; the end of every relative period.
        custom_start: Start bound, used only for the custom period.
        custom_end: End bound, used only for the custom period.
        status: Optional exact status match, compared as given. An empty
            value means unfiltered.

    Returns:
        SalesFilter: The resolved filter. Custom ranges are not validated; an
        inverted range simply matches nothing downstream.
    """
    token = period.value if isinstance(period, Period) else period
    status = status or None

    if token == Period.WEEK.value:
        start_date, end_date = today - datetime.timedelta(days=7), today
    elif token == Period.MONTH.value:
        start_date, end_date = today - relativedelta(months=1), today
    elif token == Period.YEAR.value:
        start_date, end_date = today - relativedelta(years=1), today
    elif token == Period.CUSTOM.value:
        start_date, end_date = custom_start, custom_end
    else:
        logger.debug("Unrecognised period %r, listing without date bounds", period)
        start_date, end_date = None, None

    return SalesFilter(start_date=start_date, end_date=end_date, status=status)


def build_sales_predicate(sales_filter: SalesFilter) -> Q:
    """
    Builds the AND-ed predicate for invoices matching ``sales_filter``.

    Clauses are collected in a fixed order (owning client, start bound, end
    bound, status) and only for the filter fields that are set.
    """
    clauses: List[Q] = [Q(client__id__isnull=False)]
    if sales_filter.start_date is not None:
        clauses.append(Q(date__gte=sales_filter.start_date))
    if sales_filter.end_date is not None:
        clauses.append(Q(date__lte=sales_filter.end_date))
    if sales_filter.status:
        clauses.append(Q(status=sales_filter.status))
    return Q(*clauses, join_type=Q.AND)
