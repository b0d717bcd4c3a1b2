"""
Chart series building.

Monthly aggregates come back sparse: a month with no invoices, clients or
services simply has no key. Charts need one point per month, so the builders
here gap-fill to a dense January..December sequence.
"""

from decimal import Decimal
from numbers import Number
from typing import List, Mapping

from ...core.exceptions import InvalidArgument
from .schemas import ChartSeries, MetricKind

MONTH_LABELS = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]

METRIC_LABELS = {
    MetricKind.CLIENT_SIGNUPS: "Total Clients",
    MetricKind.INVOICE_COUNT: "Total Invoices",
    MetricKind.SALES_TOTAL: "Total Sales",
    MetricKind.SERVICE_ACTIVATIONS: "Total Services",
}


def to_series(aggregate: Mapping[int, Number]) -> List[Number]:
    """
    Gap-fills a month -> value mapping into 12 values ordered January..December.

    Args:
        aggregate: Sparse mapping keyed by month number 1-12.

    Returns:
        List[Number]: Index 0 is January, index 11 is December; months absent
        from ``aggregate`` are 0.

    Raises:
        InvalidArgument: If a key is not an integer month between 1 and 12.
    """
    series: List[Number] = [0] * 12
    for month, value in aggregate.items():
        if isinstance(month, bool) or not isinstance(month, int) or not 1 <= month <= 12:
            raise InvalidArgument(f"Month key {month!r} is outside 1-12.")
        series[month - 1] = value
    return series


def build_chart(metric: MetricKind, year: int, aggregate: Mapping[int, Number]) -> ChartSeries:
    data = [float(value) if isinstance(value, Decimal) else value for value in to_series(aggregate)]
    return ChartSeries(
        metric=metric,
        label=METRIC_LABELS[metric],
        year=year,
        labels=list(MONTH_LABELS),
        data=data,
    )
