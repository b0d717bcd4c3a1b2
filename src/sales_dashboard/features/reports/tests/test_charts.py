from decimal import Decimal

import pytest
from sales_dashboard.core.exceptions import InvalidArgument
from sales_dashboard.features.reports.charts import MONTH_LABELS, build_chart, to_series
from sales_dashboard.features.reports.schemas import MetricKind


def test_gap_fills_missing_months():
    assert to_series({3: 5, 7: 2}) == [0, 0, 5, 0, 0, 0, 2, 0, 0, 0, 0, 0]


def test_empty_aggregate_is_all_zero():
    assert to_series({}) == [0] * 12


def test_order_follows_calendar_not_input():
    assert to_series({12: 1, 1: 4, 6: 9}) == [4, 0, 0, 0, 0, 9, 0, 0, 0, 0, 0, 1]


def test_full_year():
    aggregate = {month: month * 10 for month in range(1, 13)}
    assert to_series(aggregate) == [10, 20, 30, 40, 50, 60, 70, 80, 90, 100, 110, 120]


@pytest.mark.parametrize("month", [0, 13, -1, "3", True])
def test_out_of_range_month_key_is_rejected(month):
    with pytest.raises(InvalidArgument):
        to_series({month: 1})


def test_decimal_values_are_kept():
    series = to_series({2: Decimal("10.50")})
    assert series[1] == Decimal("10.50")


def test_build_chart_labels_and_data():
    chart = build_chart(MetricKind.SALES_TOTAL, 2024, {1: Decimal("12.50"), 4: Decimal("3.25")})
    assert chart.label == "Total Sales"
    assert chart.year == 2024
    assert chart.labels == MONTH_LABELS
    assert chart.data == [12.5, 0, 0, 3.25, 0, 0, 0, 0, 0, 0, 0, 0]


def test_build_chart_counts_stay_integers():
    chart = build_chart(MetricKind.CLIENT_SIGNUPS, 2024, {5: 3})
    assert chart.label == "Total Clients"
    assert chart.data[4] == 3
    assert isinstance(chart.data[4], int)
