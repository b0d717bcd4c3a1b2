"""Sales Dashboard API Schemas

This module defines the Pydantic models used by the sales dashboard reports.
It includes schemas for:

1. The period/status filter and its request query parameters
2. Transaction rows and paginated listing results
3. Month-bucketed chart series
4. Headline dashboard totals

Filter and row objects are frozen: they are built fresh for each request and
never modified afterwards."""
from decimal import Decimal
from enum import Enum
from typing import Dict, List, Optional, Union
import datetime

from pydantic import BaseModel, ConfigDict, Field

from ...core.config import DEFAULT_PERIOD, MAX_PAGE, PAGE_SIZE


class Period(str, Enum):
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"
    CUSTOM = "custom"


class MetricKind(str, Enum):
    SALES_TOTAL = "salesTotal"
    INVOICE_COUNT = "invoiceCount"
    CLIENT_SIGNUPS = "clientSignups"
    SERVICE_ACTIVATIONS = "serviceActivations"


# Request query parameters for the sales listing
class SalesListingQuery(BaseModel):
    period: str = Field(DEFAULT_PERIOD, description="week, month, year or custom")
    status: str = Field("", description="Exact invoice status to match; empty for all")
    start_date: Optional[datetime.date] = Field(None, description="Start date (YYYY-MM-DD), only used with period=custom")
    end_date: Optional[datetime.date] = Field(None, description="End date (YYYY-MM-DD), only used with period=custom")
    page: int = Field(1, le=MAX_PAGE, description="1-based page number; values below 1 are treated as 1")


class SalesFilter(BaseModel):
    start_date: Optional[datetime.date] = None
    end_date: Optional[datetime.date] = None
    status: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    @property
    def is_unbounded(self) -> bool:
        return self.start_date is None and self.end_date is None and not self.status


class TransactionRecord(BaseModel):
    invoice_id: int
    client_id: int
    client_first_name: str
    client_last_name: str
    total: Decimal = Field(..., ge=0)
    date: datetime.date
    payment_method: str
    status: str

    model_config = ConfigDict(frozen=True)

    @property
    def client_name(self) -> str:
        return f"{self.client_first_name} {self.client_last_name}".strip()


class PageResult(BaseModel):
    page: int
    page_size: int = PAGE_SIZE
    offset: int
    records: List[TransactionRecord]
    total_records: int
    total_pages: int


class PageLink(BaseModel):
    label: str
    page: int
    url: str
    active: bool = False


class SalesListingResponse(PageResult):
    period: str
    applied_filter: SalesFilter
    links: List[PageLink]


class ChartSeries(BaseModel):
    metric: MetricKind
    label: str
    year: int
    labels: List[str]
    data: List[Union[int, float]] = Field(..., min_length=12, max_length=12)


class MonthlySeriesOverview(BaseModel):
    year: int
    series: List[ChartSeries]
    errors: Dict[str, str] = Field(default_factory=dict, description="Metrics that failed, with the failure message")


class DashboardTotals(BaseModel):
    total_clients: int
    total_invoices: int
    total_sales: Decimal
    total_services: int
