import asyncio
import datetime
import logging
from typing import Optional

import typer
from tortoise import Tortoise

from sales_dashboard.core.config import TORTOISE_ORM_CONFIG
from sales_dashboard.core.exceptions import ReportError
from sales_dashboard.features.billing.models import Client, Hosting, Invoice
from sales_dashboard.features.reports import service as report_service
from sales_dashboard.features.reports.charts import MONTH_LABELS
from sales_dashboard.features.reports.filters import resolve_filter
from sales_dashboard.features.reports.schemas import MetricKind, Period

logger = logging.getLogger(__name__)

app = typer.Typer(name="sales-dashboard", help="CLI for reading Sales Dashboard reports.")

# Shared async context manager for database connection
class DBConnection:
    async def __aenter__(self):
        await Tortoise.init(config=TORTOISE_ORM_CONFIG)
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await Tortoise.close_connections()


@app.command("listing")
def listing_command(
    period: str = typer.Option(Period.MONTH.value, help="week, month, year or custom."),
    status: str = typer.Option("", help="Exact invoice status to match."),
    start_date: Optional[datetime.datetime] = typer.Option(None, formats=["%Y-%m-%d"], help="Start date for period=custom."),
    end_date: Optional[datetime.datetime] = typer.Option(None, formats=["%Y-%m-%d"], help="End date for period=custom."),
    page: int = typer.Option(1, help="Page number (100 rows per page)."),
):
    """Prints one page of the filtered sales listing."""
    sales_filter = resolve_filter(
        period, datetime.date.today(),
        custom_start=start_date.date() if start_date else None,
        custom_end=end_date.date() if end_date else None,
        status=status,
    )
    asyncio.run(_listing(sales_filter, page))

async def _listing(sales_filter, page: int):
    async with DBConnection():
        try:
            result = await report_service.get_sales_listing(sales_filter, page)
        except ReportError as e:
            typer.secho(f"Error: {e}", fg=typer.colors.RED)
            raise typer.Exit(code=1)

        if not result.records:
            typer.echo("No items!")
        for record in result.records:
            typer.echo(
                f"{record.invoice_id:>8}  {record.client_name:<30}  {record.total:>12,.2f}  "
                f"{record.date.isoformat()}  {record.payment_method:<16}  {record.status}"
            )
        typer.echo(f"Page {result.page} of {result.total_pages} ({result.total_records} record(s))")


@app.command("monthly")
def monthly_command(
    metric: str = typer.Argument(..., help="salesTotal, invoiceCount, clientSignups or serviceActivations."),
    year: int = typer.Option(datetime.date.today().year, help="Calendar year."),
):
    """Prints a gap-filled monthly series for one metric."""
    asyncio.run(_monthly(metric, year))

async def _monthly(metric: str, year: int):
    async with DBConnection():
        try:
            series = await report_service.get_monthly_series(year, metric)
        except ReportError as e:
            typer.secho(f"Error: {e}", fg=typer.colors.RED)
            raise typer.Exit(code=1)

        typer.echo(f"{MetricKind(metric).value} {year}")
        for label, value in zip(MONTH_LABELS, series):
            typer.echo(f"{label:<10} {value}")


@app.command("summary")
def summary_command():
    """Prints the all-time dashboard totals."""
    asyncio.run(_summary())

async def _summary():
    async with DBConnection():
        try:
            totals = await report_service.get_dashboard_totals()
        except ReportError as e:
            typer.secho(f"Error: {e}", fg=typer.colors.RED)
            raise typer.Exit(code=1)

        typer.echo(f"Total Clients:  {totals.total_clients}")
        typer.echo(f"Total Invoices: {totals.total_invoices}")
        typer.echo(f"Total Sales:    {totals.total_sales:,.2f}")
        typer.echo(f"Total Services: {totals.total_services}")


@app.command("test-db-connection")
def test_db_connection_command_sync():
    """Tests the database connection and counts the billing rows."""
    asyncio.run(test_db_connection_command())

async def test_db_connection_command():
    async with DBConnection():
        typer.echo("Successfully connected to the database.")
        for model in (Client, Invoice, Hosting):
            count = await model.all().count()
            typer.echo(f"Found {count} row(s) in {model._meta.db_table}.")

if __name__ == "__main__":
    app()
