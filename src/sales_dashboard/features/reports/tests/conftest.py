import datetime
from decimal import Decimal

import pytest_asyncio
from tortoise import connections
from sales_dashboard.features.billing.models import Client, Hosting, Invoice


@pytest_asyncio.fixture
async def default_client() -> Client:
    """A client that owns invoices in tests."""
    client = await Client.create(first_name="Ada", last_name="Lovelace", date_created=datetime.date(2024, 1, 10))
    return client


@pytest_asyncio.fixture
async def another_client() -> Client:
    """A second client, for checking the join projection."""
    client = await Client.create(first_name="Grace", last_name="Hopper", date_created=datetime.date(2024, 3, 2))
    return client


@pytest_asyncio.fixture
async def invoice_factory(default_client: Client):
    """A factory to create invoices."""

    async def _factory(
        date: datetime.date,
        total: str = "10.00",
        status: str = "Paid",
        payment_method: str = "paypal",
        client: Client = default_client,
    ):
        invoice = await Invoice.create(
            client=client,
            total=Decimal(total),
            date=date,
            status=status,
            payment_method=payment_method,
        )
        return invoice

    return _factory


@pytest_asyncio.fixture
async def hosting_factory():
    """A factory to create hosted services."""

    async def _factory(registration_date: datetime.date):
        return await Hosting.create(registration_date=registration_date)

    return _factory


@pytest_asyncio.fixture
async def many_invoices(default_client: Client):
    """250 paid invoices, one per day starting 2024-01-01."""
    start = datetime.date(2024, 1, 1)
    await Invoice.bulk_create([
        Invoice(
            client=default_client,
            total=Decimal("1.00"),
            date=start + datetime.timedelta(days=n),
            status="Paid",
            payment_method="banktransfer",
        )
        for n in range(250)
    ])


@pytest_asyncio.fixture
async def orphaned_invoice():
    """An invoice row whose owning client no longer exists (userid 999)."""
    conn = connections.get("default")
    await conn.execute_script("PRAGMA foreign_keys=OFF")
    await conn.execute_query(
        "INSERT INTO tblinvoices (id, userid, total, date, paymentmethod, status) "
        "VALUES (999, 999, '5.00', '2024-02-01', 'paypal', 'Paid')"
    )
    await conn.execute_script("PRAGMA foreign_keys=ON")
    return 999
