"""Billing tables read by the dashboard.

These models map the host billing system's own tables. The dashboard never
writes to them; the column names are kept through ``source_field`` so the
models line up with the existing schema."""

from tortoise import fields, models


class Client(models.Model):
    id = fields.IntField(primary_key=True)
    first_name = fields.CharField(max_length=255, source_field="firstname")
    last_name = fields.CharField(max_length=255, source_field="lastname")
    date_created = fields.DateField(source_field="datecreated")

    invoices: fields.ReverseRelation["Invoice"]

    def __str__(self):
        return f"Client {self.id} ({self.first_name} {self.last_name})"

    class Meta:
        table = "tblclients"


class Invoice(models.Model):
    id = fields.IntField(primary_key=True)
    client: fields.ForeignKeyRelation[Client] = fields.ForeignKeyField(
        "models.Client",
        related_name="invoices",
        source_field="userid",
        on_delete=fields.RESTRICT,
    )
    total = fields.DecimalField(max_digits=16, decimal_places=2, default=0)
    date = fields.DateField()
    payment_method = fields.CharField(max_length=255, source_field="paymentmethod", default="")
    status = fields.CharField(max_length=50, default="Unpaid")

    def __str__(self):
        return f"Invoice {self.id} - {self.total} ({self.status})"

    class Meta:
        table = "tblinvoices"


class Hosting(models.Model):
    id = fields.IntField(primary_key=True)
    registration_date = fields.DateField(source_field="regdate")

    def __str__(self):
        return f"Service {self.id} registered {self.registration_date}"

    class Meta:
        table = "tblhosting"
