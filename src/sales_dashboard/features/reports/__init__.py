"""Sales dashboard reports

This module provides the read-only reports behind the sales dashboard: a
filtered, paginated invoice listing, month-bucketed series for the sales,
invoice, client and service charts, and the headline totals.

Endpoints accept a period selector (week, month, year or custom) and an
optional invoice status. All report handlers delegate to service functions
that contain the actual query logic."""
