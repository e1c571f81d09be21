"""
Shared, cross-cutting code for the API.

`core/` holds the building blocks both resources use (DB gateway, settings,
error envelope). Keep resource-specific SQL and validation in the
corresponding package (e.g. `invoices/`).
"""
