"""Ledger app package: the transaction log of invoices, payments and refunds."""
