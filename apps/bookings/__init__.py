"""Bookings app package.

This app holds the booking engine: the only component allowed to write
across inventory, bookings, the transaction log and party balances. Every
booking operation runs inside one database transaction, so item status,
the booking record, ledger entries and balances change together or not
at all.
"""
