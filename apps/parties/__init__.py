"""Parties app package.

Customers and suppliers share one record type. Each party carries a
running balance that is a cache of the sum of its ledger entries.
"""
