"""Analytics app package: dashboard aggregates over bookings, ledger and inventory."""
