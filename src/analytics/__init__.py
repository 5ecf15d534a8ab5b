"""Analytics engine: scoring, gap-filled time series, trend and summary."""
