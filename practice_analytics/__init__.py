"""Analytics snapshot engine for the practice management console."""
