"""Location adjustment, snapshot calculation and forecasting."""
