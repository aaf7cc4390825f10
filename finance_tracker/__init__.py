"""Personal finance tracker: Expenses and Reports screens over in-memory data."""
