"""coinbot: chat bot for coin quotes and price-move alerts."""
