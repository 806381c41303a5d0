"""Market data glue: configuration, exchange clients, batch scanning and CLI."""
