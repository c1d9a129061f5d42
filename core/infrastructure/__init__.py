"""Infrastructure layer - database, message bus, and external service adapters."""
