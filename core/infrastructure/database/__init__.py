"""Database infrastructure - engine, ORM models, and repositories."""
