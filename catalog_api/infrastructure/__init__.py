"""Infrastructure: configuration, database access and logging setup."""
