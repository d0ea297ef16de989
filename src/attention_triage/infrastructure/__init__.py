"""Infrastructure helpers: structured logging and stable hashing."""
