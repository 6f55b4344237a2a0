"""Remote snippet database access."""
