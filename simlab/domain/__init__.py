"""Domain models, distribution tables and input validation."""
