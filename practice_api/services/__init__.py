"""Business logic: input validation and user operations."""
