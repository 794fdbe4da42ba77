"""Business logic services for the admin engine."""
