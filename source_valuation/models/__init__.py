"""Source input/output models."""
