"""Text and metadata transforms used when creating content."""
