"""Finance domain modules."""
