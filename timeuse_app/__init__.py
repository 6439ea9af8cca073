"""Time-use tracker application package."""
