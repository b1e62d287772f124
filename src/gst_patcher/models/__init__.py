"""Domain models for installations and patch outcomes."""
