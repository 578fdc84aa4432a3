"""Adapters for the external catalog and stock oracle."""
