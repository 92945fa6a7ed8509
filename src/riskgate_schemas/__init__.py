"""Packaged JSON schemas for risk gate configuration and results."""
