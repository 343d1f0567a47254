"""Projection engine, validation, export and email relay."""
