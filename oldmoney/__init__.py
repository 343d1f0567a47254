"""Old Money Calculator: 40-year savings projections with CSV export and an email relay."""

__version__ = "0.1.0"
