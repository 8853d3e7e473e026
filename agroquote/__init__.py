"""Agricultural product quote tracking and lowest-cost supplier reports."""

__version__ = "1.0.0"
