"""Core data model for jobs, events, queries, reports and comparison expressions."""

__version__ = "0.1.0"