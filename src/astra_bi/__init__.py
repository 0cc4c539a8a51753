"""AstraBI: conversational business intelligence over work-management boards."""

__version__ = "0.1.0"
