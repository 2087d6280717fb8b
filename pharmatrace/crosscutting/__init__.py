"""Crosscutting concerns: configuration, logging, metrics and internal errors."""
