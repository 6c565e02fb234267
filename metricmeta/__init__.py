"""Metric metadata service with centralized HTTP error handling."""
