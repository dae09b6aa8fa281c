"""Ambiant Scan: caching aggregation proxy for environmental conditions."""

__version__ = "1.0.0"
SERVICE_NAME = "ambiant-scan"
