"""DisasterIQ: NASA EONET disaster feed normalization and alerting backend."""

__version__ = "0.4.0"
