"""Daily Connections editorial service: puzzle validation, storage and API."""

__version__ = "1.0.0"
