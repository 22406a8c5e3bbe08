"""ThreatLocker API client with retries and auto-pagination."""

__version__ = "0.1.0"
