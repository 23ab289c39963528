"""servicedesk: service catalog, categories and appointment booking."""

__version__ = "0.1.0"
