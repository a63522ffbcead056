"""Client, request signing and data models for the Buda exchange REST API."""

__version__ = "0.1.0"
__all__ = ["auth", "client", "models"]