"""HTTP access to the Gemina API."""

from .client import ApiResponse, GeminaClient

__all__ = [
    "ApiResponse",
    "GeminaClient",
]
