"""Shared services: HTTP transport and money helpers."""
from .http import ApiClient
from .money import multiply, to_decimal, to_float

__all__ = [
    "ApiClient",
    "multiply",
    "to_decimal",
    "to_float",
]
