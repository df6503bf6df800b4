"""Quotes and handles."""

from .handle import Handle, RelinkableHandle
from .quote import DerivedQuote, Quote, SimpleQuote, quote_handle

__all__ = [
    "Quote",
    "SimpleQuote",
    "DerivedQuote",
    "Handle",
    "RelinkableHandle",
    "quote_handle",
]
