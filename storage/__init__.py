"""
Storage Package

Holds the in-memory quote cache. State lives only for the process lifetime
and is rebuilt from scratch at every start.
"""

from storage.quote_cache import QuoteCache

__all__ = ["QuoteCache"]
