"""
Read caches.
"""

from .list_cache import ListCache, get_list_cache

__all__ = ["ListCache", "get_list_cache"]
