"""Database infrastructure"""

from .pool import close_pool, open_pool

__all__ = ["open_pool", "close_pool"]
