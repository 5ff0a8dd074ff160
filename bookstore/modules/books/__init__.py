"""Books module"""

from .models import Book

__all__ = ["Book"]
