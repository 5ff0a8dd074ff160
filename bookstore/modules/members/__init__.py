"""Members module"""

from .models import Member

__all__ = ["Member"]
