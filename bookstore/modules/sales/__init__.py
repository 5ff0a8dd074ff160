"""In-store sales module"""

from .models import Sale, SaleDetail

__all__ = ["Sale", "SaleDetail"]
