"""
Dashboard DTOs (Data Transfer Objects)
Serialized with camelCase keys for the admin frontend.
"""

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from typing import List, Optional


class CamelModel(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class IncomeBucketResponse(CamelModel):
    """One day or month of the revenue chart"""

    month: str = Field(..., description="Bucket label: Thai month abbreviation or day number")
    online_income: int = Field(..., description="Online order income in the bucket")
    sale_income: int = Field(..., description="In-store sale income in the bucket")
    income: int = Field(..., description="online_income + sale_income")
    year: int


class TopProductResponse(CamelModel):
    """A best-selling book across both channels"""

    id: int
    name: str = ""
    image: Optional[str] = None
    category: str = ""
    price: int = 0
    total_sold: int = Field(..., description="Units sold online and in store")
    total_revenue: int = Field(..., description="Revenue from online and in-store lines")


class SelectedFiltersResponse(CamelModel):
    month: Optional[int] = None
    year: int
    category: Optional[str] = None


class DashboardResponse(CamelModel):
    """Complete dashboard data response"""

    total_order: int
    total_income: int = Field(..., description="Online income, cancelled orders excluded")
    total_sale_count: int
    total_sale_income: int
    total_all_income: int
    total_member: int
    monthly_income: List[IncomeBucketResponse]
    top_products: List[TopProductResponse]
    categories: List[str]
    selected_filters: SelectedFiltersResponse


class IncomeRangeResponse(CamelModel):
    """Income between two inclusive dates"""

    online_income: int
    sale_income: int
    total_income: int
    start_date: str
    end_date: str


# Analysis input: the payload returned by GET /dashboard, sent back by the frontend.
# Only the fields the prompt uses are read; everything else is ignored.


class AnalyzeTopProduct(CamelModel):
    name: Optional[str] = ""
    total_sold: float = 0
    total_revenue: float = 0


class AnalyzeIncomeBucket(CamelModel):
    month: str = ""
    online_income: float = 0
    sale_income: float = 0
    income: float = 0


class AnalyzeRequest(CamelModel):
    total_all_income: Optional[float] = 0
    top_products: Optional[List[AnalyzeTopProduct]] = None
    monthly_income: Optional[List[AnalyzeIncomeBucket]] = None


class AnalyzeResponse(BaseModel):
    analysis: str
