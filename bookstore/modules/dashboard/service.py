"""
DashboardService - Business logic for aggregating dashboard data.
Independent aggregations run concurrently, each on its own session,
with the number of queries in flight capped by a semaphore.
"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from fastapi import HTTPException
from sqlalchemy import Select, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from bookstore.core.ai import AIClient
from bookstore.core.exceptions import (
    AIAnalysisError,
    AIConfigurationError,
    DatabaseError,
    ValidationError,
)
from bookstore.core.utils import Bucket, day_buckets, month_buckets, resolve_date_range
from bookstore.modules.books.models import Book
from bookstore.modules.members.models import Member
from bookstore.modules.orders.models import CANCELLED_STATUS, Order, OrderDetail
from bookstore.modules.sales.models import Sale, SaleDetail
from .prompts import build_analysis_prompt
from .schemas import (
    AnalyzeRequest,
    AnalyzeResponse,
    DashboardResponse,
    IncomeBucketResponse,
    IncomeRangeResponse,
    SelectedFiltersResponse,
    TopProductResponse,
)

logger = logging.getLogger(__name__)

TOP_PRODUCTS_LIMIT = 5


@dataclass
class ProductTotal:
    """Quantity and revenue of one book summed over sales channels"""

    book_id: int
    total_qty: int = 0
    total_revenue: int = 0


def online_income_query(
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
    category: Optional[str] = None,
) -> Select:
    """SUM(order_detail.price) for non-cancelled orders created in [start, end)."""
    query = (
        select(func.coalesce(func.sum(OrderDetail.price), 0))
        .select_from(OrderDetail)
        .join(Order, OrderDetail.order_id == Order.id)
        .where(Order.status != CANCELLED_STATUS)
    )
    if start is not None:
        query = query.where(Order.created_at >= start)
    if end is not None:
        query = query.where(Order.created_at < end)
    if category:
        query = query.join(Book, OrderDetail.book_id == Book.id).where(
            Book.category == category
        )
    return query


def sale_income_query(
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
    category: Optional[str] = None,
) -> Select:
    """
    SUM(sale.total) for sales created in [start, end).
    With a category, only sales holding at least one book of that category count.
    """
    query = select(func.coalesce(func.sum(Sale.total), 0))
    if start is not None:
        query = query.where(Sale.created_at >= start)
    if end is not None:
        query = query.where(Sale.created_at < end)
    if category:
        query = query.where(
            Sale.details.any(SaleDetail.book.has(Book.category == category))
        )
    return query


def online_products_query(category: Optional[str] = None) -> Select:
    query = (
        select(
            OrderDetail.book_id,
            func.coalesce(func.sum(OrderDetail.qty), 0),
            func.coalesce(func.sum(OrderDetail.price), 0),
        )
        .select_from(OrderDetail)
        .join(Order, OrderDetail.order_id == Order.id)
        .where(Order.status != CANCELLED_STATUS)
        .group_by(OrderDetail.book_id)
    )
    if category:
        query = query.join(Book, OrderDetail.book_id == Book.id).where(
            Book.category == category
        )
    return query


def sale_products_query(category: Optional[str] = None) -> Select:
    query = select(
        SaleDetail.book_id,
        func.coalesce(func.sum(SaleDetail.qty), 0),
        func.coalesce(func.sum(SaleDetail.price), 0),
    ).group_by(SaleDetail.book_id)
    if category:
        query = query.join(Book, SaleDetail.book_id == Book.id).where(
            Book.category == category
        )
    return query


def merge_product_totals(
    *channels: Iterable[Tuple[int, Any, Any]],
) -> Dict[int, ProductTotal]:
    """
    Merge (book_id, qty, revenue) rows from any number of channels, keyed by book id.
    Rows for the same book are summed, so channel order does not matter.
    """
    merged: Dict[int, ProductTotal] = {}
    for rows in channels:
        for book_id, qty, revenue in rows:
            total = merged.setdefault(book_id, ProductTotal(book_id=book_id))
            total.total_qty += int(qty or 0)
            total.total_revenue += int(revenue or 0)
    return merged


def rank_top_products(
    totals: Dict[int, ProductTotal], limit: int = TOP_PRODUCTS_LIMIT
) -> List[ProductTotal]:
    """Highest quantity first; equal quantities keep book id order."""
    ranked = sorted(totals.values(), key=lambda total: (-total.total_qty, total.book_id))
    return ranked[:limit]


class DashboardService:
    """
    Dashboard service for aggregating all dashboard data efficiently.
    One instance is built at startup and shared by every request.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        max_concurrency: int = 8,
    ):
        self._session_factory = session_factory
        self._semaphore = asyncio.Semaphore(max_concurrency)

    async def _scalar(self, query) -> Any:
        async with self._semaphore:
            async with self._session_factory() as session:
                return await session.scalar(query)

    async def _rows(self, query) -> List[Any]:
        async with self._semaphore:
            async with self._session_factory() as session:
                result = await session.execute(query)
                return list(result.all())

    async def _scalars(self, query) -> List[Any]:
        async with self._semaphore:
            async with self._session_factory() as session:
                result = await session.scalars(query)
                return list(result.all())

    async def get_dashboard_data(
        self,
        month: Optional[int] = None,
        year: Optional[int] = None,
        category: Optional[str] = None,
    ) -> DashboardResponse:
        """
        Get all dashboard data: summary cards, revenue chart series,
        top products and the category list.

        Without a month the chart has one bucket per month of the year,
        with a month it has one bucket per day of that month.
        """
        selected_year = year or date.today().year
        selected_month = month or None
        selected_category = category or None

        try:
            # 1. Summary cards
            (
                total_order,
                total_member,
                total_income,
                total_sale_count,
                total_sale_income,
                categories,
            ) = await asyncio.gather(
                self._scalar(select(func.count()).select_from(Order)),
                self._scalar(select(func.count()).select_from(Member)),
                self._scalar(online_income_query()),
                self._scalar(select(func.count()).select_from(Sale)),
                self._scalar(sale_income_query()),
                self._scalars(
                    select(Book.category)
                    .where(Book.category.is_not(None))
                    .distinct()
                    .order_by(Book.category)
                ),
            )

            # 2. Revenue chart: daily for a selected month, monthly otherwise
            if selected_month:
                buckets = day_buckets(selected_year, selected_month)
            else:
                buckets = month_buckets(selected_year)

            monthly_income = await self._income_series(
                buckets, selected_year, selected_category
            )

            # 3. Top products across both channels
            top_products = await self._top_products(selected_category)
        except SQLAlchemyError as exc:
            logger.exception("Dashboard error")
            raise DatabaseError() from exc

        total_income = int(total_income or 0)
        total_sale_income = int(total_sale_income or 0)

        logger.debug(
            f"Dashboard computed: year={selected_year} month={selected_month} "
            f"category={selected_category!r} buckets={len(monthly_income)}"
        )

        return DashboardResponse(
            total_order=total_order or 0,
            total_income=total_income,
            total_sale_count=total_sale_count or 0,
            total_sale_income=total_sale_income,
            total_all_income=total_income + total_sale_income,
            total_member=total_member or 0,
            monthly_income=monthly_income,
            top_products=top_products,
            categories=categories,
            selected_filters=SelectedFiltersResponse(
                month=selected_month,
                year=selected_year,
                category=selected_category,
            ),
        )

    async def _income_series(
        self, buckets: Sequence[Bucket], year: int, category: Optional[str]
    ) -> List[IncomeBucketResponse]:
        """Online and in-store income per bucket, every bucket present even when empty."""
        queries = []
        for bucket in buckets:
            queries.append(self._scalar(online_income_query(bucket.start, bucket.end, category)))
            queries.append(self._scalar(sale_income_query(bucket.start, bucket.end, category)))

        results = await asyncio.gather(*queries)

        series = []
        for index, bucket in enumerate(buckets):
            online_income = int(results[2 * index] or 0)
            sale_income = int(results[2 * index + 1] or 0)
            series.append(
                IncomeBucketResponse(
                    month=bucket.label,
                    online_income=online_income,
                    sale_income=sale_income,
                    income=online_income + sale_income,
                    year=year,
                )
            )
        return series

    async def _top_products(self, category: Optional[str]) -> List[TopProductResponse]:
        online_rows, sale_rows = await asyncio.gather(
            self._rows(online_products_query(category)),
            self._rows(sale_products_query(category)),
        )

        top = rank_top_products(merge_product_totals(online_rows, sale_rows))
        if not top:
            return []

        books = await self._scalars(
            select(Book).where(Book.id.in_([product.book_id for product in top]))
        )
        books_by_id = {book.id: book for book in books}

        products = []
        for product in top:
            book = books_by_id.get(product.book_id)
            products.append(
                TopProductResponse(
                    id=product.book_id,
                    name=book.name if book else "",
                    image=book.image if book else None,
                    category=(book.category or "") if book else "",
                    price=(book.price or 0) if book else 0,
                    total_sold=product.total_qty,
                    total_revenue=product.total_revenue,
                )
            )
        return products

    async def get_income_by_date_range(
        self, start_date: str, end_date: str
    ) -> IncomeRangeResponse:
        """
        Online and in-store income between two inclusive ISO dates.
        A date-only end date covers the whole day.
        """
        try:
            start, end = resolve_date_range(start_date, end_date)
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc

        try:
            online_income, sale_income = await asyncio.gather(
                self._scalar(online_income_query(start, end)),
                self._scalar(sale_income_query(start, end)),
            )
        except SQLAlchemyError as exc:
            logger.exception("Income by date range error")
            raise DatabaseError() from exc

        online_income = int(online_income or 0)
        sale_income = int(sale_income or 0)

        return IncomeRangeResponse(
            online_income=online_income,
            sale_income=sale_income,
            total_income=online_income + sale_income,
            start_date=start_date,
            end_date=end_date,
        )

    @staticmethod
    async def analyze(
        data: AnalyzeRequest, ai_client: Optional[AIClient]
    ) -> AnalyzeResponse:
        """
        Ask the AI model for a written business analysis of dashboard figures.
        Nothing is sent when no AI client is configured.
        """
        if ai_client is None:
            raise AIConfigurationError()

        prompt = build_analysis_prompt(data)

        try:
            analysis = await ai_client.generate(prompt)
        except HTTPException:
            logger.exception("AI analysis error")
            raise
        except Exception as exc:
            logger.exception("AI analysis error")
            raise AIAnalysisError(str(exc)) from exc

        return AnalyzeResponse(analysis=analysis)
