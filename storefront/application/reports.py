from datetime import date
from typing import List

from storefront.domain.models import Order, OrderStatus, StoreModel
from storefront.domain.exceptions import ValidationError
from storefront.application.interfaces import DocumentStore


class MonthlySales(StoreModel):
    month: str
    revenue: float
    orders: int


class DashboardStats(StoreModel):
    total_products: int
    total_orders: int
    confirmed_orders: int
    total_revenue: float
    monthly_sales: List[MonthlySales]


class SalesReport(StoreModel):
    start_date: date
    end_date: date
    orders: List[Order]
    confirmed_revenue: float


def confirmed_revenue(orders: List[Order]) -> float:
    return sum(o.total_price for o in orders if o.status == OrderStatus.CONFIRMED)


class DashboardStatsUseCase:
    def __init__(self, store: DocumentStore):
        self._store = store

    async def __call__(self) -> DashboardStats:
        document = await self._store.load()
        confirmed = [o for o in document.orders if o.status == OrderStatus.CONFIRMED]

        by_month = {}
        for order in confirmed:
            key = order.order_date.strftime("%Y-%m")
            bucket = by_month.setdefault(key, MonthlySales(month=key, revenue=0, orders=0))
            bucket.revenue += order.total_price
            bucket.orders += 1

        return DashboardStats(
            total_products=len(document.products),
            total_orders=len(document.orders),
            confirmed_orders=len(confirmed),
            total_revenue=confirmed_revenue(confirmed),
            monthly_sales=[by_month[k] for k in sorted(by_month)],
        )


class SalesReportUseCase:
    def __init__(self, store: DocumentStore):
        self._store = store

    async def __call__(self, start_date: date, end_date: date) -> SalesReport:
        if start_date > end_date:
            raise ValidationError(f"Start date {start_date} is after end date {end_date}")

        document = await self._store.load()
        orders = sorted(
            (o for o in document.orders if start_date <= o.order_date.date() <= end_date),
            key=lambda o: o.order_date,
            reverse=True,
        )
        return SalesReport(
            start_date=start_date,
            end_date=end_date,
            orders=orders,
            confirmed_revenue=confirmed_revenue(orders),
        )
