from typing import List

from storefront.domain.models import Order
from storefront.domain.exceptions import OrderNotFoundError
from storefront.application.interfaces import DocumentStore


class ListOrdersUseCase:
    def __init__(self, store: DocumentStore):
        self._store = store

    async def __call__(self) -> List[Order]:
        document = await self._store.load()
        return sorted(document.orders, key=lambda o: o.order_date, reverse=True)


class GetOrderUseCase:
    def __init__(self, store: DocumentStore):
        self._store = store

    async def __call__(self, order_id: str) -> Order:
        document = await self._store.load()
        order = document.find_order(order_id)
        if not order:
            raise OrderNotFoundError(f"Order {order_id} not found")
        return order
