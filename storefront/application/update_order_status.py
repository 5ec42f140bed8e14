import logging

from storefront.domain.models import Order, OrderStatus
from storefront.domain.exceptions import OrderNotFoundError, InvalidStatusTransitionError
from storefront.application.interfaces import DocumentStore


logger = logging.getLogger(__name__)


class UpdateOrderStatusUseCase:
    def __init__(self, store: DocumentStore):
        self._store = store

    async def __call__(self, order_id: str, new_status: OrderStatus) -> Order:
        logger.info(f"Смена статуса заказа {order_id} на {new_status.value}")

        document = await self._store.load()
        order = document.find_order(order_id)
        if not order:
            raise OrderNotFoundError(f"Order {order_id} not found")

        # Идемпотентность
        if order.status == new_status:
            logger.info(f"Заказ {order_id} уже в статусе {new_status.value}")
            return order

        if not order.can_transition_to(new_status):
            raise InvalidStatusTransitionError(order.status, new_status)

        if new_status == OrderStatus.REJECTED:
            product = document.find_product(order.product_id)
            if product:
                product.stock += order.quantity
                logger.info(f"Возвращено {order.quantity} шт. товара {product.id} на склад")
            else:
                logger.warning(
                    f"Товар {order.product_id} заказа {order_id} удален, "
                    f"{order.quantity} шт. не возвращены"
                )

        order.status = new_status
        await self._store.save(document)
        logger.info(f"Заказ {order_id} переведен в {new_status.value}")
        return order
