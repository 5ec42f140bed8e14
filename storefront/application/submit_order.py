import logging
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from storefront.domain.models import Order, OrderStatus, ProductStatus, Document
from storefront.domain.exceptions import ProductNotFoundError, InsufficientStockError, ValidationError
from storefront.application.interfaces import DocumentStore, Clock


logger = logging.getLogger(__name__)


class Geolocation(BaseModel):
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)


class SubmitOrderDTO(BaseModel):
    customer_name: str = Field(min_length=1)
    phone: str = Field(min_length=1)
    address: str = Field(min_length=1)
    geolocation: Optional[Geolocation] = None
    ktp_path: str = Field(min_length=1)
    product_id: int
    quantity: int = Field(gt=0)


def next_invoice_id(document: Document, now: datetime) -> str:
    """Сдвигает счетчик документа и возвращает свободный номер INV-YYYYMMDD-NNN"""
    while True:
        document.order_sequence += 1
        invoice_id = f"INV-{now:%Y%m%d}-{document.order_sequence:03d}"
        if not document.find_order(invoice_id):
            return invoice_id


class SubmitOrderUseCase:
    def __init__(self, store: DocumentStore, clock: Clock = datetime.now):
        self._store = store
        self._clock = clock

    async def __call__(self, order_data: SubmitOrderDTO) -> Order:
        logger.info(
            f"Создание заказа для {order_data.customer_name}, "
            f"товар {order_data.product_id}, количество {order_data.quantity}"
        )

        # 1. Поиск товара в загруженном документе
        document = await self._store.load()
        product = document.find_product(order_data.product_id)
        if not product:
            raise ProductNotFoundError(f"Product {order_data.product_id} not found")
        if product.status != ProductStatus.ACTIVE:
            raise ValidationError(f"Product {product.id} is not available for ordering")

        # 2. Проверка остатка
        if order_data.quantity > product.stock:
            raise InsufficientStockError(product.stock, order_data.quantity)

        # 3. Списание со склада в том же снимке
        product.stock -= order_data.quantity

        # 4. Создание заказа
        now = self._clock()
        geo = order_data.geolocation
        order = Order(
            id=next_invoice_id(document, now),
            customer_name=order_data.customer_name,
            phone=order_data.phone,
            address=order_data.address,
            latitude=geo.latitude if geo else None,
            longitude=geo.longitude if geo else None,
            ktp_path=order_data.ktp_path,
            product_id=product.id,
            product_name=product.name,
            quantity=order_data.quantity,
            total_price=product.price * order_data.quantity,
            status=OrderStatus.WAITING,
            order_date=now,
        )
        document.orders.append(order)

        # 5. Остаток, заказ и счетчик сохраняются одной записью
        await self._store.save(document)
        logger.info(f"Заказ создан: {order.id}, остаток товара {product.id}: {product.stock}")
        return order
