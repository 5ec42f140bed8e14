import logging
from datetime import datetime
from typing import List

from storefront.domain.models import Product, ProductDraft, ProductStatus
from storefront.domain.exceptions import ProductNotFoundError
from storefront.application.interfaces import DocumentStore, Clock


logger = logging.getLogger(__name__)


class ListProductsUseCase:
    def __init__(self, store: DocumentStore):
        self._store = store

    async def __call__(self, active_only: bool = False) -> List[Product]:
        document = await self._store.load()
        if active_only:
            return [p for p in document.products if p.status == ProductStatus.ACTIVE]
        return list(document.products)


class GetProductUseCase:
    def __init__(self, store: DocumentStore):
        self._store = store

    async def __call__(self, product_id: int) -> Product:
        document = await self._store.load()
        product = document.find_product(product_id)
        if not product:
            raise ProductNotFoundError(f"Product {product_id} not found")
        return product


class AddProductUseCase:
    def __init__(self, store: DocumentStore, clock: Clock = datetime.now):
        self._store = store
        self._clock = clock

    async def __call__(self, draft: ProductDraft) -> Product:
        document = await self._store.load()

        # id из времени, но строго больше максимального в каталоге
        new_id = int(self._clock().timestamp() * 1000)
        if document.products:
            new_id = max(new_id, max(p.id for p in document.products) + 1)

        product = Product(id=new_id, **draft.model_dump())
        document.products.append(product)
        await self._store.save(document)
        logger.info(f"Товар добавлен: {product.id} ({product.name})")
        return product


class UpdateProductUseCase:
    def __init__(self, store: DocumentStore):
        self._store = store

    async def __call__(self, product: Product) -> Product:
        document = await self._store.load()
        for index, existing in enumerate(document.products):
            if existing.id == product.id:
                document.products[index] = product
                break
        else:
            raise ProductNotFoundError(f"Product {product.id} not found")

        await self._store.save(document)
        logger.info(f"Товар обновлен: {product.id}")
        return product


class DeleteProductUseCase:
    def __init__(self, store: DocumentStore):
        self._store = store

    async def __call__(self, product_id: int) -> None:
        document = await self._store.load()
        remaining = [p for p in document.products if p.id != product_id]
        if len(remaining) == len(document.products):
            logger.info(f"Товара {product_id} нет, удалять нечего")
            return

        document.products = remaining
        await self._store.save(document)
        logger.info(f"Товар удален: {product_id}")
