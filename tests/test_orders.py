from datetime import datetime

import pytest

from storefront.domain.models import OrderStatus, ProductStatus
from storefront.domain.exceptions import (
    ProductNotFoundError, OrderNotFoundError, InsufficientStockError, InvalidStatusTransitionError,
    ValidationError
)
from storefront.application.submit_order import SubmitOrderUseCase, SubmitOrderDTO, Geolocation
from storefront.application.update_order_status import UpdateOrderStatusUseCase
from storefront.application.list_orders import ListOrdersUseCase, GetOrderUseCase
from storefront.application.manage_products import DeleteProductUseCase
from conftest import fixed_clock, FIXED_NOW


def order_request(product_id=1, quantity=2, geolocation=None):
    return SubmitOrderDTO(
        customer_name="Dewi Kartika",
        phone="081298765432",
        address="Jl. Diponegoro No. 5, Yogyakarta",
        geolocation=geolocation,
        ktp_path="ktp_dewi.jpg",
        product_id=product_id,
        quantity=quantity,
    )


async def stock_of(store, product_id):
    return (await store.load()).find_product(product_id).stock


async def test_submit_order_scenario(store):
    order = await SubmitOrderUseCase(store, fixed_clock)(order_request(quantity=2))

    assert order.total_price == 36000
    assert order.status == OrderStatus.WAITING
    assert order.product_name == "Susu UHT Coklat 1L"
    assert order.order_date == FIXED_NOW
    assert await stock_of(store, 1) == 148


async def test_submit_order_appends_exactly_one_order(store):
    before = await store.load()

    order = await SubmitOrderUseCase(store, fixed_clock)(order_request(quantity=5))

    after = await store.load()
    assert len(after.orders) == len(before.orders) + 1
    assert after.orders[-1] == order
    assert after.find_product(1).stock == before.find_product(1).stock - 5


async def test_submit_order_whole_stock(store):
    await SubmitOrderUseCase(store, fixed_clock)(order_request(quantity=150))

    assert await stock_of(store, 1) == 0


async def test_invoice_id_uses_persisted_counter(store):
    submit = SubmitOrderUseCase(store, fixed_clock)

    first = await submit(order_request())
    second = await submit(order_request())

    assert first.id == "INV-20251104-003"
    assert second.id == "INV-20251104-004"
    assert (await store.load()).order_sequence == 4


async def test_invoice_id_skips_existing_ids(store):
    document = await store.load()
    document.order_sequence = 0
    document.orders[0].id = "INV-20251104-001"
    await store.save(document)

    order = await SubmitOrderUseCase(store, fixed_clock)(order_request())

    assert order.id == "INV-20251104-002"


async def test_invoice_id_not_reused_after_counter_passes_deleted_orders(store):
    submit = SubmitOrderUseCase(store, fixed_clock)
    first = await submit(order_request())

    document = await store.load()
    document.orders = [o for o in document.orders if o.id != first.id]
    await store.save(document)

    second = await submit(order_request())
    assert second.id != first.id


async def test_submit_order_with_geolocation(store):
    geo = Geolocation(latitude=-7.7956, longitude=110.3695)

    order = await SubmitOrderUseCase(store, fixed_clock)(order_request(geolocation=geo))

    stored = (await store.load()).find_order(order.id)
    assert (stored.latitude, stored.longitude) == (-7.7956, 110.3695)


async def test_insufficient_stock_scenario(store, store_path):
    await SubmitOrderUseCase(store, fixed_clock)(order_request(quantity=2))
    before = store_path.read_text(encoding="utf-8")

    with pytest.raises(InsufficientStockError) as exc_info:
        await SubmitOrderUseCase(store, fixed_clock)(order_request(quantity=500))

    assert exc_info.value.available == 148
    assert exc_info.value.required == 500
    assert store_path.read_text(encoding="utf-8") == before
    assert await stock_of(store, 1) == 148


async def test_submit_order_unknown_product(store, store_path):
    before = store_path.read_text(encoding="utf-8")

    with pytest.raises(ProductNotFoundError):
        await SubmitOrderUseCase(store, fixed_clock)(order_request(product_id=999))

    assert store_path.read_text(encoding="utf-8") == before


async def test_submit_order_inactive_product(store, store_path):
    document = await store.load()
    document.find_product(1).status = ProductStatus.INACTIVE
    await store.save(document)
    before = store_path.read_text(encoding="utf-8")

    with pytest.raises(ValidationError):
        await SubmitOrderUseCase(store, fixed_clock)(order_request(product_id=1, quantity=2))

    assert store_path.read_text(encoding="utf-8") == before
    assert await stock_of(store, 1) == 150


def test_quantity_must_be_positive():
    with pytest.raises(ValueError):
        order_request(quantity=0)


async def test_reject_restores_stock_scenario(store):
    order = await SubmitOrderUseCase(store, fixed_clock)(order_request(quantity=2))
    assert await stock_of(store, 1) == 148

    rejected = await UpdateOrderStatusUseCase(store)(order.id, OrderStatus.REJECTED)

    assert rejected.status == OrderStatus.REJECTED
    assert await stock_of(store, 1) == 150


async def test_reject_twice_restores_stock_once(store):
    order = await SubmitOrderUseCase(store, fixed_clock)(order_request(quantity=2))
    update = UpdateOrderStatusUseCase(store)

    await update(order.id, OrderStatus.REJECTED)
    await update(order.id, OrderStatus.REJECTED)

    assert await stock_of(store, 1) == 150


async def test_confirm_never_touches_stock(store):
    order = await SubmitOrderUseCase(store, fixed_clock)(order_request(quantity=2))
    update = UpdateOrderStatusUseCase(store)

    confirmed = await update(order.id, OrderStatus.CONFIRMED)
    await update(order.id, OrderStatus.CONFIRMED)

    assert confirmed.status == OrderStatus.CONFIRMED
    assert await stock_of(store, 1) == 148


async def test_same_status_is_a_no_op(store, store_path):
    before = store_path.read_text(encoding="utf-8")

    order = await UpdateOrderStatusUseCase(store)("INV-20231029-002", OrderStatus.WAITING)

    assert order.status == OrderStatus.WAITING
    assert store_path.read_text(encoding="utf-8") == before


@pytest.mark.parametrize("target", [OrderStatus.REJECTED, OrderStatus.WAITING])
async def test_confirmed_order_does_not_change(store, target):
    stock_before = await stock_of(store, 2)

    with pytest.raises(InvalidStatusTransitionError):
        await UpdateOrderStatusUseCase(store)("INV-20231028-001", target)

    assert await stock_of(store, 2) == stock_before


async def test_rejected_order_cannot_be_confirmed(store):
    update = UpdateOrderStatusUseCase(store)
    await update("INV-20231029-002", OrderStatus.REJECTED)
    stock_before = await stock_of(store, 1)

    with pytest.raises(InvalidStatusTransitionError):
        await update("INV-20231029-002", OrderStatus.CONFIRMED)

    assert await stock_of(store, 1) == stock_before
    assert (await store.load()).find_order("INV-20231029-002").status == OrderStatus.REJECTED


async def test_reject_after_product_deleted_skips_restoration(store):
    await DeleteProductUseCase(store)(1)

    order = await UpdateOrderStatusUseCase(store)("INV-20231029-002", OrderStatus.REJECTED)

    assert order.status == OrderStatus.REJECTED
    assert (await store.load()).find_product(1) is None


async def test_update_unknown_order(store):
    with pytest.raises(OrderNotFoundError):
        await UpdateOrderStatusUseCase(store)("INV-00000000-999", OrderStatus.CONFIRMED)


async def test_list_orders_newest_first(store):
    new_order = await SubmitOrderUseCase(store, fixed_clock)(order_request())

    orders = await ListOrdersUseCase(store)()

    assert [o.id for o in orders] == [new_order.id, "INV-20231029-002", "INV-20231028-001"]


async def test_list_orders_mixes_dates_and_timestamps(store):
    late_same_day = lambda: datetime(2023, 10, 29, 18, 0)
    order = await SubmitOrderUseCase(store, late_same_day)(order_request())

    orders = await ListOrdersUseCase(store)()

    assert orders[0].id == order.id


async def test_get_order(store):
    order = await GetOrderUseCase(store)("INV-20231028-001")
    assert order.latitude == -6.1754

    with pytest.raises(OrderNotFoundError):
        await GetOrderUseCase(store)("missing")
