import calendar
from datetime import date, datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, File, HTTPException, Query, Response, UploadFile, status

from storefront.config import settings
from storefront.presentation.schemas import (
    LoginRequest, ProductRequest, ProductResponse, SubmitOrderRequest,
    UpdateOrderStatusRequest, OrderResponse, UploadResponse, ErrorResponse
)
from storefront.domain.models import Product, User
from storefront.domain.exceptions import (
    StoreUnavailableError, ProductNotFoundError, OrderNotFoundError, InsufficientStockError,
    InvalidStatusTransitionError, ValidationError, AuthenticationError
)
from storefront.application.interfaces import DocumentStore
from storefront.application.login import LoginUseCase
from storefront.application.manage_products import (
    ListProductsUseCase, GetProductUseCase, AddProductUseCase, UpdateProductUseCase, DeleteProductUseCase
)
from storefront.application.list_orders import ListOrdersUseCase, GetOrderUseCase
from storefront.application.submit_order import SubmitOrderUseCase
from storefront.application.update_order_status import UpdateOrderStatusUseCase
from storefront.application.reports import DashboardStats, SalesReport, DashboardStatsUseCase, SalesReportUseCase
from storefront.infrastructure.document_store import build_document_store
from storefront.infrastructure.uploads import IdentityDocumentStorage, MAX_IDENTITY_DOCUMENT_SIZE
from storefront.infrastructure.pdf_export import render_invoice_pdf, render_sales_report_pdf

router = APIRouter()

STORE_DOWN = {503: {"model": ErrorResponse}}


# Фабрики зависимостей
def get_document_store() -> DocumentStore:
    return build_document_store(settings)


def get_clock():
    return datetime.now


def get_identity_storage() -> IdentityDocumentStorage:
    return IdentityDocumentStorage(settings.UPLOAD_DIR)


def get_login_use_case():
    return LoginUseCase(settings.ADMIN_EMAIL, settings.ADMIN_PASSWORD_HASH, settings.ADMIN_NAME)


def _store_unavailable(e: StoreUnavailableError) -> HTTPException:
    return HTTPException(status_code=503, detail=f"Service unavailable: {str(e)}")


def _one_month_before(day: date) -> date:
    year, month = (day.year, day.month - 1) if day.month > 1 else (day.year - 1, 12)
    return day.replace(year=year, month=month, day=min(day.day, calendar.monthrange(year, month)[1]))


def _report_period(start: Optional[date], end: Optional[date]):
    end = end or date.today()
    return start or _one_month_before(end), end


# --- Auth ---

@router.post("/auth/login", response_model=User, responses={401: {"model": ErrorResponse}})
async def login(request: LoginRequest, use_case: LoginUseCase = Depends(get_login_use_case)):
    """Вход администратора"""
    try:
        return use_case(request.email, request.password)
    except AuthenticationError as e:
        raise HTTPException(status_code=401, detail=str(e))


# --- Products ---

@router.get("/products", response_model=List[ProductResponse], responses=STORE_DOWN)
async def list_products(
    active_only: bool = Query(False, alias="activeOnly"),
    store: DocumentStore = Depends(get_document_store)
):
    """Каталог в порядке добавления"""
    try:
        products = await ListProductsUseCase(store)(active_only=active_only)
        return [ProductResponse.from_domain(p) for p in products]
    except StoreUnavailableError as e:
        raise _store_unavailable(e)


@router.get(
    "/products/{product_id}",
    response_model=ProductResponse,
    responses={404: {"model": ErrorResponse}, **STORE_DOWN}
)
async def get_product(product_id: int, store: DocumentStore = Depends(get_document_store)):
    try:
        product = await GetProductUseCase(store)(product_id)
        return ProductResponse.from_domain(product)
    except ProductNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except StoreUnavailableError as e:
        raise _store_unavailable(e)


@router.post(
    "/products",
    response_model=ProductResponse,
    responses=STORE_DOWN,
    status_code=status.HTTP_201_CREATED
)
async def add_product(
    request: ProductRequest,
    store: DocumentStore = Depends(get_document_store),
    clock=Depends(get_clock)
):
    try:
        product = await AddProductUseCase(store, clock)(request)
        return ProductResponse.from_domain(product)
    except StoreUnavailableError as e:
        raise _store_unavailable(e)


@router.put(
    "/products/{product_id}",
    response_model=ProductResponse,
    responses={404: {"model": ErrorResponse}, **STORE_DOWN}
)
async def update_product(
    product_id: int,
    request: ProductRequest,
    store: DocumentStore = Depends(get_document_store)
):
    try:
        product = await UpdateProductUseCase(store)(Product(id=product_id, **request.model_dump()))
        return ProductResponse.from_domain(product)
    except ProductNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except StoreUnavailableError as e:
        raise _store_unavailable(e)


@router.delete("/products/{product_id}", status_code=status.HTTP_204_NO_CONTENT, responses=STORE_DOWN)
async def delete_product(product_id: int, store: DocumentStore = Depends(get_document_store)):
    """Удаление идемпотентно: несуществующий id тоже 204"""
    try:
        await DeleteProductUseCase(store)(product_id)
    except StoreUnavailableError as e:
        raise _store_unavailable(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# --- Orders ---

@router.get("/orders", response_model=List[OrderResponse], responses=STORE_DOWN)
async def list_orders(store: DocumentStore = Depends(get_document_store)):
    """Заказы, новые сверху"""
    try:
        orders = await ListOrdersUseCase(store)()
        return [OrderResponse.from_domain(o) for o in orders]
    except StoreUnavailableError as e:
        raise _store_unavailable(e)


@router.get(
    "/orders/{order_id}",
    response_model=OrderResponse,
    responses={404: {"model": ErrorResponse}, **STORE_DOWN}
)
async def get_order(order_id: str, store: DocumentStore = Depends(get_document_store)):
    try:
        order = await GetOrderUseCase(store)(order_id)
        return OrderResponse.from_domain(order)
    except OrderNotFoundError:
        raise HTTPException(status_code=404, detail=f"Order {order_id} not found")
    except StoreUnavailableError as e:
        raise _store_unavailable(e)


@router.post(
    "/orders",
    response_model=OrderResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}, **STORE_DOWN},
    status_code=status.HTTP_201_CREATED
)
async def submit_order(
    request: SubmitOrderRequest,
    store: DocumentStore = Depends(get_document_store),
    clock=Depends(get_clock)
):
    """Оформить заказ покупателя"""
    try:
        order = await SubmitOrderUseCase(store, clock)(request.to_dto())
        return OrderResponse.from_domain(order)
    except ProductNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except (InsufficientStockError, ValidationError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StoreUnavailableError as e:
        raise _store_unavailable(e)


@router.patch(
    "/orders/{order_id}/status",
    response_model=OrderResponse,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}, **STORE_DOWN}
)
async def update_order_status(
    order_id: str,
    request: UpdateOrderStatusRequest,
    store: DocumentStore = Depends(get_document_store)
):
    """Подтвердить или отклонить заказ"""
    try:
        order = await UpdateOrderStatusUseCase(store)(order_id, request.status)
        return OrderResponse.from_domain(order)
    except OrderNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidStatusTransitionError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except StoreUnavailableError as e:
        raise _store_unavailable(e)


@router.get("/orders/{order_id}/invoice.pdf", responses={404: {"model": ErrorResponse}, **STORE_DOWN})
async def order_invoice(order_id: str, store: DocumentStore = Depends(get_document_store)):
    try:
        order = await GetOrderUseCase(store)(order_id)
    except OrderNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except StoreUnavailableError as e:
        raise _store_unavailable(e)

    return Response(
        content=render_invoice_pdf(order),
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="invoice-{order.id}.pdf"'}
    )


# --- Uploads ---

@router.post(
    "/uploads/ktp",
    response_model=UploadResponse,
    responses={400: {"model": ErrorResponse}, **STORE_DOWN},
    status_code=status.HTTP_201_CREATED
)
async def upload_identity_document(
    file: UploadFile = File(...),
    storage: IdentityDocumentStorage = Depends(get_identity_storage)
):
    """Скан KTP: только JPEG/PNG до 2MB, в заказ пишется лишь имя файла"""
    # Читаем не больше лимита + 1 байт: длиннее файл отсечет проверка размера
    content = await file.read(MAX_IDENTITY_DOCUMENT_SIZE + 1)
    try:
        return UploadResponse(ktp_path=storage.save(content, file.content_type))
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StoreUnavailableError as e:
        raise _store_unavailable(e)


# --- Reports ---

@router.get("/reports/dashboard", response_model=DashboardStats, responses=STORE_DOWN)
async def dashboard(store: DocumentStore = Depends(get_document_store)):
    try:
        return await DashboardStatsUseCase(store)()
    except StoreUnavailableError as e:
        raise _store_unavailable(e)


async def _sales_report(store: DocumentStore, start: Optional[date], end: Optional[date]) -> SalesReport:
    start, end = _report_period(start, end)
    try:
        return await SalesReportUseCase(store)(start, end)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StoreUnavailableError as e:
        raise _store_unavailable(e)


@router.get("/reports/sales", response_model=SalesReport, responses={400: {"model": ErrorResponse}, **STORE_DOWN})
async def sales_report(
    start: Optional[date] = None,
    end: Optional[date] = None,
    store: DocumentStore = Depends(get_document_store)
):
    """Продажи за период, по умолчанию за последний месяц"""
    return await _sales_report(store, start, end)


@router.get("/reports/sales.pdf", responses={400: {"model": ErrorResponse}, **STORE_DOWN})
async def sales_report_pdf(
    start: Optional[date] = None,
    end: Optional[date] = None,
    store: DocumentStore = Depends(get_document_store)
):
    report = await _sales_report(store, start, end)
    return Response(
        content=render_sales_report_pdf(report.orders, report.start_date, report.end_date),
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="sales-report-{report.end_date}.pdf"'}
    )
