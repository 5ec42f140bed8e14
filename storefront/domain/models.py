from datetime import datetime
from enum import Enum
from typing import Optional, List
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


class ProductStatus(str, Enum):
    ACTIVE = "Aktif"
    INACTIVE = "Tidak Aktif"


class OrderStatus(str, Enum):
    WAITING = "Menunggu Konfirmasi"
    CONFIRMED = "Dikonfirmasi"
    REJECTED = "Ditolak"


class StoreModel(BaseModel):
    """База для всего, что хранится в документе: в JSON ключи camelCase"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ProductDraft(StoreModel):
    """Поля товара от администратора, id назначается при создании"""
    name: str = Field(min_length=1)
    price: float = Field(ge=0)
    stock: int = Field(ge=0)
    description: str = ""
    image: str = ""
    status: ProductStatus = ProductStatus.ACTIVE


class Product(ProductDraft):
    """Domain Entity — товар каталога"""
    id: int


class Order(StoreModel):
    """Domain Entity — заказ, id = номер инвойса"""
    id: str
    customer_name: str
    phone: str
    address: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    ktp_path: str
    product_id: int
    product_name: str
    quantity: int = Field(gt=0)
    total_price: float
    status: OrderStatus
    order_date: datetime

    @field_validator("order_date")
    @classmethod
    def _naive_local(cls, value: datetime) -> datetime:
        # старые записи хранят только дату, новые - время
        if value.tzinfo is not None:
            return value.astimezone().replace(tzinfo=None)
        return value

    def can_transition_to(self, target: OrderStatus) -> bool:
        """Бизнес-правило: подтвердить или отклонить можно только ожидающий заказ"""
        match self.status:
            case OrderStatus.WAITING:
                return target in (OrderStatus.CONFIRMED, OrderStatus.REJECTED)
            case OrderStatus.CONFIRMED | OrderStatus.REJECTED:
                return False


class Document(StoreModel):
    """Весь документ хранилища: каталог, заказы и счетчик инвойсов"""
    products: List[Product] = Field(default_factory=list)
    orders: List[Order] = Field(default_factory=list)
    order_sequence: int = Field(default=0, ge=0)

    @model_validator(mode="before")
    @classmethod
    def _default_sequence(cls, data):
        # документы, записанные до появления счетчика
        if isinstance(data, dict) and "orderSequence" not in data and "order_sequence" not in data:
            data = {**data, "orderSequence": len(data.get("orders") or [])}
        return data

    def find_product(self, product_id: int) -> Optional[Product]:
        return next((p for p in self.products if p.id == product_id), None)

    def find_order(self, order_id: str) -> Optional[Order]:
        return next((o for o in self.orders if o.id == order_id), None)

    def to_json(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class User(StoreModel):
    id: int
    name: str
    email: str
