from datetime import datetime
from typing import Optional
from pydantic import Field, model_validator

from storefront.domain.models import StoreModel, ProductDraft, OrderStatus, ProductStatus
from storefront.application.submit_order import SubmitOrderDTO, Geolocation


class LoginRequest(StoreModel):
    email: str
    password: str


class ProductRequest(ProductDraft):
    pass


class ProductResponse(StoreModel):
    id: int
    name: str
    price: float
    stock: int
    description: str
    image: str
    status: ProductStatus

    @classmethod
    def from_domain(cls, product):
        return cls(**product.model_dump())


class SubmitOrderRequest(StoreModel):
    customer_name: str = Field(min_length=1)
    phone: str = Field(min_length=1)
    address: str = Field(min_length=1)
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)
    ktp_path: str = Field(min_length=1)
    product_id: int
    quantity: int = Field(gt=0)

    @model_validator(mode="after")
    def _both_coordinates(self):
        if (self.latitude is None) != (self.longitude is None):
            raise ValueError("latitude and longitude must be given together")
        return self

    def to_dto(self) -> SubmitOrderDTO:
        geolocation = None
        if self.latitude is not None:
            geolocation = Geolocation(latitude=self.latitude, longitude=self.longitude)
        return SubmitOrderDTO(
            customer_name=self.customer_name,
            phone=self.phone,
            address=self.address,
            geolocation=geolocation,
            ktp_path=self.ktp_path,
            product_id=self.product_id,
            quantity=self.quantity
        )


class UpdateOrderStatusRequest(StoreModel):
    status: OrderStatus


class OrderResponse(StoreModel):
    id: str
    customer_name: str
    phone: str
    address: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    ktp_path: str
    product_id: int
    product_name: str
    quantity: int
    total_price: float
    status: OrderStatus
    order_date: datetime

    @classmethod
    def from_domain(cls, order):
        return cls(**order.model_dump())


class UploadResponse(StoreModel):
    ktp_path: str


class ErrorResponse(StoreModel):
    detail: str
