import json
from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from storefront.main import app
from storefront.presentation import api
from storefront.infrastructure.document_store import LocalDocumentStore
from storefront.infrastructure.uploads import IdentityDocumentStorage

FIXED_NOW = datetime(2025, 11, 4, 10, 30, 0)


def fixed_clock():
    return FIXED_NOW


def make_document():
    return {
        "products": [
            {"id": 1, "name": "Susu UHT Coklat 1L", "price": 18000, "stock": 150,
             "description": "Coklat", "image": "https://example.com/1.jpg", "status": "Aktif"},
            {"id": 2, "name": "Susu UHT Full Cream 1L", "price": 17000, "stock": 200,
             "description": "Full cream", "image": "https://example.com/2.jpg", "status": "Aktif"},
            {"id": 5, "name": "Susu UHT Vanilla 250ml", "price": 5000, "stock": 0,
             "description": "Vanilla", "image": "data:image/png;base64,AAAA", "status": "Tidak Aktif"},
        ],
        "orders": [
            {"id": "INV-20231028-001", "customerName": "Budi Santoso", "phone": "081234567890",
             "address": "Jl. Merdeka No. 10, Jakarta", "productId": 2, "productName": "Susu UHT Full Cream 1L",
             "quantity": 2, "totalPrice": 34000, "status": "Dikonfirmasi", "orderDate": "2023-10-28",
             "ktpPath": "ktp_budi.jpg", "latitude": -6.1754, "longitude": 106.8272},
            {"id": "INV-20231029-002", "customerName": "Ani Yudhoyono", "phone": "082345678901",
             "address": "Jl. Sudirman No. 15, Bandung", "productId": 1, "productName": "Susu UHT Coklat 1L",
             "quantity": 3, "totalPrice": 54000, "status": "Menunggu Konfirmasi", "orderDate": "2023-10-29",
             "ktpPath": "ktp_ani.jpg"},
        ],
        "orderSequence": 2,
    }


@pytest.fixture
def store_path(tmp_path):
    path = tmp_path / "store.json"
    path.write_text(json.dumps(make_document()), encoding="utf-8")
    return path


@pytest.fixture
def store(store_path):
    return LocalDocumentStore(store_path)


@pytest.fixture
def empty_store(tmp_path):
    return LocalDocumentStore(tmp_path / "empty.json")


@pytest.fixture
def client(store, tmp_path):
    app.dependency_overrides[api.get_document_store] = lambda: store
    app.dependency_overrides[api.get_clock] = lambda: fixed_clock
    app.dependency_overrides[api.get_identity_storage] = lambda: IdentityDocumentStorage(tmp_path / "uploads")
    yield TestClient(app)
    app.dependency_overrides.clear()
