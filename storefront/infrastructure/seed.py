from storefront.domain.models import Document


# Демо-каталог магазина в формате хранилища
DEMO_DOCUMENT = {
    "products": [
        {"id": 1, "name": "Susu UHT Coklat 1L", "price": 18000, "stock": 150,
         "description": "Susu UHT rasa coklat, kaya akan kalsium dan vitamin.",
         "image": "https://picsum.photos/seed/milk1/400/300", "status": "Aktif"},
        {"id": 2, "name": "Susu UHT Full Cream 1L", "price": 17000, "stock": 200,
         "description": "Susu UHT murni tanpa tambahan rasa, cocok untuk keluarga.",
         "image": "https://picsum.photos/seed/milk2/400/300", "status": "Aktif"},
        {"id": 3, "name": "Susu UHT Stroberi 1L", "price": 18500, "stock": 120,
         "description": "Susu UHT dengan rasa stroberi segar yang disukai anak-anak.",
         "image": "https://picsum.photos/seed/milk3/400/300", "status": "Aktif"},
        {"id": 4, "name": "Susu UHT Low Fat 1L", "price": 19000, "stock": 80,
         "description": "Susu UHT rendah lemak, pilihan sehat untuk diet Anda.",
         "image": "https://picsum.photos/seed/milk4/400/300", "status": "Aktif"},
        {"id": 5, "name": "Susu UHT Vanilla 250ml", "price": 5000, "stock": 0,
         "description": "Susu UHT rasa vanilla dalam kemasan praktis.",
         "image": "https://picsum.photos/seed/milk5/400/300", "status": "Tidak Aktif"},
    ],
    "orders": [
        {"id": "INV-20251104-001", "customerName": "Budi Santoso", "phone": "081234567890",
         "address": "Jl. Merdeka No. 10, Jakarta", "productId": 2, "productName": "Susu UHT Full Cream 1L",
         "quantity": 2, "totalPrice": 34000, "status": "Dikonfirmasi", "orderDate": "2023-10-28",
         "ktpPath": "ktp_budi.jpg", "latitude": -6.1754, "longitude": 106.8272},
        {"id": "INV-20251104-002", "customerName": "Ani Yudhoyono", "phone": "082345678901",
         "address": "Jl. Sudirman No. 15, Bandung", "productId": 1, "productName": "Susu UHT Coklat 1L",
         "quantity": 3, "totalPrice": 54000, "status": "Menunggu Konfirmasi", "orderDate": "2023-10-29",
         "ktpPath": "ktp_ani.jpg"},
        {"id": "INV-20251104-003", "customerName": "Citra Lestari", "phone": "083456789012",
         "address": "Jl. Gajah Mada No. 20, Surabaya", "productId": 3, "productName": "Susu UHT Stroberi 1L",
         "quantity": 1, "totalPrice": 18500, "status": "Ditolak", "orderDate": "2023-10-30",
         "ktpPath": "ktp_citra.jpg"},
    ],
    "orderSequence": 3,
}


def demo_document() -> Document:
    return Document.model_validate(DEMO_DOCUMENT)
