# storefront/main.py
import logging
import sys
from contextlib import asynccontextmanager
from fastapi import FastAPI

from storefront.config import settings
from storefront.presentation.api import router
from storefront.infrastructure.document_store import LocalDocumentStore, build_document_store
from storefront.infrastructure.seed import demo_document

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout)
    ]
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Управление жизненным циклом приложения"""
    store = build_document_store(settings)
    logger.info(f"Хранилище документа: {type(store).__name__}")

    # Демо-каталог только для локального файла
    if isinstance(store, LocalDocumentStore) and settings.SEED_DEMO_DATA:
        if await store.initialize(demo_document()):
            logger.info(f"Демо-данные записаны в {store.path}")

    yield

    logger.info("Приложение останавливается...")

app = FastAPI(
    title="Susu UHT Storefront",
    description="Витрина и админка магазина молочной продукции",
    version="1.0.0",
    lifespan=lifespan
)

app.include_router(router, prefix="/api")


@app.get("/")
async def root():
    return {"message": "Susu UHT Storefront работает"}


@app.get("/health")
async def health():
    return {"status": "healthy", "store": settings.STORE_BACKEND}
