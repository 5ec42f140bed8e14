import asyncio
import json
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Optional

import httpx
from pydantic import ValidationError as PydanticValidationError

from storefront.domain.models import Document
from storefront.domain.exceptions import StoreUnavailableError
from storefront.application.interfaces import DocumentStore

logger = logging.getLogger(__name__)


class LocalDocumentStore(DocumentStore):
    """Документ в одном JSON-файле на локальном диске, файловые операции идут в потоке"""

    def __init__(self, path):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> Document:
        if not self._path.exists():
            return Document()
        with open(self._path, "r", encoding="utf-8") as f:
            return Document.model_validate(json.load(f))

    def _write(self, document: Document) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        # Пишем во временный файл рядом и подменяем целиком
        fd, tmp_path = tempfile.mkstemp(dir=self._path.parent, prefix=".store-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(document.to_json(), f, ensure_ascii=False, indent=2)
            # mkstemp создает файл с правами 0600, права старого файла сохраняем
            if self._path.exists():
                shutil.copymode(self._path, tmp_path)
            os.replace(tmp_path, self._path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise

    async def load(self) -> Document:
        try:
            return await asyncio.to_thread(self._read)
        except (OSError, ValueError, PydanticValidationError) as e:
            logger.error(f"Ошибка чтения локального хранилища {self._path}: {e}")
            raise StoreUnavailableError(f"Store data cannot be read: {e}")

    async def save(self, document: Document) -> None:
        try:
            await asyncio.to_thread(self._write, document)
        except OSError as e:
            logger.error(f"Ошибка записи локального хранилища {self._path}: {e}")
            raise StoreUnavailableError(f"Store data cannot be saved: {e}")

    async def initialize(self, document: Document) -> bool:
        """Записывает документ, только если файла еще нет"""
        if self._path.exists():
            return False
        await self.save(document)
        logger.info(f"Локальное хранилище создано: {self._path}")
        return True


class HTTPDocumentStore(DocumentStore):
    """Удаленный JSON-бакет: GET отдает документ, POST заменяет его целиком"""

    def __init__(
        self,
        url: str,
        api_key: Optional[str] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self._url = url
        self._api_key = api_key
        self._timeout = timeout
        self._transport = transport

    def _headers(self, **extra) -> dict:
        headers = dict(extra)
        if self._api_key:
            headers["X-API-Key"] = self._api_key
        return headers

    async def load(self) -> Document:
        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.get(
                    self._url,
                    headers=self._headers(**{"Cache-Control": "no-cache", "Pragma": "no-cache"}),
                    timeout=self._timeout
                )
        except httpx.RequestError as e:
            logger.error(f"Удаленное хранилище: ошибка подключения: {e}")
            raise StoreUnavailableError(f"Store is unreachable: {str(e)}")

        if not response.is_success:
            logger.error(f"Удаленное хранилище: GET вернул {response.status_code}")
            raise StoreUnavailableError(f"Store returned status {response.status_code}")

        try:
            return Document.model_validate(response.json())
        except (ValueError, PydanticValidationError) as e:
            logger.error(f"Удаленное хранилище вернуло некорректный документ: {e}")
            raise StoreUnavailableError(f"Store returned an unreadable document: {e}")

    async def save(self, document: Document) -> None:
        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.post(
                    self._url,
                    json=document.to_json(),
                    headers=self._headers(**{"Content-Type": "application/json"}),
                    timeout=self._timeout
                )
        except httpx.RequestError as e:
            logger.error(f"Удаленное хранилище: ошибка подключения: {e}")
            raise StoreUnavailableError(f"Store is unreachable: {str(e)}")

        if not response.is_success:
            logger.error(f"Удаленное хранилище: POST вернул {response.status_code}")
            raise StoreUnavailableError(f"Store returned status {response.status_code}")


def build_document_store(settings) -> DocumentStore:
    backend = settings.STORE_BACKEND.strip().lower()
    if backend == "local":
        return LocalDocumentStore(settings.STORE_PATH)
    if backend == "remote":
        if not settings.STORE_URL:
            raise ValueError("STORE_URL must be set when STORE_BACKEND is 'remote'")
        return HTTPDocumentStore(
            settings.STORE_URL,
            api_key=settings.STORE_API_KEY or None,
            timeout=settings.STORE_TIMEOUT
        )
    raise ValueError(f"Unknown STORE_BACKEND: {settings.STORE_BACKEND}")
