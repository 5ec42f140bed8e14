from abc import ABC, abstractmethod
from datetime import datetime
from typing import Callable

from storefront.domain.models import Document

Clock = Callable[[], datetime]


class DocumentStore(ABC):
    """Читает и целиком заменяет документ каталога и заказов.

    При недоступном хранилище или неуспешном статусе реализации
    бросают StoreUnavailableError.
    """

    @abstractmethod
    async def load(self) -> Document:
        pass

    @abstractmethod
    async def save(self, document: Document) -> None:
        pass
