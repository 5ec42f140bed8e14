import logging
import uuid
from pathlib import Path

from storefront.domain.exceptions import ValidationError, StoreUnavailableError

logger = logging.getLogger(__name__)

MAX_IDENTITY_DOCUMENT_SIZE = 2 * 1024 * 1024
ALLOWED_CONTENT_TYPES = {
    "image/jpeg": "jpg",
    "image/png": "png",
}


def validate_identity_document(content_type: str, size: int) -> str:
    """Возвращает расширение для допустимого скана KTP, иначе ValidationError"""
    extension = ALLOWED_CONTENT_TYPES.get((content_type or "").lower())
    if not extension:
        raise ValidationError("Identity document must be a JPEG or PNG image")
    if size == 0:
        raise ValidationError("Identity document file is empty")
    if size > MAX_IDENTITY_DOCUMENT_SIZE:
        raise ValidationError("Identity document must not exceed 2MB")
    return extension


class IdentityDocumentStorage:
    def __init__(self, upload_dir):
        self._upload_dir = Path(upload_dir)

    def save(self, content: bytes, content_type: str) -> str:
        extension = validate_identity_document(content_type, len(content))
        filename = f"ktp_{uuid.uuid4().hex}.{extension}"
        try:
            self._upload_dir.mkdir(parents=True, exist_ok=True)
            (self._upload_dir / filename).write_bytes(content)
        except OSError as e:
            logger.error(f"Ошибка записи скана KTP: {e}")
            raise StoreUnavailableError(f"Identity document cannot be stored: {e}")

        logger.info(f"Скан KTP сохранен: {filename}")
        return filename
