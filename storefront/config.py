import os
import bcrypt
from dotenv import load_dotenv

load_dotenv()


def _as_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


class Settings:
    # Document store
    STORE_BACKEND: str = os.getenv("STORE_BACKEND", "local")
    STORE_PATH: str = os.getenv("STORE_PATH", "data/store.json")
    STORE_URL: str = os.getenv("STORE_URL", "")
    STORE_API_KEY: str = os.getenv("STORE_API_KEY", "")
    STORE_TIMEOUT: float = float(os.getenv("STORE_TIMEOUT", "10"))
    SEED_DEMO_DATA: bool = _as_bool(os.getenv("SEED_DEMO_DATA", "true"))

    # Uploads
    UPLOAD_DIR: str = os.getenv("UPLOAD_DIR", "data/uploads")

    # Admin login
    ADMIN_EMAIL: str = os.getenv("ADMIN_EMAIL", "admin@susuuht.com")
    ADMIN_PASSWORD: str = os.getenv("ADMIN_PASSWORD", "password")
    # Без явного хеша хешируется ADMIN_PASSWORD при старте
    ADMIN_PASSWORD_HASH: str = os.getenv("ADMIN_PASSWORD_HASH") or bcrypt.hashpw(
        ADMIN_PASSWORD.encode("utf-8"), bcrypt.gensalt()
    ).decode("utf-8")
    ADMIN_NAME: str = os.getenv("ADMIN_NAME", "Admin Susu")

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")


settings = Settings()
