import logging

import bcrypt

from storefront.domain.models import User
from storefront.domain.exceptions import AuthenticationError


logger = logging.getLogger(__name__)


class LoginUseCase:
    """Вход единственного администратора: email из настроек, пароль по bcrypt-хешу"""

    def __init__(self, admin_email: str, admin_password_hash: str, admin_name: str):
        self._email = admin_email
        self._password_hash = admin_password_hash
        self._name = admin_name

    def _check_password(self, password: str) -> bool:
        try:
            return bcrypt.checkpw(password.encode("utf-8"), self._password_hash.encode("utf-8"))
        except ValueError as e:
            logger.error(f"Некорректный хеш пароля администратора: {e}")
            return False

    def __call__(self, email: str, password: str) -> User:
        email_ok = email.strip().lower() == self._email.lower()
        if not (self._check_password(password) and email_ok):
            logger.warning(f"Неудачная попытка входа: {email}")
            raise AuthenticationError("Wrong email or password")

        logger.info(f"Администратор {self._email} вошел")
        return User(id=1, name=self._name, email=self._email)
