# boutique_manager/core/auth/service.py
import logging
from datetime import datetime, timedelta
from typing import Optional

from jose import jwt, JWTError
from passlib.context import CryptContext

from boutique_manager.config.settings import settings

logger = logging.getLogger(__name__)

# Password context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class AuthService:
    """Service d'authentification"""

    @staticmethod
    def verify_password(plain_password: str, hashed_password: str) -> bool:
        # bcrypt ne considère que les 72 premiers octets
        encoded_password = plain_password.encode("utf-8")[:72].decode("utf-8", errors="ignore")
        try:
            return pwd_context.verify(encoded_password, hashed_password)
        except ValueError as e:
            logger.warning(f"Hash de mot de passe illisible: {e}")
            return False

    @staticmethod
    def get_password_hash(password: str) -> str:
        encoded_password = password.encode("utf-8")[:72].decode("utf-8", errors="ignore")
        return pwd_context.hash(encoded_password)

    @staticmethod
    def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
        """Créer un token d'accès"""
        to_encode = data.copy()

        if expires_delta:
            expire = datetime.utcnow() + expires_delta
        else:
            expire = datetime.utcnow() + timedelta(minutes=settings.access_token_expire_minutes)

        to_encode.update({"exp": expire})

        if "user_id" not in to_encode or "role" not in to_encode:
            raise ValueError("user_id et role sont requis dans le token")

        return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)

    @staticmethod
    def verify_token(token: str) -> Optional[dict]:
        """Vérifier et décoder un token"""
        try:
            return jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
        except JWTError:
            return None

    @staticmethod
    def token_for_user(user) -> str:
        return AuthService.create_access_token(
            data={
                "user_id": user.id,
                "email": user.email,
                "role": user.role,
                "boutique_id": user.boutique_id,
            }
        )
