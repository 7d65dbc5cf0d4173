# streamhub/core/security.py
from datetime import datetime, timedelta, timezone

from jose import jwt, JWTError
from passlib.context import CryptContext

from streamhub.core.config import Settings

ALGORITHM = "HS256"

# argon2 para todos los hashes nuevos
pwd_context = CryptContext(
    schemes=["argon2"],
    default="argon2",
    deprecated="auto",
)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    # solo verificación en un sentido, nunca se "des-hashea"
    if not hashed:
        return False
    return pwd_context.verify(password, hashed)


def create_access_token(
    sub: str,
    settings: Settings,
    expires_minutes: int | None = None,
) -> str:
    expire = datetime.now(timezone.utc) + timedelta(
        minutes=expires_minutes or settings.ACCESS_TOKEN_EXPIRE_MIN
    )
    payload = {"sub": sub, "exp": expire}
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=ALGORITHM)


def decode_access_token(token: str, settings: Settings) -> int:
    """
    Verifica firma y expiración y devuelve el id de la cuenta (claim `sub`).
    Lanza JWTError si algo no cuadra.
    """
    payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[ALGORITHM])
    sub = payload.get("sub")
    if not sub:
        raise JWTError("missing sub")
    try:
        return int(sub)
    except (TypeError, ValueError):
        raise JWTError("malformed sub")
