# streamhub/core/deps.py
"""
Dependencias compartidas por todos los routers.

`get_current_user_id` es la única puerta de autenticación: si el header
`Authorization: Bearer <token>` falta o no verifica, corta con 401 y el
handler nunca corre.
"""
from fastapi import Depends, Header, HTTPException, Request, status
from jose import JWTError

from streamhub.core.config import Settings
from streamhub.core.security import decode_access_token

NO_TOKEN = "No token provided"
INVALID_TOKEN = "Invalid token"


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def _extract_bearer(authorization: str | None) -> str:
    if not authorization or not authorization.lower().startswith("bearer "):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=NO_TOKEN)
    token = authorization.split(" ", 1)[1].strip()
    if not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=NO_TOKEN)
    return token


async def get_current_user_id(
    authorization: str | None = Header(None),
    settings: Settings = Depends(get_settings),
) -> int:
    token = _extract_bearer(authorization)
    try:
        return decode_access_token(token, settings)
    except JWTError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=INVALID_TOKEN)
