from datetime import datetime, timedelta, timezone
from typing import Optional
from fastapi import Depends, HTTPException
from fastapi.security import OAuth2PasswordBearer
from jose import jwt, JWTError

from .config import get_settings

ALGO = "HS256"
# auto_error=False: la ausencia de token no es un error por sí misma
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login", auto_error=False)


def create_access_token(user_id: str, expires_hours: Optional[int] = None) -> str:
    settings = get_settings()
    expire = datetime.now(timezone.utc) + timedelta(hours=expires_hours or settings.jwt_expires_hours)
    payload = {"sub": user_id, "exp": expire}
    return jwt.encode(payload, settings.jwt_secret, algorithm=ALGO)


def decode_user_id(token: str) -> str:
    settings = get_settings()
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[ALGO])
    except JWTError:
        raise HTTPException(status_code=401, detail="Token inválido")
    sub = payload.get("sub")
    if not sub:
        raise HTTPException(status_code=401, detail="Token inválido")
    return str(sub)


async def get_acting_user_id(token: Optional[str] = Depends(oauth2_scheme)) -> str:
    """
    Identificador del usuario que actúa en la petición.

    Sin token se devuelve "" (comportamiento histórico) salvo que REQUIRE_AUTH
    esté activo, en cuyo caso se responde 401.
    """
    if not token:
        if get_settings().require_auth:
            raise HTTPException(status_code=401, detail="No autenticado")
        return ""
    return decode_user_id(token)
