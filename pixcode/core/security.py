import base64
from typing import Any, Dict

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from pixcode.core.config import settings
from pixcode.schemas.me import MeResponse

security = HTTPBearer()


def _credentials_error() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )


def _decode_jwt(token: str) -> Dict[str, Any]:
    secret = settings.SUPABASE_JWT_SECRET
    if not secret:
        raise _credentials_error()

    try:
        return jwt.decode(
            token,
            secret,
            algorithms=["HS256"],
            audience="authenticated",
            options={"verify_aud": False},
        )
    except JWTError:
        pass

    # Supabase dashboards sometimes hand out the secret base64 encoded.
    try:
        decoded_secret = base64.b64decode(secret)
        return jwt.decode(
            token,
            decoded_secret,
            algorithms=["HS256"],
            audience="authenticated",
            options={"verify_aud": False},
        )
    except Exception:
        raise _credentials_error()


def _first_value(data: Dict[str, Any], keys: list[str]) -> Any:
    for key in keys:
        value = data.get(key)
        if value is not None:
            return value
    return None


def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> MeResponse:
    payload = _decode_jwt(credentials.credentials)
    app_metadata = payload.get("app_metadata") or {}

    return MeResponse(
        user_id=str(payload.get("sub")),
        email=_first_value(payload, ["email"]),
        role=_first_value(app_metadata, ["role"]) or _first_value(payload, ["role"]),
    )
