from collections.abc import Mapping
from datetime import datetime, timedelta, timezone
from fastapi import Depends, Request
from jose import JWTError, jwt
from passlib.context import CryptContext
from tubely.config import Settings, get_settings
from tubely.errors import APIError, ErrorKind

TOKEN_ISSUER = "tubely-access"

# Use Argon2 for password hashing
pwd_context = CryptContext(
    schemes=["argon2"],
    deprecated="auto",
)

def hash_password(password: str) -> str:
    return pwd_context.hash(password)

def verify_password(plain: str, hashed: str | None) -> bool:
    if not hashed:
        return False
    return pwd_context.verify(plain, hashed)

def create_access_token(user_id: str, settings: Settings) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "iss": TOKEN_ISSUER,
        "sub": user_id,
        "iat": now,
        "exp": now + timedelta(minutes=settings.access_token_expire_minutes),
    }
    return jwt.encode(payload, settings.secret_key, algorithm=settings.algorithm)

def get_bearer_token(headers: Mapping[str, str]) -> str:
    """Token from 'Authorization: Bearer <token>'. Raises unauthorized if absent or malformed."""
    value = headers.get("authorization") or headers.get("Authorization")
    if not value:
        raise APIError(ErrorKind.UNAUTHORIZED, "Couldn't find JWT")
    parts = value.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise APIError(ErrorKind.UNAUTHORIZED, "Malformed authorization header")
    return parts[1]

def validate_jwt(token: str, secret: str, algorithm: str = "HS256") -> str:
    """Return the user id the token was issued to."""
    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[algorithm],
            issuer=TOKEN_ISSUER,
        )
    except JWTError:
        raise APIError(ErrorKind.UNAUTHORIZED, "Couldn't validate JWT")
    user_id = payload.get("sub")
    if not user_id:
        raise APIError(ErrorKind.UNAUTHORIZED, "Couldn't validate JWT")
    return user_id

def get_current_user_id(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> str:
    token = get_bearer_token(request.headers)
    return validate_jwt(token, settings.secret_key, settings.algorithm)
