# INTERIORFLOW/backend/interiorflow/auth.py

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from passlib.context import CryptContext

from interiorflow import config, constants
from interiorflow.schemas.schemas import Identity
import logging

logger = logging.getLogger(__name__)

# auto_error=False : l'absence d'en-tête n'est pas une erreur, on essaie le cookie ensuite
security = HTTPBearer(auto_error=False)
password_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(p: str) -> str:
    return password_context.hash(p)


def verify_password(p: str, hashed: str) -> bool:
    return password_context.verify(p, hashed)


def create_access_token(identity: Identity, expires_delta: Optional[timedelta] = None) -> str:
    """Signe un token contenant {userId, email, role} (7 jours par défaut)"""
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(days=config.ACCESS_TOKEN_EXPIRE_DAYS))
    to_encode = {
        "userId": identity.user_id,
        "email": identity.email,
        "role": identity.role,
        "exp": expire
    }
    return jwt.encode(to_encode, config.SECRET_KEY, algorithm=config.ALGORITHM)


def decode_token(token: str) -> Optional[Identity]:
    """Retourne l'identité embarquée, ou None si le token est invalide/expiré"""
    try:
        payload = jwt.decode(token, config.SECRET_KEY, algorithms=[config.ALGORITHM])
    except jwt.PyJWTError:
        return None
    if not payload.get("userId") or not payload.get("email"):
        return None
    return Identity(
        user_id=payload["userId"],
        email=payload["email"],
        role=payload.get("role") or constants.ROLE_USER
    )


def resolve_identity(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> Optional[Identity]:
    """En-tête Authorization d'abord, puis le cookie du token"""
    if credentials is not None:
        identity = decode_token(credentials.credentials)
        if identity is not None:
            return identity

    token = request.cookies.get(config.TOKEN_COOKIE_NAME)
    if token:
        return decode_token(token)
    return None


def get_current_identity(identity: Optional[Identity] = Depends(resolve_identity)) -> Identity:
    if identity is None:
        raise HTTPException(status_code=401, detail="Unauthorized - Please login")
    return identity


def require_admin(identity: Identity = Depends(get_current_identity)) -> Identity:
    if identity.role != constants.ROLE_ADMIN:
        raise HTTPException(status_code=403, detail="Access denied. Admin role required.")
    return identity


def set_token_cookie(response, token: str):
    response.set_cookie(
        key=config.TOKEN_COOKIE_NAME,
        value=token,
        httponly=True,
        secure=config.is_production(),
        samesite="lax",
        max_age=config.ACCESS_TOKEN_EXPIRE_DAYS * 24 * 60 * 60,
        path="/"
    )
    return response


def clear_token_cookie(response):
    response.delete_cookie(key=config.TOKEN_COOKIE_NAME, path="/")
    return response
