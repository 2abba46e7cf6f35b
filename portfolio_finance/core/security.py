"""JWT helpers guarding the admin routes.

Tokens are issued by the site's login flow; this module only verifies them.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from portfolio_finance.core.config import Settings, get_settings
from portfolio_finance.schemas import TokenData

security = HTTPBearer(auto_error=False)

TOKEN_COOKIE = "jwt"


def create_access_token(
    subject: str,
    role: str,
    settings: Settings,
    *,
    username: Optional[str] = None,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """Sign a token; used by the bootstrap script and tests."""
    payload = {
        "sub": subject,
        "role": role,
        "username": username,
        "exp": datetime.now(timezone.utc) + (expires_delta or timedelta(days=1)),
    }
    return jwt.encode(payload, settings.secret_key, algorithm=settings.algorithm)


def decode_access_token(token: str, settings: Settings) -> TokenData:
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Could not validate credentials") from exc

    subject = payload.get("sub")
    role = payload.get("role")
    if not subject or not role:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Could not validate credentials")
    return TokenData(subject=subject, role=role, username=payload.get("username"))


async def require_admin(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    settings: Settings = Depends(get_settings),
) -> TokenData:
    token = credentials.credentials if credentials is not None else request.cookies.get(TOKEN_COOKIE)
    if not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    token_data = decode_access_token(token, settings)
    if token_data.role != settings.security.admin_role:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")
    return token_data
