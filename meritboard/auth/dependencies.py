from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError

from meritboard.auth.security import decode_access_token
from meritboard.auth.session import AuthSession


oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login-oauth")


def session_from_token(token: str) -> AuthSession:
    """Verify an access token and build the session; raises JWTError/ValueError when unusable."""
    payload = decode_access_token(token)
    if payload.get("type") != "access" or not payload.get("sub"):
        raise ValueError("not an access token")
    return AuthSession.from_claims(payload)


async def get_current_session(token: str = Depends(oauth2_scheme)) -> AuthSession:
    """Resolve the caller's session from the bearer token's signed claims."""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        return session_from_token(token)
    except (JWTError, ValueError):
        raise credentials_exception
