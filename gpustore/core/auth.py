# gpustore/core/auth.py
import uuid
from typing import Any, Callable

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError
from sqlmodel import Session, select

from gpustore.core.config import get_settings
from gpustore.database import get_session
from gpustore.models.user import Role, User

settings = get_settings()

# HTTP Bearer scheme:
# - auto_error=False => missing Authorization header will NOT raise immediately
#   so we can support anonymous catalog browsing.
bearer_scheme = HTTPBearer(auto_error=False)

HOME_URL = "/"


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Decode and verify an access token (JWT) issued by the identity provider.

    Verification:
      - signature (JWT_ALG using JWT_SECRET)
      - expiration time (exp)
      - audience is NOT verified

    Raises:
        HTTPException(401): if token is invalid/expired.
    """
    try:
        return jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALG],
            options={"verify_aud": False},
        )
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )


def _default_name_from_email(email: str) -> str:
    """
    Derive a default display name from email.
    """
    if "@" in email:
        return email.split("@", 1)[0][:50]
    return email[:50]


def _role_for_email(email: str) -> Role:
    admins = {e.strip().lower() for e in settings.ADMIN_EMAILS}
    return Role.ADMIN if email.strip().lower() in admins else Role.CUSTOMER


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    session: Session = Depends(get_session),
) -> User | None:
    """
    Resolve the current user from a bearer JWT.

    Flow:
      1. If no Authorization header => anonymous => return None.
      2. Decode JWT => extract 'sub' (identity user id) and 'email'.
      3. Convert 'sub' to UUID to match User.id type.
      4. Find the user profile.
      5. If missing, auto-provision a profile (admin if listed in ADMIN_EMAILS).

    Raises:
        HTTPException(401): if token is malformed or missing required claims.
    """
    if credentials is None:
        return None

    payload = decode_access_token(credentials.credentials)
    sub = payload.get("sub")
    email = payload.get("email")

    if not sub or not email:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token missing sub/email",
        )

    try:
        sub_uuid = uuid.UUID(sub)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid sub in token",
        )

    user = session.exec(select(User).where(User.id == sub_uuid)).first()

    if user is None:
        user = User(
            id=sub_uuid,
            email=email,
            name=_default_name_from_email(email),
            role=_role_for_email(email).value,
        )
        session.add(user)
        session.commit()
        session.refresh(user)

    return user


def require_auth(user: User | None = Depends(get_current_user)) -> User:
    """
    Enforce authentication.

    Raises:
        HTTPException(401): if user is None.
    """
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )
    return user


def require_admin(user: User = Depends(require_auth)) -> User:
    """
    Enforce admin role.

    Raises:
        HTTPException(403): if role is not admin.
    """
    if not user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return user


def require_customer(user: User = Depends(require_auth)) -> User:
    """
    Enforce that only customers can access a route.

    Use this for state-changing customer actions:
      - cart mutations
      - comments
    Admins will be rejected with 403.
    """
    if user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Customer access required",
        )
    return user


def redirect_admin(target: str = HOME_URL) -> Callable[[User], User]:
    """
    Build a dependency for customer-only *views* (cart, checkout,
    own order history).

    Administrators have no cart, so instead of an error they are sent
    elsewhere with 303 See Other.
    """

    def dependency(user: User = Depends(require_auth)) -> User:
        if user.is_admin:
            raise HTTPException(
                status_code=status.HTTP_303_SEE_OTHER,
                detail="Administrators do not have a cart",
                headers={"Location": target},
            )
        return user

    return dependency
