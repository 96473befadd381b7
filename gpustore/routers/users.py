# gpustore/routers/users.py
from fastapi import APIRouter, Depends

from gpustore.core.auth import require_auth
from gpustore.models.user import User
from gpustore.schemas.user import UserRead

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("/me", response_model=UserRead)
def read_me(current_user: User = Depends(require_auth)):
    """
    Return the authenticated user's profile.

    The profile is created on the first authenticated request.
    """
    return current_user
