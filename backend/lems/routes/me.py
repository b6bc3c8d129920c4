from fastapi import APIRouter, Depends

from lems.auth import get_current_user
from lems.models.user import User
from lems.schemas import UserRead

router = APIRouter()


@router.get("/me", response_model=UserRead)
def get_me(user: User = Depends(get_current_user)):
    """Return the user behind the current session token"""
    return user
