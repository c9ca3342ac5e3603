# src/routes/users.py
from fastapi import APIRouter, Depends
from typing import Any
from core.dependencies import get_current_active_user
from schemas.user_schemas import UserProfile

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserProfile, summary="Current user profile")
async def read_current_user(
    current_user: UserProfile = Depends(get_current_active_user),
) -> Any:
    return current_user
