"""Admin-only endpoints"""
from typing import List

from fastapi import APIRouter, Depends

from ..container import Container
from ..middleware.auth import get_container, require_admin
from ..models import User
from ..schemas.auth import UserResponse
from ..schemas.response import ERROR_RESPONSES

router = APIRouter(prefix="/admin", tags=["admin"], responses=ERROR_RESPONSES)


@router.get("/users", response_model=List[UserResponse])
async def list_users(
    admin: User = Depends(require_admin),
    container: Container = Depends(get_container),
):
    """Every registered user, without password material"""
    users = await container.auth.list_users()
    return [UserResponse.model_validate(user) for user in users]
