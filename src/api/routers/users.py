"""
Users Router - accounts, budgets and verified email changes
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ..database import get_db
from ..models import (
    ApiResponse,
    ChangeEmailRequest,
    ExpenseResponse,
    MonthlySummary,
    UserCreate,
    UserPatch,
    UserReplace,
    UserResponse,
)
from ..services.user_service import get_user_service
from .expenses import list_user_expenses
from .summary import get_user_summary

router = APIRouter()


@router.post(
    "",
    status_code=201,
    response_model=ApiResponse[UserResponse],
    response_model_exclude_none=True
)
async def create_user(payload: UserCreate, db: AsyncSession = Depends(get_db)):
    """Create a new user"""
    user = await get_user_service(db).create_user(payload)
    return ApiResponse(data=UserResponse.from_record(user))


@router.get(
    "",
    response_model=ApiResponse[List[UserResponse]],
    response_model_exclude_none=True
)
async def list_users(
    email: Optional[str] = Query(default=None),
    db: AsyncSession = Depends(get_db)
):
    """List users newest first, optionally filtered by email"""
    users = await get_user_service(db).list_users(email=email)
    return ApiResponse(
        data=[UserResponse.from_record(u) for u in users],
        count=len(users)
    )


@router.get(
    "/{user_id}",
    response_model=ApiResponse[UserResponse],
    response_model_exclude_none=True
)
async def get_user(user_id: str, db: AsyncSession = Depends(get_db)):
    """Get user details"""
    user = await get_user_service(db).get_user(user_id)
    return ApiResponse(data=UserResponse.from_record(user))


@router.put(
    "/{user_id}",
    response_model=ApiResponse[UserResponse],
    response_model_exclude_none=True
)
async def replace_user(
    user_id: str,
    payload: UserReplace,
    db: AsyncSession = Depends(get_db)
):
    """Replace name and monthly budget"""
    user = await get_user_service(db).replace_user(user_id, payload)
    return ApiResponse(data=UserResponse.from_record(user), message="User updated successfully")


@router.patch(
    "/{user_id}",
    response_model=ApiResponse[UserResponse],
    response_model_exclude_none=True
)
async def patch_user(
    user_id: str,
    payload: UserPatch,
    db: AsyncSession = Depends(get_db)
):
    """Update name and/or monthly budget"""
    user = await get_user_service(db).patch_user(user_id, payload)
    return ApiResponse(data=UserResponse.from_record(user), message="User updated successfully")


@router.post(
    "/{user_id}/change-email",
    response_model=ApiResponse[UserResponse],
    response_model_exclude_none=True
)
async def change_email(
    user_id: str,
    payload: ChangeEmailRequest,
    db: AsyncSession = Depends(get_db)
):
    """Change email after verifying the current one"""
    user = await get_user_service(db).change_email(user_id, payload)
    return ApiResponse(data=UserResponse.from_record(user), message="Email updated successfully")


router.add_api_route(
    "/{user_id}/expenses",
    list_user_expenses,
    methods=["GET"],
    response_model=ApiResponse[List[ExpenseResponse]],
    response_model_exclude_none=True
)

router.add_api_route(
    "/{user_id}/summary",
    get_user_summary,
    methods=["GET"],
    response_model=ApiResponse[MonthlySummary],
    response_model_exclude_none=True
)
