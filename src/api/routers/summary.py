"""
Summary Router - current-month spending against the budget
"""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..database import get_db
from ..models import ApiResponse, MonthlySummary
from ..services.summary_service import get_summary_service

router = APIRouter()


@router.get(
    "/{user_id}",
    response_model=ApiResponse[MonthlySummary],
    response_model_exclude_none=True
)
async def get_user_summary(user_id: str, db: AsyncSession = Depends(get_db)):
    """Monthly totals, remaining budget and per-category breakdown"""
    summary = await get_summary_service(db).monthly_summary(user_id)
    return ApiResponse(data=summary)
