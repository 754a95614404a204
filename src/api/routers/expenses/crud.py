"""
Expenses CRUD - Create, Read, Update, Delete operations
"""
import math
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from ...database import get_db
from ...models import (
    ApiResponse,
    ExpenseCreate,
    ExpensePatch,
    ExpenseReplace,
    ExpenseResponse,
    PaginationInfo,
)
from ...services.expense_service import get_expense_service
from ...validators import parse_pagination

router = APIRouter()


@router.post(
    "",
    status_code=201,
    response_model=ApiResponse[ExpenseResponse],
    response_model_exclude_none=True
)
async def create_expense(
    payload: ExpenseCreate,
    db: AsyncSession = Depends(get_db)
):
    """Create a new expense for an existing user"""
    expense, owner = await get_expense_service(db).create_expense(payload)
    return ApiResponse(data=ExpenseResponse.from_record(expense, owner))


@router.get(
    "/user/{user_id}",
    response_model=ApiResponse[List[ExpenseResponse]],
    response_model_exclude_none=True
)
async def list_user_expenses(
    user_id: str,
    request: Request,
    page: Optional[str] = Query(default=None),
    limit: Optional[str] = Query(default=None),
    category: Optional[str] = Query(default=None),
    start_date: Optional[str] = Query(default=None, alias="startDate"),
    end_date: Optional[str] = Query(default=None, alias="endDate"),
    db: AsyncSession = Depends(get_db)
):
    """List a user's expenses with category/date filters and pagination"""
    settings = request.app.state.settings
    page_num, limit_num, offset = parse_pagination(
        page,
        limit,
        default_limit=settings.DEFAULT_PAGE_SIZE,
        max_limit=settings.MAX_PAGE_SIZE
    )

    expenses, total = await get_expense_service(db).list_user_expenses(
        user_id,
        category=category,
        start_date=start_date,
        end_date=end_date,
        limit=limit_num,
        offset=offset
    )

    return ApiResponse(
        data=[ExpenseResponse.from_record(e) for e in expenses],
        pagination=PaginationInfo(
            page=page_num,
            limit=limit_num,
            total=total,
            total_pages=math.ceil(total / limit_num)
        )
    )


@router.get(
    "/{expense_id}",
    response_model=ApiResponse[ExpenseResponse],
    response_model_exclude_none=True
)
async def get_expense(expense_id: str, db: AsyncSession = Depends(get_db)):
    """Get expense details"""
    expense = await get_expense_service(db).get_expense(expense_id)
    return ApiResponse(data=ExpenseResponse.from_record(expense))


@router.put(
    "/{expense_id}",
    response_model=ApiResponse[ExpenseResponse],
    response_model_exclude_none=True
)
async def replace_expense(
    expense_id: str,
    payload: ExpenseReplace,
    db: AsyncSession = Depends(get_db)
):
    """Replace an expense; title, amount, category and userId are required"""
    expense, owner = await get_expense_service(db).replace_expense(expense_id, payload)
    return ApiResponse(
        data=ExpenseResponse.from_record(expense, owner),
        message="Expense updated successfully"
    )


@router.patch(
    "/{expense_id}",
    response_model=ApiResponse[ExpenseResponse],
    response_model_exclude_none=True
)
async def patch_expense(
    expense_id: str,
    payload: ExpensePatch,
    db: AsyncSession = Depends(get_db)
):
    """Update some fields of an expense"""
    expense, owner = await get_expense_service(db).patch_expense(expense_id, payload)
    return ApiResponse(
        data=ExpenseResponse.from_record(expense, owner),
        message="Expense updated successfully"
    )


@router.delete(
    "/{expense_id}",
    response_model=ApiResponse[ExpenseResponse],
    response_model_exclude_none=True
)
async def delete_expense(expense_id: str, db: AsyncSession = Depends(get_db)):
    """Delete an expense"""
    expense = await get_expense_service(db).delete_expense(expense_id)
    return ApiResponse(
        data=ExpenseResponse.from_record(expense),
        message="Expense deleted successfully"
    )
