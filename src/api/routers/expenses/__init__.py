"""
Expenses Router Package

- crud.py: create, read, update, delete and the per-user listing
"""

from fastapi import APIRouter

from .crud import router as crud_router, list_user_expenses

router = APIRouter(tags=["Expenses"])

router.include_router(crud_router, prefix="/api/expenses")

__all__ = ["router", "list_user_expenses"]
