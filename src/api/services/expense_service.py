"""
Expense Service - Business logic for expense operations.

Extracts business logic from the expenses router. The owner-existence check
runs as an explicit step before each write that sets ``user_id``; it is not
atomic with the write.
"""
from typing import List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from ..exceptions import BadRequestError, NotFoundError, ValidationError
from ..formatters import end_of_day
from ..models.expense import (
    ExpenseCreate,
    ExpensePatch,
    ExpenseReplace,
    EXPENSE_UPDATE_FIELDS,
)
from ..tables import Expense, User, utcnow
from ..validators import (
    parse_datetime,
    parse_object_id,
    validate_category_filter,
    validate_expense_fields,
)

logger = structlog.get_logger()


class ExpenseService:
    """
    Service for expense business operations.

    Separates business logic from HTTP layer.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def ensure_user_exists(self, user_id: str) -> User:
        """
        Resolve the owner referenced by an expense write.

        Raises:
            ValidationError: No user with that id (a 400, not a 404)
        """
        user = await self.db.get(User, user_id)
        if user is None:
            raise ValidationError("Expense validation failed: userId: User does not exist")
        return user

    async def get_expense(self, expense_id: str) -> Expense:
        """Get expense by ID."""
        expense_id = parse_object_id(expense_id, "Invalid expense ID")
        expense = await self.db.get(Expense, expense_id)
        if expense is None:
            raise NotFoundError("Expense not found")
        return expense

    async def create_expense(self, payload: ExpenseCreate) -> Tuple[Expense, User]:
        """
        Create an expense for an existing user.

        Returns:
            (expense, owner)
        """
        if (
            not payload.title
            or payload.amount is None
            or not payload.category
            or not payload.user_id
        ):
            raise BadRequestError("Title, amount, category, and userId are required")

        fields = {
            "title": payload.title,
            "amount": payload.amount,
            "category": payload.category,
            "user_id": payload.user_id,
        }
        if payload.date:
            fields["date"] = payload.date
        fields = validate_expense_fields(fields)

        owner = await self.ensure_user_exists(fields["user_id"])

        now = utcnow()
        expense = Expense(
            title=fields["title"],
            amount=fields["amount"],
            category=fields["category"],
            date=fields.get("date") or now,
            user_id=owner.id,
            created_at=now,
            updated_at=now,
        )
        self.db.add(expense)
        await self.db.commit()
        await self.db.refresh(expense)

        logger.info("Expense created", expense_id=expense.id, user_id=owner.id, amount=expense.amount)
        return expense, owner

    async def list_user_expenses(
        self,
        user_id: str,
        category: Optional[str] = None,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        limit: int = 10,
        offset: int = 0
    ) -> Tuple[List[Expense], int]:
        """
        List a user's expenses with filters, newest date first.

        Returns tuple of (expenses, total_count).
        """
        user_id = parse_object_id(user_id, "Invalid user ID")
        if await self.db.get(User, user_id) is None:
            raise NotFoundError("User not found")

        conditions = [Expense.user_id == user_id]

        if category:
            conditions.append(Expense.category == validate_category_filter(category))

        if start_date:
            conditions.append(Expense.date >= parse_datetime(start_date, "startDate"))

        if end_date:
            conditions.append(Expense.date <= end_of_day(parse_datetime(end_date, "endDate")))

        total = await self.db.scalar(
            select(func.count(Expense.id)).where(*conditions)
        )
        result = await self.db.execute(
            select(Expense)
            .where(*conditions)
            .order_by(Expense.date.desc(), Expense.created_at.desc())
            .offset(offset)
            .limit(limit)
        )
        return list(result.scalars().all()), total or 0

    async def replace_expense(self, expense_id: str, payload: ExpenseReplace) -> Tuple[Expense, User]:
        """Replace title, amount, category and owner; date is optional"""
        expense_id = parse_object_id(expense_id, "Invalid expense ID")

        if (
            not payload.title
            or payload.amount is None
            or not payload.category
            or not payload.user_id
        ):
            raise BadRequestError("Title, amount, category, and userId are required")

        fields = {
            "title": payload.title,
            "amount": payload.amount,
            "category": payload.category,
            "user_id": payload.user_id,
        }
        if payload.date:
            fields["date"] = payload.date
        fields = validate_expense_fields(fields)

        expense = await self.get_expense(expense_id)
        owner = await self.ensure_user_exists(fields["user_id"])
        return await self._apply(expense, fields), owner

    async def patch_expense(self, expense_id: str, payload: ExpensePatch) -> Tuple[Expense, User]:
        """Update any subset of title, amount, category, date and owner"""
        expense_id = parse_object_id(expense_id, "Invalid expense ID")

        provided = set(payload.model_fields_set) | set(payload.model_extra or {})
        if not provided:
            raise BadRequestError("Request body cannot be empty")

        updates = {
            name: getattr(payload, name)
            for name in EXPENSE_UPDATE_FIELDS
            if name in payload.model_fields_set
        }
        if not updates:
            raise BadRequestError(
                "No valid fields to update. Allowed fields: title, amount, category, date, userId"
            )

        fields = validate_expense_fields(updates)

        expense = await self.get_expense(expense_id)
        if "user_id" in fields and fields["user_id"] != expense.user_id:
            owner = await self.ensure_user_exists(fields["user_id"])
        else:
            owner = await self.db.get(User, expense.user_id)
        return await self._apply(expense, fields), owner

    async def delete_expense(self, expense_id: str) -> Expense:
        expense = await self.get_expense(expense_id)

        await self.db.delete(expense)
        await self.db.commit()

        logger.info("Expense deleted", expense_id=expense.id)
        return expense

    async def _apply(self, expense: Expense, fields: dict) -> Expense:
        for name, value in fields.items():
            setattr(expense, name, value)
        expense.updated_at = utcnow()

        await self.db.commit()
        await self.db.refresh(expense)

        logger.info("Expense updated", expense_id=expense.id, fields=sorted(fields))
        return expense


def get_expense_service(db: AsyncSession) -> ExpenseService:
    return ExpenseService(db)
