"""
User Service - Business logic for user operations.

Keeps request parsing in the routers and persistence rules here: every write
runs the explicit validation step, then the uniqueness check, then the
database call.
"""
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from ..exceptions import BadRequestError, ConflictError, ForbiddenError, NotFoundError
from ..models.user import (
    ChangeEmailRequest,
    UserCreate,
    UserPatch,
    UserReplace,
    USER_UPDATE_FIELDS,
)
from ..tables import User, utcnow
from ..validators import normalize_email, parse_object_id, validate_user_fields

logger = structlog.get_logger()


class UserService:
    """
    Service for user business operations.

    Separates business logic from HTTP layer.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_user(self, user_id: str) -> User:
        """
        Get user by ID.

        Raises:
            BadRequestError: Malformed id
            NotFoundError: No user with that id
        """
        user_id = parse_object_id(user_id, "Invalid user ID")
        user = await self.db.get(User, user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    async def find_by_email(self, email: str) -> Optional[User]:
        result = await self.db.execute(
            select(User).where(User.email == normalize_email(email))
        )
        return result.scalars().first()

    async def list_users(self, email: Optional[str] = None) -> List[User]:
        """List users newest first, optionally matching one email exactly"""
        query = select(User)
        if email:
            query = query.where(User.email == normalize_email(email))
        query = query.order_by(User.created_at.desc(), User.id.desc())

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def create_user(self, payload: UserCreate) -> User:
        """Create a user after validation and the email uniqueness check"""
        if not payload.name or not payload.email or payload.monthly_budget is None:
            raise BadRequestError("Name, email, and monthlyBudget are required")

        fields = validate_user_fields({
            "name": payload.name,
            "email": payload.email,
            "monthly_budget": payload.monthly_budget,
        })
        await self._ensure_email_available(fields["email"])

        now = utcnow()
        user = User(
            name=fields["name"],
            email=fields["email"],
            monthly_budget=fields["monthly_budget"],
            created_at=now,
            updated_at=now,
        )
        self.db.add(user)
        await self._commit()
        await self.db.refresh(user)

        logger.info("User created", user_id=user.id)
        return user

    async def replace_user(self, user_id: str, payload: UserReplace) -> User:
        """Replace name and monthly budget; both are required"""
        user_id = parse_object_id(user_id, "Invalid user ID")
        self._reject_email(payload)

        if not payload.name or payload.monthly_budget is None:
            raise BadRequestError("Name and monthlyBudget are required")

        fields = validate_user_fields({
            "name": payload.name,
            "monthly_budget": payload.monthly_budget,
        })

        user = await self.get_user(user_id)
        return await self._apply(user, fields)

    async def patch_user(self, user_id: str, payload: UserPatch) -> User:
        """Update any subset of name and monthly budget"""
        user_id = parse_object_id(user_id, "Invalid user ID")

        provided = set(payload.model_fields_set) | set(payload.model_extra or {})
        if not provided:
            raise BadRequestError("Request body cannot be empty")
        self._reject_email(payload)

        updates = {
            name: getattr(payload, name)
            for name in USER_UPDATE_FIELDS
            if name in payload.model_fields_set
        }
        if not updates:
            raise BadRequestError("No valid fields to update. Allowed fields: name, monthlyBudget")

        fields = validate_user_fields(updates)

        user = await self.get_user(user_id)
        return await self._apply(user, fields)

    async def change_email(self, user_id: str, payload: ChangeEmailRequest) -> User:
        """
        Change a user's email after verifying the current one.

        Raises:
            BadRequestError: Missing fields or invalid new email
            ForbiddenError: currentEmail does not match the stored email
            ConflictError: newEmail belongs to another user
        """
        user_id = parse_object_id(user_id, "Invalid user ID")

        if not payload.current_email or not payload.new_email:
            raise BadRequestError("currentEmail and newEmail are required")

        new_email = validate_user_fields({"email": payload.new_email})["email"]

        user = await self.get_user(user_id)
        if normalize_email(payload.current_email) != user.email:
            logger.warning("Email change rejected", user_id=user.id, reason="current email mismatch")
            raise ForbiddenError("Current email does not match our records")

        await self._ensure_email_available(new_email, exclude_id=user.id)

        user = await self._apply(user, {"email": new_email})
        logger.info("User email changed", user_id=user.id)
        return user

    async def _apply(self, user: User, fields: dict) -> User:
        for name, value in fields.items():
            setattr(user, name, value)
        user.updated_at = utcnow()

        await self._commit()
        await self.db.refresh(user)

        logger.info("User updated", user_id=user.id, fields=sorted(fields))
        return user

    async def _ensure_email_available(self, email: str, exclude_id: Optional[str] = None):
        existing = await self.find_by_email(email)
        if existing is not None and existing.id != exclude_id:
            raise ConflictError("Email already exists")

    @staticmethod
    def _reject_email(payload):
        if "email" in (payload.model_extra or {}):
            raise BadRequestError(
                "Email cannot be updated here. Use POST /api/users/:id/change-email"
            )

    async def _commit(self):
        try:
            await self.db.commit()
        except IntegrityError:
            # Unique index caught a concurrent duplicate the pre-check missed
            await self.db.rollback()
            raise ConflictError("Email already exists")


def get_user_service(db: AsyncSession) -> UserService:
    return UserService(db)
