"""
Database tables for users and expenses
"""
import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, Float, DateTime, ForeignKey, Index

from .database import Base


def utcnow() -> datetime:
    """Naive UTC now; every timestamp column stores naive UTC"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def new_id() -> str:
    return str(uuid.uuid4())


class User(Base):
    """Account holder with a monthly budget"""
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(255), nullable=False)
    email = Column(String(320), nullable=False, unique=True, index=True)
    monthly_budget = Column(Float, nullable=False)

    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    def __repr__(self):
        return f"<User({self.id}, {self.email})>"


class Expense(Base):
    """Single spending record owned by a user"""
    __tablename__ = "expenses"

    id = Column(String(36), primary_key=True, default=new_id)
    title = Column(String(500), nullable=False)
    amount = Column(Float, nullable=False)
    category = Column(String(30), nullable=False)
    date = Column(DateTime, nullable=False, default=utcnow)

    # Existence of the owner is checked by the service before each write
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False)

    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    __table_args__ = (
        Index("ix_expenses_user_date", "user_id", "date"),
        Index("ix_expenses_user_category", "user_id", "category"),
    )

    def __repr__(self):
        return f"<Expense({self.id}, {self.title}, {self.amount})>"
