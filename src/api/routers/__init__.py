"""
API Routers
"""
from . import users, expenses, summary

__all__ = ['users', 'expenses', 'summary']
