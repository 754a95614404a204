"""
API Backend Module
"""
from .main import app, create_app
from .config import Settings, get_settings
from .database import Database, get_db

__all__ = ['app', 'create_app', 'Settings', 'get_settings', 'Database', 'get_db']
