# app/api/__init__.py
from app.api.errors import register_error_handlers

__all__ = ["register_error_handlers"]
