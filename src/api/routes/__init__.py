# File: src/api/routes/__init__.py
from .explorer import router as explorer_router
from .pages import router as pages_router

__all__ = ['explorer_router', 'pages_router']
