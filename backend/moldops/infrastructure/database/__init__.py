from .base import Base
from .session import async_session_factory, build_engine, build_session_factory, engine, get_async_url
from .models import TableRowModel

__all__ = [
    "Base",
    "engine",
    "async_session_factory",
    "build_engine",
    "build_session_factory",
    "get_async_url",
    "TableRowModel",
]
