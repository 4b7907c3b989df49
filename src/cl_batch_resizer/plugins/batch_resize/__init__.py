"""Batch resize plugin."""

from .routes import create_router
from .task import BatchResizer

__all__ = ["BatchResizer", "create_router"]
