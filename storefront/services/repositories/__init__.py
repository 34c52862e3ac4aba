"""Catalog repositories."""
from .base import BaseRepository
from .product_repo import ProductRepository

__all__ = ["BaseRepository", "ProductRepository"]
