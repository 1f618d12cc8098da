"""Catalog module: product listing, search and CRUD with hosted photos."""

from app.features.products.routes import router
from app.features.products.service import ProductService
from app.features.products.storage import (
    CloudinaryStorage,
    ObjectStorage,
    Photo,
    PhotoUpload,
    get_object_storage,
)

__all__ = [
    "CloudinaryStorage",
    "ObjectStorage",
    "Photo",
    "PhotoUpload",
    "ProductService",
    "get_object_storage",
    "router",
]
