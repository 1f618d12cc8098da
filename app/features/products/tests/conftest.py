"""Test fixtures for the catalog module."""

import pytest

from app.core.config import Settings
from app.features.products.storage import CloudinaryStorage, PhotoUpload


@pytest.fixture
def photo_files() -> list[tuple[str, tuple[str, bytes, str]]]:
    """Two multipart photo parts for httpx ``files=``."""
    return [
        ("photos", ("front.png", b"\x89PNG front", "image/png")),
        ("photos", ("back.png", b"\x89PNG back", "image/png")),
    ]


@pytest.fixture
def product_form() -> dict[str, str]:
    """Complete product form fields."""
    return {
        "name": "Mechanical Keyboard",
        "price": "89.5",
        "stock": "12",
        "category": "Electronics",
        "description": "Hot-swappable switches",
    }


@pytest.fixture
def sample_upload() -> PhotoUpload:
    return PhotoUpload(filename="front.png", content_type="image/png", data=b"abc")


@pytest.fixture
def cloudinary_storage() -> CloudinaryStorage:
    """Cloudinary storage with explicit test credentials."""
    return CloudinaryStorage(
        Settings(
            cloud_name="demo",
            cloud_api_key="key",
            cloud_api_secret="secret",
            cloud_folder="products",
        )
    )
