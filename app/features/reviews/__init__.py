"""Product reviews with transactional rating write-back."""

from app.features.reviews.routes import router
from app.features.reviews.service import ReviewService

__all__ = ["ReviewService", "router"]
