"""Service layer for product reviews.

CRITICAL: A review mutation and the product's rating write-back happen in
the same transaction. The product row is locked (``SELECT ... FOR UPDATE``)
before the reviews are re-read, so concurrent mutations on one product
apply one at a time and the stored average always matches the reviews.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.exceptions import NotFoundError
from app.core.logging import get_logger
from app.features.dashboard.aggregations import RatingSummary, summarize_ratings
from app.features.records.models import Product, Review, User
from app.features.reviews.schemas import ReviewAuthor, ReviewCreate, ReviewResponse

logger = get_logger(__name__)


def to_response(review: Review) -> ReviewResponse:
    """Build the client view of a review with its author loaded."""
    return ReviewResponse(
        id=review.id,
        rating=review.rating,
        comment=review.comment,
        product=review.product_id,
        user=ReviewAuthor(id=review.user.id, name=review.user.name),
        created_at=review.created_at,
        updated_at=review.updated_at,
    )


class ReviewService:
    """Service for creating, listing and deleting reviews."""

    async def _lock_product(self, db: AsyncSession, product_id: str) -> Product:
        stmt = select(Product).where(Product.id == product_id).with_for_update()
        result = await db.execute(stmt)
        product = result.scalar_one_or_none()
        if product is None:
            raise NotFoundError("Product Not Found", details={"product_id": product_id})
        return product

    async def recompute_ratings(self, db: AsyncSession, product: Product) -> RatingSummary:
        """Recompute and store a product's average rating and review count.

        The caller must hold the product row lock.

        Args:
            db: Database session.
            product: Locked product.

        Returns:
            The stored summary.
        """
        stmt = select(Review.rating).where(Review.product_id == product.id)
        result = await db.execute(stmt)
        summary = summarize_ratings(list(result.scalars().all()))

        product.ratings = summary.average
        product.num_of_reviews = summary.count
        await db.flush()

        logger.info(
            "reviews.ratings_recomputed",
            product_id=product.id,
            ratings=summary.average,
            num_of_reviews=summary.count,
        )
        return summary

    async def list_reviews(self, db: AsyncSession, product_id: str) -> list[ReviewResponse]:
        """Reviews of one product with their authors, newest first."""
        stmt = (
            select(Review)
            .options(selectinload(Review.user))
            .where(Review.product_id == product_id)
            .order_by(Review.created_at.desc(), Review.id)
        )
        result = await db.execute(stmt)
        return [to_response(r) for r in result.scalars().all()]

    async def create_review(
        self,
        db: AsyncSession,
        product_id: str,
        user_id: str,
        data: ReviewCreate,
    ) -> Review:
        """Add a review and refresh the product's ratings.

        Raises:
            NotFoundError: If the product or user does not exist.
        """
        product = await self._lock_product(db, product_id)

        user = await db.get(User, user_id)
        if user is None:
            raise NotFoundError("User Not Found", details={"user_id": user_id})

        review = Review(
            rating=data.rating,
            comment=data.comment,
            product_id=product.id,
            user_id=user.id,
        )
        db.add(review)
        await db.flush()

        await self.recompute_ratings(db, product)

        logger.info(
            "reviews.created",
            review_id=review.id,
            product_id=product.id,
            user_id=user.id,
            rating=review.rating,
        )
        return review

    async def delete_review(self, db: AsyncSession, review_id: str) -> None:
        """Delete a review and refresh the product's ratings.

        Raises:
            NotFoundError: If the review does not exist.
        """
        review = await db.get(Review, review_id)
        if review is None:
            raise NotFoundError("Review Not Found", details={"review_id": review_id})

        product = await self._lock_product(db, review.product_id)
        await db.delete(review)
        await db.flush()

        await self.recompute_ratings(db, product)

        logger.info("reviews.deleted", review_id=review_id, product_id=product.id)
