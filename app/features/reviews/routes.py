"""Product review API routes (mounted under the catalog prefix)."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.logging import get_logger
from app.features.reviews.schemas import ReviewCreate, ReviewListResponse
from app.features.reviews.service import ReviewService
from app.shared.schemas import SuccessResponse

logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1/product", tags=["reviews"])


@router.get(
    "/reviews/{product_id}",
    response_model=ReviewListResponse,
    summary="List reviews of a product",
    description="Reviews of one product, newest first, each with its author's `_id` and `name`.",
)
async def list_reviews(
    product_id: str,
    db: AsyncSession = Depends(get_db),
) -> ReviewListResponse:
    """List reviews of a product."""
    service = ReviewService()
    return ReviewListResponse(reviews=await service.list_reviews(db, product_id))


@router.post(
    "/review/new/{product_id}",
    response_model=SuccessResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a review",
    description="""
Add a review to a product on behalf of the user given by `?id=`.

The product's `ratings` (average, 1 decimal) and `numOfReviews` are
recomputed in the same transaction.
""",
)
async def create_review(
    product_id: str,
    request: ReviewCreate,
    user_id: str = Query(..., alias="id", description="Reviewing user's id."),
    db: AsyncSession = Depends(get_db),
) -> SuccessResponse:
    """Add a review.

    Args:
        product_id: Reviewed product.
        request: Rating and comment.
        user_id: Author id.
        db: Database session.

    Returns:
        Success message.
    """
    service = ReviewService()
    await service.create_review(db, product_id, user_id, request)
    return SuccessResponse(message="Review Added Successfully")


@router.delete(
    "/review/{review_id}",
    response_model=SuccessResponse,
    summary="Delete a review",
)
async def delete_review(
    review_id: str,
    db: AsyncSession = Depends(get_db),
) -> SuccessResponse:
    """Delete a review and refresh the product's ratings."""
    service = ReviewService()
    await service.delete_review(db, review_id)
    return SuccessResponse(message="Review Deleted Successfully")
