"""Service layer for catalog operations.

Products own their hosted photos. New photos are uploaded before the row
is written and old ones are deleted only after it has been flushed; a
failed write removes the fresh uploads again.
"""

from collections.abc import Sequence

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.core.exceptions import (
    ConfigurationMissingError,
    DatabaseError,
    NotFoundError,
    UpstreamFailureError,
    ValidationMissingError,
)
from app.core.logging import get_logger
from app.features.products.schemas import (
    ProductFields,
    ProductResponse,
    ProductSearchResponse,
)
from app.features.products.storage import ObjectStorage, Photo, PhotoUpload
from app.features.records.filters import ProductSearchFilters
from app.features.records.models import Product
from app.shared.utils import page_offset, total_pages

logger = get_logger(__name__)


def normalize_category(category: str) -> str:
    """Categories are stored trimmed and lower-cased.

    Raises:
        ValidationMissingError: If nothing is left after trimming.
    """
    normalized = category.strip().lower()
    if not normalized:
        raise ValidationMissingError("Please enter a category")
    return normalized


class ProductService:
    """Service for catalog reads and writes.

    Args:
        storage: Photo storage used by create, update and delete.
    """

    def __init__(self, storage: ObjectStorage | None = None) -> None:
        self.settings = get_settings()
        self.storage = storage

    def _require_storage(self) -> ObjectStorage:
        if self.storage is None:
            raise RuntimeError("ProductService was built without object storage")
        return self.storage

    async def _get_or_404(self, db: AsyncSession, product_id: str) -> Product:
        product = await db.get(Product, product_id)
        if product is None:
            raise NotFoundError("Product Not Found", details={"product_id": product_id})
        return product

    # =========================================================================
    # Reads
    # =========================================================================

    async def latest_products(self, db: AsyncSession) -> list[ProductResponse]:
        """Newest products first, limited to ``latest_products_limit``."""
        stmt = (
            select(Product)
            .order_by(Product.created_at.desc(), Product.id)
            .limit(self.settings.latest_products_limit)
        )
        result = await db.execute(stmt)
        return [ProductResponse.model_validate(p) for p in result.scalars().all()]

    async def categories(self, db: AsyncSession) -> list[str]:
        """Distinct product categories, alphabetical."""
        stmt = select(Product.category).distinct().order_by(Product.category)
        result = await db.execute(stmt)
        return list(result.scalars().all())

    async def admin_products(self, db: AsyncSession) -> list[ProductResponse]:
        """Every product, newest first."""
        stmt = select(Product).order_by(Product.created_at.desc(), Product.id)
        result = await db.execute(stmt)
        return [ProductResponse.model_validate(p) for p in result.scalars().all()]

    async def get_product(self, db: AsyncSession, product_id: str) -> ProductResponse:
        """Get one product.

        Raises:
            NotFoundError: If the product does not exist.
        """
        product = await self._get_or_404(db, product_id)
        return ProductResponse.model_validate(product)

    async def search_products(
        self,
        db: AsyncSession,
        filters: ProductSearchFilters,
        page: int = 1,
    ) -> ProductSearchResponse:
        """Search the catalog with filters and pagination.

        Args:
            db: Database session.
            filters: Name, category, price ceiling and sort order.
            page: Page number (1-indexed).

        Returns:
            One page of products plus the page count for the same filters.
        """
        page_size = self.settings.product_per_page
        stmt = filters.apply(select(Product))

        count_stmt = select(func.count()).select_from(stmt.subquery())
        total_result = await db.execute(count_stmt)
        total = total_result.scalar_one()

        stmt = filters.order(stmt).offset(page_offset(page, page_size)).limit(page_size)
        result = await db.execute(stmt)
        products = result.scalars().all()

        logger.info(
            "products.searched",
            total=total,
            page=page,
            page_size=page_size,
            filters={
                "search": filters.search,
                "category": filters.category,
                "max_price": filters.max_price,
                "sort": filters.sort,
            },
        )

        return ProductSearchResponse(
            products=[ProductResponse.model_validate(p) for p in products],
            total_page=total_pages(total, page_size),
        )

    # =========================================================================
    # Writes
    # =========================================================================

    async def _discard(self, photos: Sequence[Photo]) -> None:
        """Remove freshly uploaded photos after a failed write."""
        if not photos:
            return
        try:
            await self._require_storage().delete([p.public_id for p in photos])
        except UpstreamFailureError as e:
            logger.warning(
                "products.orphaned_photos",
                public_ids=[p.public_id for p in photos],
                error=e.message,
            )

    async def _flush(self, db: AsyncSession, uploaded: Sequence[Photo], action: str) -> None:
        try:
            await db.flush()
        except SQLAlchemyError as e:
            logger.error(
                "products.save_failed",
                action=action,
                error=str(e),
                error_type=type(e).__name__,
                exc_info=True,
            )
            await self._discard(uploaded)
            raise DatabaseError(
                message=f"Failed to {action} product",
                details={"error": str(e)},
            ) from e

    async def create_product(
        self,
        db: AsyncSession,
        fields: ProductFields,
        photos: Sequence[PhotoUpload],
    ) -> Product:
        """Upload photos and create a product.

        Args:
            db: Database session.
            fields: Product fields (all required).
            photos: At least one photo.

        Returns:
            The new product.

        Raises:
            ConfigurationMissingError: If storage is not configured.
            ValidationMissingError: If no photo was sent or the category is blank.
            UpstreamFailureError: If an upload fails.
            DatabaseError: If the product cannot be saved; uploads are removed.
        """
        storage = self._require_storage()
        if not storage.is_configured():
            raise ConfigurationMissingError("Cloudinary Configuration Missing")
        if not photos:
            raise ValidationMissingError("Please add Photos")
        category = normalize_category(fields.category or "")

        uploaded = await storage.upload(photos)

        product = Product(
            name=fields.name,
            price=fields.price,
            stock=fields.stock,
            category=category,
            description=fields.description or "",
            photos=[p.to_record() for p in uploaded],
        )
        db.add(product)
        await self._flush(db, uploaded, "create")

        logger.info(
            "products.created",
            product_id=product.id,
            category=product.category,
            photos=len(uploaded),
        )
        return product

    async def update_product(
        self,
        db: AsyncSession,
        product_id: str,
        fields: ProductFields,
        photos: Sequence[PhotoUpload],
    ) -> Product:
        """Update provided fields and optionally replace the photos.

        Replacement photos are uploaded first and the old ones are deleted
        only once the row has been written. If either later step fails the
        new uploads are removed again and the error propagates, so the
        request transaction rolls back to the old photos.

        Raises:
            NotFoundError: If the product does not exist.
            ValidationMissingError: If the category is blank.
            UpstreamFailureError: If an upload or the old-photo delete fails.
            DatabaseError: If the product cannot be saved.
        """
        product = await self._get_or_404(db, product_id)

        changes = fields.model_dump(exclude_none=True)
        if "category" in changes:
            changes["category"] = normalize_category(changes["category"])

        uploaded: list[Photo] = []
        previous_ids: list[str] = []
        if photos:
            uploaded = await self._require_storage().upload(photos)
            previous_ids = [p["public_id"] for p in product.photos]
            product.photos = [p.to_record() for p in uploaded]

        for key, value in changes.items():
            setattr(product, key, value)

        await self._flush(db, uploaded, "update")

        if previous_ids:
            try:
                await self._require_storage().delete(previous_ids)
            except UpstreamFailureError:
                await self._discard(uploaded)
                raise

        logger.info(
            "products.updated",
            product_id=product_id,
            fields=sorted(changes),
            photos_replaced=bool(photos),
        )
        return product

    async def delete_product(self, db: AsyncSession, product_id: str) -> None:
        """Delete a product, its photos and (by cascade) its reviews.

        The row is removed first; a failed photo delete then rolls the
        request transaction back.

        Raises:
            NotFoundError: If the product does not exist.
            UpstreamFailureError: If the photos cannot be deleted.
        """
        product = await self._get_or_404(db, product_id)
        public_ids = [p["public_id"] for p in product.photos]

        await db.delete(product)
        await self._flush(db, [], "delete")
        await self._require_storage().delete(public_ids)

        logger.info("products.deleted", product_id=product_id)
