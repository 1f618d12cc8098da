"""Catalog API routes.

Create and update accept ``multipart/form-data`` with the product fields
and a ``photos`` file list; everything else is JSON.
"""

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.logging import get_logger
from app.features.products.schemas import (
    CATEGORY_MAX_LENGTH,
    NAME_MAX_LENGTH,
    CategoryListResponse,
    ProductFields,
    ProductListResponse,
    ProductSearchResponse,
    SingleProductResponse,
    SortOrder,
)
from app.features.products.service import ProductService
from app.features.products.storage import ObjectStorage, PhotoUpload, get_object_storage
from app.features.records.filters import ProductSearchFilters
from app.shared.schemas import SuccessResponse

logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1/product", tags=["products"])


async def read_photos(photos: list[UploadFile] | None) -> list[PhotoUpload]:
    """Read uploaded files into memory, skipping empty parts."""
    uploads: list[PhotoUpload] = []
    for photo in photos or []:
        data = await photo.read()
        if not data:
            continue
        uploads.append(
            PhotoUpload(
                filename=photo.filename or "photo",
                content_type=photo.content_type or "application/octet-stream",
                data=data,
            )
        )
    return uploads


# =============================================================================
# Listing Endpoints
# =============================================================================


@router.get(
    "/latest",
    response_model=ProductListResponse,
    summary="Latest products",
    description="The 5 most recently created products, newest first.",
)
async def get_latest_products(db: AsyncSession = Depends(get_db)) -> ProductListResponse:
    """List the newest products."""
    service = ProductService()
    return ProductListResponse(products=await service.latest_products(db))


@router.get(
    "/categories",
    response_model=CategoryListResponse,
    summary="Product categories",
)
async def get_categories(db: AsyncSession = Depends(get_db)) -> CategoryListResponse:
    """List distinct categories."""
    service = ProductService()
    return CategoryListResponse(categories=await service.categories(db))


@router.get(
    "/admin-products",
    response_model=ProductListResponse,
    summary="All products (admin)",
)
async def get_admin_products(db: AsyncSession = Depends(get_db)) -> ProductListResponse:
    """List every product."""
    service = ProductService()
    return ProductListResponse(products=await service.admin_products(db))


@router.get(
    "/all",
    response_model=ProductSearchResponse,
    summary="Search products",
    description="""
Paginated storefront search.

**Filters** (all optional, combined with AND):
- `search`: case-insensitive substring of the product name
- `category`: exact category
- `price`: maximum price (inclusive)

**Ordering**: `sort=asc|desc` orders by price; otherwise newest first.

**Pagination**: `page` is 1-indexed; `totalPage` counts pages for the same filters.
""",
)
async def search_products(
    search: str | None = Query(None, description="Name substring (case-insensitive)."),
    sort: SortOrder | None = Query(None, description="Price ordering: asc or desc."),
    category: str | None = Query(None, description="Exact category."),
    price: float | None = Query(None, ge=0, description="Maximum price (inclusive)."),
    page: int = Query(1, ge=1, description="Page number (1-indexed)."),
    db: AsyncSession = Depends(get_db),
) -> ProductSearchResponse:
    """Search the catalog.

    Args:
        search: Name substring.
        sort: Price ordering.
        category: Exact category.
        price: Maximum price.
        page: Page number.
        db: Database session.

    Returns:
        One page of products with the total page count.
    """
    filters = ProductSearchFilters(
        search=search,
        category=category,
        max_price=price,
        sort=sort,
    )
    service = ProductService()
    return await service.search_products(db, filters, page=page)


# =============================================================================
# Product CRUD Endpoints
# =============================================================================


@router.post(
    "/new",
    response_model=SuccessResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a product",
    description="""
Create a product from a multipart form.

**Fields**: `name`, `price`, `stock`, `category`, `description` and at least
one file under `photos`. Photos are uploaded to object storage before the
product is saved.

**Errors**:
- 500 `Cloudinary Configuration Missing` when storage credentials are unset
- 400 `Please add Photos` when no photo is attached
- 400 `Please enter a category` when the category is blank
""",
)
async def create_product(
    name: str = Form(..., min_length=1, max_length=NAME_MAX_LENGTH),
    price: float = Form(..., ge=0),
    stock: int = Form(..., ge=0),
    category: str = Form(..., min_length=1, max_length=CATEGORY_MAX_LENGTH),
    description: str = Form(...),
    photos: list[UploadFile] | None = File(None),
    db: AsyncSession = Depends(get_db),
    storage: ObjectStorage = Depends(get_object_storage),
) -> SuccessResponse:
    """Create a product with photos.

    Args:
        name: Product name.
        price: Unit price.
        stock: Units in stock.
        category: Category name.
        description: Product description.
        photos: Photo files.
        db: Database session.
        storage: Photo storage.

    Returns:
        Success message.
    """
    uploads = await read_photos(photos)
    logger.info("products.create_request_received", name=name, photos=len(uploads))

    service = ProductService(storage)
    fields = ProductFields(
        name=name,
        price=price,
        stock=stock,
        category=category,
        description=description,
    )
    await service.create_product(db, fields, uploads)

    return SuccessResponse(message="Product Created Successfully")


@router.get(
    "/{product_id}",
    response_model=SingleProductResponse,
    summary="Get a product",
)
async def get_product(
    product_id: str,
    db: AsyncSession = Depends(get_db),
) -> SingleProductResponse:
    """Get one product by id (404 ``Product Not Found``)."""
    service = ProductService()
    return SingleProductResponse(product=await service.get_product(db, product_id))


@router.put(
    "/{product_id}",
    response_model=SuccessResponse,
    summary="Update a product",
    description="""
Update a product from a multipart form. Every field is optional; only the
ones sent are changed. Sending `photos` replaces all existing photos (new
ones are uploaded before the old ones are deleted).
""",
)
async def update_product(
    product_id: str,
    name: str | None = Form(None, max_length=NAME_MAX_LENGTH),
    price: float | None = Form(None, ge=0),
    stock: int | None = Form(None, ge=0),
    category: str | None = Form(None, max_length=CATEGORY_MAX_LENGTH),
    description: str | None = Form(None),
    photos: list[UploadFile] | None = File(None),
    db: AsyncSession = Depends(get_db),
    storage: ObjectStorage = Depends(get_object_storage),
) -> SuccessResponse:
    """Update a product.

    Args:
        product_id: Product id.
        name: New name.
        price: New price.
        stock: New stock.
        category: New category.
        description: New description.
        photos: Replacement photos.
        db: Database session.
        storage: Photo storage.

    Returns:
        Success message.
    """
    uploads = await read_photos(photos)
    service = ProductService(storage)
    fields = ProductFields(
        name=name or None,
        price=price,
        stock=stock,
        category=category or None,
        description=description or None,
    )
    await service.update_product(db, product_id, fields, uploads)

    return SuccessResponse(message="Product Updated Successfully")


@router.delete(
    "/{product_id}",
    response_model=SuccessResponse,
    summary="Delete a product",
    description="Delete a product, its hosted photos and its reviews.",
)
async def delete_product(
    product_id: str,
    db: AsyncSession = Depends(get_db),
    storage: ObjectStorage = Depends(get_object_storage),
) -> SuccessResponse:
    """Delete a product."""
    service = ProductService(storage)
    await service.delete_product(db, product_id)
    return SuccessResponse(message="Product Deleted Successfully")
