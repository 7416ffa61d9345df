"""Catalog read endpoints."""

from fastapi import APIRouter, Depends, Request

from src.storefront.api.http.deps import get_catalog_service, get_listing_params
from src.storefront.api.http.schemas import (
    PaginationOut,
    ProductListResponse,
    ProductOut,
)
from src.storefront.core.errors import ValidationError
from src.storefront.core.services import (
    CatalogQueryService,
    build_query_spec,
    parse_latest_limit,
)
from src.storefront.runtime.context import get_config

router = APIRouter(tags=["products"])


@router.get("/products", response_model=ProductListResponse)
def list_products(
    params: dict[str, str] = Depends(get_listing_params),
    catalog: CatalogQueryService = Depends(get_catalog_service),
) -> ProductListResponse:
    """Search, filter, sort and paginate the catalog."""
    spec = build_query_spec(params, get_config().catalog)
    page = catalog.list(spec)
    return ProductListResponse(
        products=[ProductOut.model_validate(item) for item in page.items],
        pagination=PaginationOut.model_validate(page.pagination.model_dump()),
    )


@router.get("/products/latest", response_model=list[ProductOut])
def latest_products(
    request: Request,
    catalog: CatalogQueryService = Depends(get_catalog_service),
) -> list[ProductOut]:
    """Most recently created products, ignoring all filters."""
    values = request.query_params.getlist("limit")
    if len(values) > 1:
        raise ValidationError("'limit' must be given at most once")
    limit = parse_latest_limit(values[0] if values else None, get_config().catalog)
    return [ProductOut.model_validate(item) for item in catalog.latest(limit)]


@router.get("/products/{product_id}", response_model=ProductOut)
def get_product(
    product_id: str,
    catalog: CatalogQueryService = Depends(get_catalog_service),
) -> ProductOut:
    return ProductOut.model_validate(catalog.get_by_id(product_id))


@router.get("/categories", response_model=list[str])
def list_categories(
    catalog: CatalogQueryService = Depends(get_catalog_service),
) -> list[str]:
    return catalog.distinct_categories()


@router.get("/brands", response_model=list[str])
def list_brands(
    catalog: CatalogQueryService = Depends(get_catalog_service),
) -> list[str]:
    return catalog.distinct_brands()
