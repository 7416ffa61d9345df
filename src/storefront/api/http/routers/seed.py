"""Catalog reseed endpoint."""

from fastapi import APIRouter, Depends

from src.storefront.api.http.deps import get_catalog_service
from src.storefront.api.http.schemas import SeedResponse
from src.storefront.core.services import CatalogQueryService
from src.storefront.core.services.catalog import generate_seed_products
from src.storefront.runtime.context import get_config

router = APIRouter(tags=["seed"])


@router.post("/seed", response_model=SeedResponse)
def seed_catalog(
    catalog: CatalogQueryService = Depends(get_catalog_service),
) -> SeedResponse:
    """Replace the catalog with freshly generated demo products."""
    products = generate_seed_products(get_config().catalog.seed_count)
    count = catalog.reseed(products)
    return SeedResponse(message="Database seeded successfully", count=count)
