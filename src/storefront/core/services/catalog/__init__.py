from .catalog_service import CatalogQueryService, PaginationMeta, ProductPage
from .query_builder import build_query_spec, parse_latest_limit
from .seeding import generate_seed_products, load_seed_file

__all__ = [
    "CatalogQueryService",
    "PaginationMeta",
    "ProductPage",
    "build_query_spec",
    "generate_seed_products",
    "load_seed_file",
    "parse_latest_limit",
]
