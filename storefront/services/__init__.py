# Services Module
from .catalog import Catalog, ProductLookup, get_catalog, init_catalog
from .models import Product

__all__ = ["Catalog", "ProductLookup", "Product", "get_catalog", "init_catalog"]
