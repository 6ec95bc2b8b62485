"""Product catalog: models, stores, mutation coordinator and queries."""

from stockroom.catalog.models import Product, ProductChanges, ProductFields
from stockroom.catalog.store import ProductStore

__all__ = ["Product", "ProductChanges", "ProductFields", "ProductStore"]
