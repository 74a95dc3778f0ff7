"""
Catalog models for products with selectable variants.

Model Hierarchy:
- Product: Base product (e.g., "Caderno Moth")
- AttributeType: Dynamic attribute types (Model, Size, Color)
- AttributeOption: Values for each attribute type, per product (A4, A3, azul)
- Variant: Individual SKU with price and stock
- VariantAttribute: Links a variant to one option per attribute type
"""

from .product import Product
from .attribute import AttributeType, AttributeOption
from .variant import Variant, VariantAttribute

__all__ = [
    'Product',
    'AttributeType',
    'AttributeOption',
    'Variant',
    'VariantAttribute',
]
