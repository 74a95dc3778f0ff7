from .sku_selector import (
    AttrRef,
    Attribute,
    Property,
    Sku,
    SelectionInfo,
    SelectionResult,
    SkuSelector,
    selection_key,
)
from .variant_navigation import VariantNavigationService

__all__ = [
    'AttrRef',
    'Attribute',
    'Property',
    'Sku',
    'SelectionInfo',
    'SelectionResult',
    'SkuSelector',
    'selection_key',
    'VariantNavigationService',
]
